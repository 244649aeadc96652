"""Generative-text client and the result types it produces."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Mapping, Union

import httpx

from immo_assistant.core.errors import UpstreamError, UpstreamTimeoutError


@dataclass(slots=True, frozen=True)
class RawText:
    """Free-text completion."""

    text: str


@dataclass(slots=True, frozen=True)
class Structured:
    """Completion decoded into the requested schema (extra keys allowed)."""

    fields: dict[str, Any] = field(default_factory=dict)


GenerationResult = Union[RawText, Structured]


class GenerativeClient(ABC):
    """Single-shot prompt invocation, optionally grounded or schema-bound."""

    name: str

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        *,
        use_internet: bool = False,
        schema: Mapping[str, Any] | None = None,
    ) -> GenerationResult:
        """Invoke the model once. Never retries."""

    def describe(self) -> str:
        return self.name


class OpenRouterClient(GenerativeClient):
    """OpenAI-compatible chat completions over OpenRouter.

    Grounding uses the ``web`` plugin; structured output uses a JSON schema
    response format. A completion that cannot be decoded as a JSON object is
    returned as raw text instead of failing the request.
    """

    name = "openrouter"

    def __init__(
        self,
        api_key: str | None,
        *,
        model: str,
        base_url: str = "https://openrouter.ai/api/v1",
        referer: str | None = None,
        title: str | None = None,
        timeout: float = 90.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._endpoint = f"{base_url.rstrip('/')}/chat/completions"
        self._referer = referer
        self._title = title
        self._timeout = timeout
        self._transport = transport
        self._logger = logging.getLogger("immo.llm")

    def describe(self) -> str:
        return f"{self.name} ({self._model})"

    def _headers(self) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        if self._referer:
            headers["HTTP-Referer"] = self._referer
        if self._title:
            headers["X-Title"] = self._title
        return headers

    def build_payload(
        self,
        prompt: str,
        *,
        use_internet: bool = False,
        schema: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "model": self._model,
            "messages": [{"role": "user", "content": prompt}],
        }
        if use_internet:
            payload["plugins"] = [{"id": "web"}]
        if schema is not None:
            payload["response_format"] = {
                "type": "json_schema",
                "json_schema": {"name": "market_snapshot", "strict": False, "schema": dict(schema)},
            }
        return payload

    async def generate(
        self,
        prompt: str,
        *,
        use_internet: bool = False,
        schema: Mapping[str, Any] | None = None,
    ) -> GenerationResult:
        if not self._api_key:
            raise UpstreamError("generative service is not configured (OPENROUTER_API_KEY missing)")

        payload = self.build_payload(prompt, use_internet=use_internet, schema=schema)
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(self._endpoint, headers=self._headers(), json=payload)
                response.raise_for_status()
                data = response.json()
        except httpx.TimeoutException as exc:
            self._logger.warning("Generative call timed out after %.0fs", self._timeout)
            raise UpstreamTimeoutError(f"generative service timed out after {self._timeout:.0f}s") from exc
        except httpx.HTTPStatusError as exc:
            raise UpstreamError(f"generative service returned HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise UpstreamError(f"generative service unreachable: {exc}") from exc
        except ValueError as exc:
            raise UpstreamError("generative service returned invalid JSON") from exc

        content = _completion_text(data)
        if content is None:
            raise UpstreamError("generative service returned an empty completion")

        if schema is None:
            return RawText(content.strip())
        return decode_structured(content)


def _completion_text(data: Any) -> str | None:
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return None
    if not isinstance(content, str) or not content.strip():
        return None
    return content


def decode_structured(content: str) -> GenerationResult:
    text = content.strip()
    if text.startswith("```"):
        text = text.strip("`")
        if text.lower().startswith("json"):
            text = text[4:]
    try:
        # NaN and Infinity literals decode as absent values.
        decoded = json.loads(text, parse_constant=lambda _literal: None)
    except json.JSONDecodeError:
        return RawText(content.strip())
    if not isinstance(decoded, dict):
        return RawText(content.strip())
    return Structured(fields=decoded)
