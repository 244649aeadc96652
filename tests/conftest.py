from __future__ import annotations

import json
import os
from pathlib import Path

import pytest

# Settings are cached on first import of the app; pin them before that happens.
os.environ["AUTH_ENABLED"] = "true"
os.environ["API_KEYS"] = '["test-key"]'
os.environ.pop("OPENROUTER_API_KEY", None)

from immo_assistant.services.llm import GenerativeClient, RawText  # noqa: E402

API_HEADERS = {"x-api-key": "test-key"}


class FakeLLM(GenerativeClient):
    """Records every prompt and replays a canned result or error."""

    name = "fake"

    def __init__(self, result=None, error: Exception | None = None) -> None:
        self.result = result if result is not None else RawText("Réponse de test")
        self.error = error
        self.calls: list[dict] = []

    async def generate(self, prompt, *, use_internet=False, schema=None):
        self.calls.append({"prompt": prompt, "use_internet": use_internet, "schema": schema})
        if self.error is not None:
            raise self.error
        return self.result


class FakeResolver:
    def __init__(self, postal_codes: dict[str, str] | None = None) -> None:
        self.postal_codes = postal_codes or {}
        self.calls: list[str] = []

    async def resolve(self, city: str) -> str | None:
        self.calls.append(city)
        return self.postal_codes.get(city)


@pytest.fixture(scope="session")
def fixtures_dir() -> Path:
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def communes_payload(fixtures_dir: Path) -> list:
    return json.loads((fixtures_dir / "communes_sample.json").read_text(encoding="utf-8"))


@pytest.fixture
def chat_bordeaux_payload(fixtures_dir: Path) -> dict:
    return json.loads((fixtures_dir / "chat_bordeaux.json").read_text(encoding="utf-8"))


@pytest.fixture
def fake_llm() -> FakeLLM:
    return FakeLLM()


@pytest.fixture
def fake_resolver() -> FakeResolver:
    return FakeResolver({"Angers": "49000", "Saint-Étienne": "42000"})


@pytest.fixture
def api_headers() -> dict:
    return dict(API_HEADERS)
