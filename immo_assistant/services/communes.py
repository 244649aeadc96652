"""Postal code resolution against the public French commune directory."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable

import httpx

from immo_assistant.core.text import fold

DEFAULT_COMMUNES_URL = "https://geo.api.gouv.fr/communes?fields=nom,code,codesPostaux&format=json"


@dataclass(slots=True, frozen=True)
class Commune:
    name: str
    postal_codes: tuple[str, ...]


def parse_communes(payload: Any) -> list[Commune]:
    """Turn the directory JSON into communes, skipping malformed records."""

    if not isinstance(payload, list):
        raise ValueError("commune directory payload is not a list")

    communes: list[Commune] = []
    for record in payload:
        if not isinstance(record, dict):
            continue
        name = record.get("nom")
        codes = record.get("codesPostaux") or []
        if not isinstance(name, str) or not isinstance(codes, list):
            continue
        communes.append(Commune(name=name, postal_codes=tuple(str(code) for code in codes)))
    return communes


def match_postal_code(city: str, communes: Iterable[Commune]) -> str | None:
    """First postal code of the first commune whose folded name equals,
    contains or is contained in the folded city name."""

    query = fold(city).strip()
    if not query:
        return None

    for commune in communes:
        name = fold(commune.name).strip()
        if not name:
            continue
        if name == query or query in name or name in query:
            return commune.postal_codes[0] if commune.postal_codes else None
    return None


class CommuneDirectory:
    """HTTP client for the commune list; one GET per lookup."""

    def __init__(
        self,
        url: str = DEFAULT_COMMUNES_URL,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self._transport = transport

    async def fetch(self) -> list[Commune]:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.get(self.url, headers={"Accept": "application/json"})
            response.raise_for_status()
            return parse_communes(response.json())


class PostalCodeResolver:
    """Resolve a city name to a postal code, or ``None``.

    A missing match and a failing directory are the same outcome for
    callers: the user gets asked for the postal code.
    """

    def __init__(self, directory: CommuneDirectory) -> None:
        self.directory = directory
        self._logger = logging.getLogger("immo.communes")

    async def resolve(self, city: str) -> str | None:
        try:
            communes = await self.directory.fetch()
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            self._logger.warning("Commune lookup failed for %r: %s", city, exc)
            return None

        postal_code = match_postal_code(city, communes)
        if postal_code is None:
            self._logger.info("No postal code found for %r among %d communes", city, len(communes))
        return postal_code
