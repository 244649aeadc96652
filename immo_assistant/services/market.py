"""Deterministic builder for market price page locators."""

from __future__ import annotations

from dataclasses import dataclass

from immo_assistant.core.text import slugify
from immo_assistant.planner.vocabulary import DEFAULT_VOCABULARY, Vocabulary

DEFAULT_BASE_URL = "https://www.meilleursagents.com/prix-immobilier/"


@dataclass(slots=True, frozen=True)
class MarketReference:
    """Locality targeted by a full analysis and its price page locator."""

    city: str
    postal_code: str
    arrondissement: int | None
    locator_url: str


def locality_slug(
    city: str,
    postal_code: str,
    arrondissement: int | None = None,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
) -> str:
    slug = slugify(city)
    if arrondissement and vocabulary.is_arrondissement_city(city):
        return f"{slug}-{arrondissement}eme-arrondissement-{postal_code}"
    return f"{slug}-{postal_code}"


def build_market_reference(
    city: str,
    postal_code: str,
    arrondissement: int | None = None,
    *,
    base_url: str = DEFAULT_BASE_URL,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
) -> MarketReference:
    """Build the locator passed to the generative service as a hint.

    The URL is never fetched nor checked for existence.
    """

    base = base_url if base_url.endswith("/") else base_url + "/"
    slug = locality_slug(city, postal_code, arrondissement, vocabulary)
    return MarketReference(
        city=city,
        postal_code=postal_code,
        arrondissement=arrondissement,
        locator_url=f"{base}{slug}/",
    )
