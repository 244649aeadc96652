"""Slot extractors pulling city, postal code and arrondissement out of text."""

from __future__ import annotations

import re

from immo_assistant.core.text import fold
from immo_assistant.planner.vocabulary import DEFAULT_VOCABULARY, Vocabulary

# Any five-digit token matches, including prices such as "25000".
POSTAL_CODE_PATTERN = re.compile(r"\b([0-9]{5})\b")

ARRONDISSEMENT_PATTERN = re.compile(
    r"\b([0-9]{1,2})\s*(?:er|ème|eme|e)?\s*(?:arrondissement)?\b",
    re.IGNORECASE,
)

_UPPER = "A-ZÀ-ÖØ-Þ"
_WORD = r"A-Za-zÀ-ÖØ-öø-ÿ'\-"
CITY_AFTER_PREPOSITION = re.compile(
    rf"\b(?:[àÀ]|[aA]|[dD]ans|[sS]ur|[vV]ers)\s+([{_UPPER}][{_WORD}]*(?:[ ]+[{_UPPER}][{_WORD}]*)*)"
)

MIN_ARRONDISSEMENT = 1
MAX_ARRONDISSEMENT = 20


def extract_postal_code(text: str) -> str | None:
    match = POSTAL_CODE_PATTERN.search(text or "")
    return match.group(1) if match else None


def extract_arrondissement(text: str) -> int | None:
    """Return the first number in 1..20 written as "11", "11e", "1er arrondissement"..."""

    for match in ARRONDISSEMENT_PATTERN.finditer(text or ""):
        value = int(match.group(1))
        if MIN_ARRONDISSEMENT <= value <= MAX_ARRONDISSEMENT:
            return value
    return None


def extract_city_guess(text: str, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> str | None:
    """Guess the city the user is talking about.

    Known cities win over the preposition heuristic so "à Belleville, Paris"
    resolves to Paris and not to the neighbourhood. When several known cities
    appear, the last mention is kept.
    """

    folded = fold(text or "")
    best: tuple[int, str] | None = None
    for city in vocabulary.gazetteer:
        position = folded.rfind(fold(city))
        if position < 0:
            continue
        if best is None or position > best[0]:
            best = (position, city)
    if best is not None:
        return best[1]

    match = CITY_AFTER_PREPOSITION.search(text or "")
    if match:
        # The phrase pattern stops at the first punctuation mark.
        candidate = match.group(1).strip(" -'")
        if len(candidate) >= 2:
            return candidate
    return None
