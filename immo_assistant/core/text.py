"""Text folding helpers shared by extractors, lookups and locators."""

from __future__ import annotations

import re
import unicodedata

_NON_SLUG = re.compile(r"[^a-z0-9]+")


def fold(text: str) -> str:
    """Lowercase and strip diacritics so "Àngers" and "angers" compare equal."""

    decomposed = unicodedata.normalize("NFD", text or "")
    stripped = "".join(char for char in decomposed if not unicodedata.combining(char))
    return stripped.lower()


def slugify(text: str) -> str:
    return _NON_SLUG.sub("-", fold(text)).strip("-")
