"""Keyword lists and gazetteer used by the intent and slot heuristics.

The lists are plain data: callers may build their own ``Vocabulary`` to
extend or narrow them without touching the control logic. Comparisons are
done on folded text (see ``immo_assistant.core.text.fold``), so entries may
keep their accents.
"""

from __future__ import annotations

from dataclasses import dataclass

from immo_assistant.core.text import fold

VOCABULARY_VERSION = "2024.1"

STRONG_KEYWORDS = (
    "invest",
    "investissement",
    "locatif",
    "rendement",
    "rentabilité",
    "cashflow",
    "cash-flow",
    "loyer",
    "loyers",
    "prix au m2",
    "prix/m2",
    "prix m2",
    "prix immobilier",
    "acheter",
    "achat",
    "appartement",
    "maison",
    "studio",
    "t1",
    "t2",
    "t3",
    "immeuble",
    "colocation",
    "lmnp",
    "pinel",
    "dpe",
    "taxe foncière",
    "charges",
    "meilleursagents",
    "prix-immobilier",
    "cap rate",
    "vacance",
    "vacance locative",
)

MARKET_KEYWORDS = (
    "analyse",
    "marché",
    "moyenne",
    "médian",
    "evolution",
    "tendance",
    "compar",
    "quartier",
    "où investir",
    "meilleur quartier",
    "prix",
    "loyer",
)

NON_IMMO_KEYWORDS = (
    "code",
    "bug",
    "javascript",
    "deno",
    "api",
    "react",
    "typescript",
    "voiture",
    "auto",
    "moteur",
    "pneu",
    "contrôle technique",
    "inspection",
    "salut",
    "bonjour",
    "merci",
    "lol",
)

YIELD_KEYWORDS = ("prix", "loyer", "rendement")

DATA_KEYWORDS = ("source", "données", "chiffres", "meilleursagents", "prix", "loyer", "rendement")

GAZETTEER = (
    "Marseille",
    "Paris",
    "Lyon",
    "Bordeaux",
    "Toulouse",
    "Nantes",
    "Lille",
    "Nice",
    "Strasbourg",
    "Montpellier",
    "Rennes",
    "Grenoble",
    "Dijon",
    "Angers",
    "Reims",
)

ARRONDISSEMENT_CITIES = ("Paris", "Marseille", "Lyon")


def _folded(words: tuple[str, ...]) -> tuple[str, ...]:
    return tuple(fold(word) for word in words)


@dataclass(frozen=True)
class Vocabulary:
    """Versioned bundle of the heuristic word lists."""

    strong: tuple[str, ...] = STRONG_KEYWORDS
    market: tuple[str, ...] = MARKET_KEYWORDS
    non_immo: tuple[str, ...] = NON_IMMO_KEYWORDS
    yield_terms: tuple[str, ...] = YIELD_KEYWORDS
    data_terms: tuple[str, ...] = DATA_KEYWORDS
    gazetteer: tuple[str, ...] = GAZETTEER
    arrondissement_cities: tuple[str, ...] = ARRONDISSEMENT_CITIES
    version: str = VOCABULARY_VERSION

    # Plain substring match on folded text. Known accidental hits: "marché" also
    # matches "ça marche" or "démarche", and "où investir" matches "ou investir".
    # Market words alone never pass the intent gate, and "invest" is strong anyway.
    def has_any(self, folded_text: str, words: tuple[str, ...]) -> bool:
        return any(word in folded_text for word in _folded(words))

    def is_arrondissement_city(self, city: str | None) -> bool:
        if not city:
            return False
        return fold(city).strip() in _folded(self.arrondissement_cities)


DEFAULT_VOCABULARY = Vocabulary()
