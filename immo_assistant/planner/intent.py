"""Keyword-based real-estate intent classifier."""

from __future__ import annotations

from typing import Sequence

from immo_assistant.core.text import fold
from immo_assistant.memory.context import build_recent_context
from immo_assistant.memory.models import Message
from immo_assistant.planner.vocabulary import DEFAULT_VOCABULARY, Vocabulary

GROUNDING_MAX_TURNS = 6


class IntentClassifier:
    """Two-tier keyword vote: strong vocabulary is authoritative, market
    vocabulary only counts together with a price, rent or yield term."""

    def __init__(self, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> None:
        self.vocabulary = vocabulary

    def describe(self) -> str:
        return f"Keyword intent classifier (vocabulary {self.vocabulary.version})"

    def is_real_estate(self, text: str | None) -> bool:
        if not text or not isinstance(text, str):
            return False

        lowered = fold(text)
        vocab = self.vocabulary
        has_strong = vocab.has_any(lowered, vocab.strong)
        has_market = vocab.has_any(lowered, vocab.market)
        has_non_immo = vocab.has_any(lowered, vocab.non_immo)

        if has_non_immo and not (has_strong or has_market):
            return False

        return has_strong or (has_market and vocab.has_any(lowered, vocab.yield_terms))

    def should_use_internet(
        self,
        message: str,
        history: Sequence[Message],
        max_turns: int = GROUNDING_MAX_TURNS,
    ) -> bool:
        """Whether the final analysis call is worth grounding with live web data.

        Looser than the main gate: the conversation is already in-domain, the
        only question left is whether fresh figures are wanted.
        """

        if self.vocabulary.has_any(fold(message or ""), self.vocabulary.data_terms):
            return True
        return self.is_real_estate(build_recent_context(history, message or "", max_turns))


_default_classifier = IntentClassifier()


def is_real_estate_intent(text: str | None) -> bool:
    return _default_classifier.is_real_estate(text)


def should_use_internet(message: str, history: Sequence[Message]) -> bool:
    return _default_classifier.should_use_internet(message, history)
