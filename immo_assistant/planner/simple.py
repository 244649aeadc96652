"""Rule-based slot planner for the market-analysis dialogue."""

from __future__ import annotations

from dataclasses import replace
from typing import Sequence

from immo_assistant.planner.base import Planner
from immo_assistant.planner.extractors import (
    extract_arrondissement,
    extract_city_guess,
    extract_postal_code,
)
from immo_assistant.planner.types import (
    STATE_ACTIONS,
    ConversationState,
    ExtractedSlots,
    PlannerDecision,
)
from immo_assistant.planner.vocabulary import DEFAULT_VOCABULARY, Vocabulary


class RuleBasedPlanner(Planner):
    """Recomputes the dialogue state from scratch on every turn.

    There is no stored state: a user who corrects the city or postal code in
    a later message is simply re-routed by the next evaluation.
    """

    def __init__(self, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> None:
        self.vocabulary = vocabulary

    def describe(self) -> str:
        return "Rule-based slot planner (city > arrondissement > postal code)"

    def extract(self, context: str) -> ExtractedSlots:
        return ExtractedSlots(
            city=extract_city_guess(context, self.vocabulary),
            postal_code=extract_postal_code(context),
            arrondissement=extract_arrondissement(context),
        )

    def extract_from_turns(self, turns: Sequence[str]) -> ExtractedSlots:
        """Extract slots from the latest turn naming a city and the turns after it.

        Earlier turns are ignored once a city is named again, so a corrected
        city is never paired with the postal code or arrondissement of the
        one it replaces.
        """
        start = 0
        for index in range(len(turns) - 1, -1, -1):
            if extract_city_guess(turns[index], self.vocabulary):
                start = index
                break
        return self.extract(" ".join(turns[start:]))

    def decide(self, slots: ExtractedSlots) -> PlannerDecision:
        requires_arrondissement = self.vocabulary.is_arrondissement_city(slots.city)
        if not requires_arrondissement and slots.arrondissement is not None:
            # A stray "2 pièces" is not a district outside arrondissement cities.
            slots = replace(slots, arrondissement=None)
        state = self._select_state(slots, requires_arrondissement)
        return PlannerDecision(
            state=state,
            action=STATE_ACTIONS[state],
            slots=slots,
            requires_arrondissement=requires_arrondissement,
        )

    def _select_state(self, slots: ExtractedSlots, requires_arrondissement: bool) -> ConversationState:
        if not slots.city:
            return ConversationState.NEED_CITY
        if requires_arrondissement and slots.arrondissement is None:
            return ConversationState.NEED_ARRONDISSEMENT
        if not slots.postal_code:
            return ConversationState.NEED_POSTAL_CODE
        return ConversationState.READY
