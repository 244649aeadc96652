"""Planner-related enums and data structures."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class ConversationState(str, Enum):
    """Which slot, if any, is still missing before a market analysis."""

    NEED_CITY = "need_city"
    NEED_ARRONDISSEMENT = "need_arrondissement"
    NEED_POSTAL_CODE = "need_postal_code"
    READY = "ready"


class AssistantAction(str, Enum):
    """Action tags returned to callers alongside every reply."""

    SIMPLE_CHAT = "simple_chat"
    ASK_CITY = "ask_city"
    ASK_ARRONDISSEMENT = "ask_arrondissement"
    ASK_POSTAL_CODE = "ask_postal_code"
    CITY_SNAPSHOT = "city_snapshot"
    ERROR = "error"


STATE_ACTIONS: dict[ConversationState, AssistantAction] = {
    ConversationState.NEED_CITY: AssistantAction.ASK_CITY,
    ConversationState.NEED_ARRONDISSEMENT: AssistantAction.ASK_ARRONDISSEMENT,
    ConversationState.NEED_POSTAL_CODE: AssistantAction.ASK_POSTAL_CODE,
    ConversationState.READY: AssistantAction.CITY_SNAPSHOT,
}


@dataclass(slots=True, frozen=True)
class ExtractedSlots:
    """Facts pulled from the user's side of the conversation."""

    city: str | None = None
    postal_code: str | None = None
    arrondissement: int | None = None

    def with_postal_code(self, postal_code: str | None) -> "ExtractedSlots":
        return replace(self, postal_code=postal_code)


@dataclass(slots=True, frozen=True)
class PlannerDecision:
    """Planner output: the state reached and the action tag it maps to."""

    state: ConversationState
    action: AssistantAction
    slots: ExtractedSlots
    requires_arrondissement: bool = False

    @property
    def missing_slot(self) -> str | None:
        return {
            ConversationState.NEED_CITY: "city",
            ConversationState.NEED_ARRONDISSEMENT: "arrondissement",
            ConversationState.NEED_POSTAL_CODE: "postal_code",
        }.get(self.state)
