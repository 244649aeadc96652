"""Planner abstract base class."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .types import ExtractedSlots, PlannerDecision


class Planner(ABC):
    """Decides which slot is missing given the slots extracted this turn."""

    @abstractmethod
    def decide(self, slots: ExtractedSlots) -> PlannerDecision:
        """Return the planner decision for the given slots."""

    @abstractmethod
    def describe(self) -> str:
        """Human-readable summary of planner strategy."""
