"""In-memory counters of chat turns, served by ``/metrics``."""

from __future__ import annotations

import threading
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict

from immo_assistant.planner.types import AssistantAction


@dataclass(frozen=True)
class MetricSnapshot:
    total_requests: int
    actions: Dict[str, int]
    intents: Dict[str, int]
    failures: Dict[str, int] = field(default_factory=dict)

    def as_dict(self) -> dict:
        return {
            "total_requests": self.total_requests,
            "actions": self.actions,
            "intents": self.intents,
            "failures": self.failures,
        }


def intent_label(real_estate: bool | None) -> str:
    if real_estate is None:
        return "unclassified"
    return "real_estate" if real_estate else "other"


class MetricsCollector:
    """Thread-safe tallies per assistant action, intent label and failure kind."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._turns = 0
        self._by_action: Counter[str] = Counter()
        self._by_intent: Counter[str] = Counter()
        self._by_failure: Counter[str] = Counter()

    def record_turn(self, action: AssistantAction, real_estate: bool | None) -> None:
        with self._lock:
            self._turns += 1
            self._by_action[action.value] += 1
            self._by_intent[intent_label(real_estate)] += 1

    def record_failure(self, exc: BaseException) -> None:
        """Count a failed turn as an ``error`` action keyed by exception class."""
        with self._lock:
            self._turns += 1
            self._by_action[AssistantAction.ERROR.value] += 1
            self._by_intent[intent_label(None)] += 1
            self._by_failure[type(exc).__name__] += 1

    def snapshot(self) -> MetricSnapshot:
        with self._lock:
            return MetricSnapshot(
                total_requests=self._turns,
                actions=dict(self._by_action),
                intents=dict(self._by_intent),
                failures=dict(self._by_failure),
            )
