"""Dataclasses representing conversation turns supplied by the caller."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Literal

Role = Literal["user", "assistant"]
ROLES: frozenset[str] = frozenset({"user", "assistant"})


@dataclass(slots=True, frozen=True)
class Message:
    """Single conversational turn; history is ordered oldest first."""

    role: Role
    content: str

    @property
    def is_user(self) -> bool:
        return self.role == "user"


def parse_history(raw: Any) -> list[Message]:
    """Coerce a loosely-typed JSON history into messages.

    Anything that is not a list yields an empty history. Entries with an
    unknown role or a non-string content are dropped rather than rejected.
    """

    if not isinstance(raw, list):
        return []

    messages: list[Message] = []
    for entry in raw:
        if not isinstance(entry, dict):
            continue
        role = entry.get("role")
        content = entry.get("content")
        if role not in ROLES or not isinstance(content, str):
            continue
        messages.append(Message(role=role, content=content))
    return messages


def recent(history: Iterable[Message], max_turns: int) -> list[Message]:
    turns = list(history)
    if max_turns <= 0:
        return []
    return turns[-max_turns:]
