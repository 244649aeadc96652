"""Builders turning (history, message) into the text window used downstream.

Two renderings are available:

- all-roles: every turn labelled with its speaker, one per line;
- user-only: user turns concatenated, so city or postal code suggestions
  made by the assistant itself never feed slot extraction.
"""

from __future__ import annotations

from typing import Sequence

from .models import Message, recent

DEFAULT_MAX_TURNS = 8

SPEAKER_LABELS = {
    "user": "Utilisateur",
    "assistant": "Assistant",
}


def build_recent_context(
    history: Sequence[Message],
    message: str,
    max_turns: int = DEFAULT_MAX_TURNS,
) -> str:
    lines = [f"{SPEAKER_LABELS[turn.role]}: {turn.content}" for turn in recent(history, max_turns)]
    lines.append(f"{SPEAKER_LABELS['user']}: {message}")
    return "\n".join(lines)


def user_turns(
    history: Sequence[Message],
    message: str,
    max_turns: int = DEFAULT_MAX_TURNS,
) -> list[str]:
    """Recent user contents, oldest first, ending with the current message."""
    turns = [turn.content for turn in recent(history, max_turns) if turn.is_user]
    turns.append(message)
    return turns


def build_user_only_context(
    history: Sequence[Message],
    message: str,
    max_turns: int = DEFAULT_MAX_TURNS,
) -> str:
    return " ".join(user_turns(history, message, max_turns))
