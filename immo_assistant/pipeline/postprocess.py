"""Normalization of generative results into the reply shown to users.

Functions:
- format_reply(result): a self-formatted ``analysis`` wins verbatim; otherwise
  the reply is rebuilt from whichever numeric indicators and lists are usable.
- structured_fields(result): extra data merged into city snapshots.
"""

from __future__ import annotations

import math
from typing import Any

from immo_assistant.services.llm import GenerationResult, RawText, Structured

HEADING = "## 📊 Analyse du marché\n\n"


def safe_number(value: Any) -> float | None:
    """Finite int/float, else None. Booleans are not numbers here."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return float(value)


def _is_non_finite(value: Any) -> bool:
    return isinstance(value, float) and not math.isfinite(value)


def _string_items(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    items = []
    for item in value:
        if item is None or _is_non_finite(item):
            continue
        text = str(item).strip()
        if text:
            items.append(text)
    return items


def format_structured(fields: dict[str, Any]) -> str:
    analysis = fields.get("analysis")
    if isinstance(analysis, str) and analysis.strip():
        return analysis

    reply = HEADING

    price = safe_number(fields.get("price_m2_avg"))
    rent = safe_number(fields.get("rent_m2_avg"))
    gross_yield = safe_number(fields.get("gross_yield"))

    if price is not None or rent is not None or gross_yield is not None:
        reply += "| Indicateur | Valeur |\n|------------|--------|\n"
        if price is not None:
            reply += f"| Prix moyen au m² | {round(price)} € |\n"
        if rent is not None:
            reply += f"| Loyer moyen au m² | {rent:.2f} €/mois |\n"
        if gross_yield is not None:
            reply += f"| Rendement brut | {gross_yield:.2f}% |\n"
        reply += "\n"

    neighborhoods = _string_items(fields.get("best_neighborhoods"))
    if neighborhoods:
        lines = "\n".join(f"- {name}" for name in neighborhoods)
        reply += f"## 🏘️ Meilleurs quartiers\n\n{lines}\n\n"

    recommendations = _string_items(fields.get("recommendations"))
    if recommendations:
        lines = "\n".join(f"{index}. {item}" for index, item in enumerate(recommendations, start=1))
        reply += f"## 💡 Recommandations\n\n{lines}\n"

    return reply


def format_reply(result: GenerationResult) -> str:
    if isinstance(result, Structured):
        return format_structured(result.fields)
    if isinstance(result, RawText):
        return result.text
    return str(result or "")


def _json_safe(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _json_safe(item) for key, item in value.items() if not _is_non_finite(item)}
    if isinstance(value, list):
        return [_json_safe(item) for item in value if not _is_non_finite(item)]
    return value


def structured_fields(result: GenerationResult) -> dict[str, Any]:
    """Structured fields safe to serialise as JSON.

    Non-finite numbers are dropped at any depth, in nested lists and objects too.
    """
    if not isinstance(result, Structured):
        return {}
    return _json_safe(result.fields)
