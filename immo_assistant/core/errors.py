"""Exception types and handlers shared by the API layer."""

from __future__ import annotations

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger("immo.errors")

INPUT_HINT = 'Si tu veux une analyse immo chiffrée, précise **ville + code postal** (ex: "Bordeaux 33000").'
EXCERPT_LIMIT = 160


class AssistantError(Exception):
    """Base class for failures surfaced to chat callers."""

    status_code = 500


class UpstreamError(AssistantError):
    """The generative service answered with an error or an unusable payload."""

    status_code = 502


class UpstreamTimeoutError(UpstreamError):
    """The generative service did not answer within the configured bound."""

    status_code = 504


def excerpt(message: str, limit: int = EXCERPT_LIMIT) -> str:
    text = " ".join(str(message).split())
    if len(text) <= limit:
        return text
    return text[: limit - 1].rstrip() + "…"


def error_reply(exc: BaseException) -> str:
    """User-facing apology for a failed analysis, with a hint that unblocks it."""

    if isinstance(exc, UpstreamTimeoutError):
        return (
            "⏳ Le service d'analyse a mis trop de temps à répondre. Réessaie dans un instant.\n\n"
            + INPUT_HINT
        )
    detail = excerpt(str(exc)) or type(exc).__name__
    return f"❌ Erreur lors de l'analyse: {detail}\n\n{INPUT_HINT}"


def error_payload(exc: BaseException) -> dict:
    return {"reply": error_reply(exc), "action": "error"}


async def assistant_exception_handler(request: Request, exc: AssistantError) -> JSONResponse:
    logger.error(
        "Upstream failure on %s %s: %s",
        request.method,
        request.url.path,
        exc,
        extra={"request_id": getattr(request.state, "request_id", None)},
    )
    return JSONResponse(status_code=exc.status_code, content=error_payload(exc))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:  # noqa: D401
    """Return the apology payload while logging the full exception."""

    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content=error_payload(exc))
