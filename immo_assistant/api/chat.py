"""Chat route: validation, auth gate and outcome serialisation."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from immo_assistant.core.auth import AuthenticatedUser, require_user
from immo_assistant.core.errors import AssistantError, error_payload
from immo_assistant.core.metrics import MetricsCollector
from immo_assistant.memory.models import parse_history
from immo_assistant.pipeline.orchestrator import ChatOrchestrator, ChatRequest

logger = logging.getLogger("immo.chat")


def parse_chat_request(payload: dict) -> ChatRequest:
    message = payload.get("message")
    if not isinstance(message, str) or not message.strip():
        raise HTTPException(status_code=400, detail="message is required and must be a non-empty string")

    use_instructions = payload.get("useInstructions", True)
    if not isinstance(use_instructions, bool):
        raise HTTPException(status_code=400, detail="useInstructions must be a boolean")

    return ChatRequest(
        message=message,
        history=parse_history(payload.get("history") or []),
        use_instructions=use_instructions,
    )


def create_chat_router(orchestrator: ChatOrchestrator, metrics: MetricsCollector) -> APIRouter:
    router = APIRouter(tags=["chat"])

    @router.post("/chat")
    async def chat(payload: dict, user: AuthenticatedUser = Depends(require_user)):
        """Answer one chat turn given the caller-owned history."""

        request = parse_chat_request(payload)

        try:
            outcome = await orchestrator.handle(request)
        except AssistantError as exc:
            metrics.record_failure(exc)
            raise
        except Exception as exc:  # noqa: BLE001
            logger.exception("Chat pipeline failed", extra={"user_id": user.user_id})
            metrics.record_failure(exc)
            return JSONResponse(status_code=500, content=error_payload(exc))

        metrics.record_turn(outcome.action, outcome.real_estate_intent)
        logger.info("Chat answered with %s for %s", outcome.action.value, user.user_id)
        return outcome.as_payload()

    return router
