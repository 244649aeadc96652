"""FastAPI application entry point for the rental-investment assistant."""

import logging
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from immo_assistant.api.chat import create_chat_router
from immo_assistant.core.config import get_settings
from immo_assistant.core.errors import (
    AssistantError,
    assistant_exception_handler,
    unhandled_exception_handler,
)
from immo_assistant.core.logging import configure_logging, request_id_middleware
from immo_assistant.core.metrics import MetricsCollector
from immo_assistant.pipeline.orchestrator import ChatOrchestrator
from immo_assistant.planner.intent import IntentClassifier
from immo_assistant.planner.simple import RuleBasedPlanner
from immo_assistant.services.communes import CommuneDirectory, PostalCodeResolver
from immo_assistant.services.llm import OpenRouterClient

settings = get_settings()
logger = logging.getLogger("immo.app")

llm_client = OpenRouterClient(
    settings.openrouter_api_key,
    model=settings.openrouter_model,
    base_url=settings.openrouter_base_url,
    referer=settings.openrouter_referer,
    title=settings.openrouter_title,
    timeout=settings.llm_timeout_seconds,
)
commune_directory = CommuneDirectory(settings.communes_api_url, timeout=settings.communes_timeout_seconds)
planner = RuleBasedPlanner()
orchestrator = ChatOrchestrator(
    llm_client,
    PostalCodeResolver(commune_directory),
    planner=planner,
    classifier=IntentClassifier(planner.vocabulary),
    market_base_url=settings.market_base_url,
    history_window=settings.history_window,
    grounding_window=settings.grounding_window,
)
metrics = MetricsCollector()

app = FastAPI(title=settings.app_name, version="0.1.0", docs_url="/docs")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(request_id_middleware)

app.include_router(create_chat_router(orchestrator, metrics))


@app.get("/health", tags=["health"])
async def health_check() -> dict[str, str]:
    """Return basic service status for monitoring."""

    return {"status": "ok"}


@app.get("/ready", tags=["health"])
async def readiness_probe() -> dict[str, Any]:
    """Readiness endpoint reporting whether external collaborators are configured.

    Nothing is called: the generative service is billed per request and the
    commune directory is only needed when a postal code is missing.
    """

    components: dict[str, dict[str, Any]] = {
        "generative_service": {
            "client": llm_client.describe(),
            "ok": settings.llm_enabled,
            **({} if settings.llm_enabled else {"error": "OPENROUTER_API_KEY not set"}),
        },
        "commune_directory": {
            "url": settings.communes_api_url,
            "ok": bool(settings.communes_api_url),
        },
        "auth": {
            "enabled": settings.auth_enabled,
            "ok": not settings.auth_enabled or bool(settings.api_keys),
        },
    }

    if all(component["ok"] for component in components.values()):
        overall = "ok"
    elif components["generative_service"]["ok"]:
        overall = "degraded"
    else:
        overall = "fail"

    return {
        "status": overall,
        "environment": settings.environment,
        "vocabulary_version": planner.vocabulary.version,
        "planner": planner.describe(),
        "intent_classifier": orchestrator.classifier.describe(),
        "components": components,
    }


@app.on_event("startup")
async def startup_logging() -> None:
    level = configure_logging(settings.log_level)
    logger.info("Logging configured at %s level for %s environment", logging.getLevelName(level), settings.environment)


app.add_exception_handler(AssistantError, assistant_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)


@app.get("/metrics", tags=["metrics"])
async def metrics_endpoint() -> dict:
    return metrics.snapshot().as_dict()
