"""Logging setup and per-request correlation ids."""

from __future__ import annotations

import logging
import time
import uuid
from typing import Callable

from fastapi import Request

logger = logging.getLogger("immo.request")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
QUIET_LOGGERS = ("httpx", "httpcore")


def configure_logging(level_name: str) -> int:
    """Apply the configured level to the root logger; unknown names fall back to INFO."""
    level = logging.getLevelName(str(level_name).upper())
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return level


async def request_id_middleware(request: Request, call_next: Callable):
    rid = request.headers.get("x-request-id") or uuid.uuid4().hex
    request.state.request_id = rid
    started = time.perf_counter()

    response = await call_next(request)

    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(
        "%s %s -> %s in %.0fms [rid=%s]",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
        rid,
    )
    response.headers["X-Request-ID"] = rid
    return response
