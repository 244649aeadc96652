"""Launch script starting the assistant API under Uvicorn."""

from __future__ import annotations

import logging
import os

import uvicorn

logger = logging.getLogger("immo.launcher")


def main() -> None:
    host = os.environ.get("HOST", "0.0.0.0")
    port = int(os.environ.get("PORT", "8000"))
    logger.debug("Starting immo_assistant.main:app on %s:%s", host, port)
    uvicorn.run("immo_assistant.main:app", host=host, port=port)


if __name__ == "__main__":
    main()
