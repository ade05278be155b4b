"""Run the relay under uvicorn.

A setup failure stops the server and the process exits with status 1 so a
supervisor can restart it.
"""

from __future__ import annotations

import logging
import sys

import uvicorn
from fastapi import FastAPI

from config.settings import get_settings

logger = logging.getLogger("chat_relay")


def run(app: FastAPI) -> int:
    settings = get_settings()
    server = uvicorn.Server(
        uvicorn.Config(app, host=settings.app_host, port=settings.port, log_level="info")
    )
    state = app.state.readiness

    def stop_on_failure(setup_error: str) -> None:
        logger.error("Aborting due to setup error!")
        server.should_exit = True

    state.add_failure_listener(stop_on_failure)
    server.run()
    return 1 if state.setup_error else 0


if __name__ == "__main__":
    from app.main import app

    sys.exit(run(app))
