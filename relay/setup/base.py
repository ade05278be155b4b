from __future__ import annotations

import logging
from typing import Any, Awaitable

from relay.readiness import ReadinessState
from relay.services.base import ServiceError

logger = logging.getLogger(__name__)


class SetupFailed(Exception):
    """A service could not be validated or provisioned."""


async def run_setup(state: ReadinessState, service: str, label: str, setup: Awaitable[Any]) -> None:
    """Await one setup coordinator and settle its readiness slot."""
    try:
        handle = await setup
    except (SetupFailed, ServiceError) as exc:
        state.fail(service, f"{label} setup failed: {exc}")
        return
    except Exception as exc:
        logger.exception("%s setup crashed", label)
        state.fail(service, f"{label} setup failed: {exc}")
        return
    logger.info("%s is ready!", label)
    state.set_ready(service, handle)
