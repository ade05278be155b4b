"""Per-service setup results shared by every request.

Each external service gets one slot that starts ``Pending`` and is settled
exactly once by its setup task, either ``Ready(handle)`` or ``Failed(error)``.
Any failure also lands in the accumulated ``setup_error`` text, after which
the process is expected to stop.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Union

logger = logging.getLogger(__name__)

ASSISTANT = "assistant"
DISCOVERY = "discovery"
SERVICES = (ASSISTANT, DISCOVERY)

SETUP_FAILED_TEXT = "The app failed to initialize properly. Setup and restart needed."


@dataclass(frozen=True)
class Pending:
    pass


@dataclass(frozen=True)
class Ready:
    handle: Any


@dataclass(frozen=True)
class Failed:
    error: str


Readiness = Union[Pending, Ready, Failed]

FailureListener = Callable[[str], None]


class ReadinessState:
    def __init__(self) -> None:
        self._slots: Dict[str, Readiness] = {name: Pending() for name in SERVICES}
        self._setup_error = ""
        self._listeners: List[FailureListener] = []

    def get(self, service: str) -> Readiness:
        return self._slots[service]

    def handle(self, service: str) -> Optional[Any]:
        slot = self._slots[service]
        return slot.handle if isinstance(slot, Ready) else None

    @property
    def setup_error(self) -> str:
        return self._setup_error

    def set_ready(self, service: str, handle: Any) -> None:
        self._settle(service, Ready(handle))

    def fail(self, service: str, reason: str) -> None:
        self._settle(service, Failed(reason))
        self._setup_error += " " + reason
        logger.error("%s%s", SETUP_FAILED_TEXT, self._setup_error)
        for listener in list(self._listeners):
            listener(self._setup_error)

    def add_failure_listener(self, listener: FailureListener) -> None:
        self._listeners.append(listener)

    def snapshot(self) -> Dict[str, str]:
        return {name: type(slot).__name__.lower() for name, slot in self._slots.items()}

    def _settle(self, service: str, result: Readiness) -> None:
        current = self._slots[service]
        if not isinstance(current, Pending):
            raise RuntimeError(f"{service} setup already settled as {current!r}")
        self._slots[service] = result
