"""Shared test helpers (mock Watson transports)."""

from __future__ import annotations

import json
from typing import Callable, List

import httpx

ASSISTANT_URL = "https://assistant.test/api"
DISCOVERY_URL = "https://discovery.test/api"

Handler = Callable[[httpx.Request], httpx.Response]


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it served."""

    def __init__(self, handler: Handler):
        self.requests: List[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


def request_json(request: httpx.Request):
    return json.loads(request.content.decode("utf-8"))


def not_called(request: httpx.Request) -> httpx.Response:
    raise AssertionError(f"unexpected request: {request.method} {request.url}")
