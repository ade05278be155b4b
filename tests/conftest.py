"""Shared test fixtures and configuration."""

from __future__ import annotations

import pytest

from relay.readiness import ReadinessState
from relay.services import AssistantClient, DiscoveryClient
from tests.helpers import ASSISTANT_URL, DISCOVERY_URL, RecordingTransport


@pytest.fixture
def state():
    return ReadinessState()


@pytest.fixture
def make_assistant():
    def build(handler) -> AssistantClient:
        return AssistantClient(
            ASSISTANT_URL, "2018-09-20", apikey="assistant-key", transport=RecordingTransport(handler)
        )

    return build


@pytest.fixture
def make_discovery():
    def build(handler) -> DiscoveryClient:
        return DiscoveryClient(
            DISCOVERY_URL, "2018-10-15", apikey="discovery-key", transport=RecordingTransport(handler)
        )

    return build


@pytest.fixture
def dialog_response():
    """Assistant reply that asks for a Discovery lookup."""
    return {
        "input": {"text": "reset password"},
        "output": {"text": ["Here is what I found:"]},
        "context": {"conversation_id": "conv-1", "action": "RnR"},
    }


@pytest.fixture
def passages():
    return [
        {"document_id": "doc-1", "passage_text": "Go to settings", "passage_score": 0.9},
        {"document_id": "doc-2", "passage_text": "Click forgot password", "passage_score": 0.8},
        {"document_id": "doc-3", "passage_text": "Check your inbox", "passage_score": 0.7},
        {"document_id": "doc-4", "passage_text": "Choose a new password", "passage_score": 0.6},
    ]
