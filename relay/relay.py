from __future__ import annotations

import json
import logging
from typing import Any, Dict

from relay.merge import merge_search_results
from relay.readiness import ASSISTANT, SETUP_FAILED_TEXT, ReadinessState
from relay.services.assistant import AssistantClient
from relay.services.discovery import DiscoveryClient

logger = logging.getLogger(__name__)

ASSISTANT_PENDING_TEXT = "Assistant initialization in progress. Please try again."


class MessageRelay:
    """Forwards one chat turn to Watson Assistant and merges any lookup.

    The server keeps no conversation state: the client sends back the context
    it received on the previous turn. Assistant failures raise ServiceError
    for the HTTP layer to pass through.
    """

    def __init__(self, state: ReadinessState, assistant: AssistantClient, discovery: DiscoveryClient):
        self.state = state
        self.assistant = assistant
        self.discovery = discovery

    async def handle(
        self,
        input: Any = None,
        context: Any = None,
    ) -> Dict[str, Any]:
        if self.state.setup_error:
            return {"output": {"text": SETUP_FAILED_TEXT + self.state.setup_error}}

        workspace_id = self.state.handle(ASSISTANT)
        if workspace_id is None:
            return {"output": {"text": ASSISTANT_PENDING_TEXT}}

        # Anything but a JSON object is replaced by an empty one
        input = input if isinstance(input, dict) else {}
        context = context if isinstance(context, dict) else {}
        data = await self.assistant.message(workspace_id, input=input, context=context)
        logger.info("assistant.message :: %s", json.dumps(data))
        return await merge_search_results(data, self.state, self.discovery)
