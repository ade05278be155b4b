from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from relay.readiness import DISCOVERY, ReadinessState
from relay.services.base import ServiceError
from relay.services.discovery import DiscoveryClient

logger = logging.getLogger(__name__)

MAX_PASSAGES = 3

DISCOVERY_PENDING_TEXT = (
    "Sorry, currently I do not have a response. Discovery initialization is in progress. "
    "Please try again later."
)
DISCOVERY_PROBLEM_TEXT = "Problems ...."


def _output_lines(response: Dict[str, Any]) -> Optional[List[str]]:
    output = response.get("output") or {}
    text = output.get("text")
    return text if isinstance(text, list) else None


def _clear_action(response: Dict[str, Any]) -> Dict[str, Any]:
    response["context"]["action"] = {}
    return response


def format_passages(passages: List[Dict[str, Any]]) -> List[str]:
    """Render the top passages as ``proposition<k>: <text>`` lines, each
    followed by an empty separator line."""
    lines: List[str] = []
    for rank, passage in enumerate(passages[:MAX_PASSAGES], start=1):
        logger.debug(
            "Passage %s score=%s text=%s",
            rank,
            passage.get("passage_score"),
            passage.get("passage_text"),
        )
        lines.append(f"proposition{rank}: {passage.get('passage_text', '')}")
        lines.append("")
    return lines


async def merge_search_results(
    response: Dict[str, Any],
    state: ReadinessState,
    discovery: DiscoveryClient,
) -> Dict[str, Any]:
    """Answer a dialog ``action`` with a Discovery lookup.

    Responses without a truthy ``context.action`` come back untouched. Otherwise
    the latest user text is sent to Discovery, the result (or an apology) is
    appended to ``output.text`` and the action is cleared.
    """
    context = response.get("context")
    if not isinstance(context, dict) or not context.get("action"):
        return response

    lines = _output_lines(response)
    query_text = (response.get("input") or {}).get("text", "")
    logger.info("Discovery lookup requested for input: %s", query_text)

    search_params = state.handle(DISCOVERY)
    if search_params is None:
        logger.info("Discovery is not ready for query.")
        if lines is not None:
            lines.append(DISCOVERY_PENDING_TEXT)
        return _clear_action(response)

    query = {"natural_language_query": query_text, "passages": True}
    query.update(search_params)
    try:
        result = await discovery.query(query)
    except ServiceError as exc:
        logger.error("Error searching for documents: %s", exc)
        if lines is not None:
            lines.append(DISCOVERY_PROBLEM_TEXT)
        return _clear_action(response)

    if lines is not None:
        lines.extend(format_passages(result.get("passages") or []))
    return _clear_action(response)
