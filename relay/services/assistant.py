from __future__ import annotations

from typing import Any, Dict, List

from relay.services.base import WatsonClient


class AssistantClient(WatsonClient):
    """Watson Assistant v1: dialog turns and workspace administration."""

    async def message(self, workspace_id: str, input: Dict[str, Any], context: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request(
            "POST",
            f"/v1/workspaces/{workspace_id}/message",
            json={"input": input, "context": context},
        )

    async def list_workspaces(self) -> List[Dict[str, Any]]:
        data = await self._request("GET", "/v1/workspaces")
        return data.get("workspaces") or []

    async def get_workspace(self, workspace_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/v1/workspaces/{workspace_id}")

    async def create_workspace(self, definition: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/v1/workspaces", json=definition)
