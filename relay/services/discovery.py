from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Dict, List

from relay.services.base import WatsonClient


class DiscoveryClient(WatsonClient):
    """Watson Discovery v1: passage queries and collection administration."""

    async def query(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Run a query. ``environment_id`` and ``collection_id`` address the
        collection; every other key is sent as the query body."""
        body = dict(params)
        environment_id = body.pop("environment_id")
        collection_id = body.pop("collection_id")
        return await self._request(
            "POST",
            f"/v1/environments/{environment_id}/collections/{collection_id}/query",
            json=body,
        )

    async def list_environments(self) -> List[Dict[str, Any]]:
        data = await self._request("GET", "/v1/environments")
        return data.get("environments") or []

    async def create_environment(self, name: str) -> Dict[str, Any]:
        return await self._request(
            "POST",
            "/v1/environments",
            json={"name": name, "description": f"{name} environment"},
        )

    async def list_collections(self, environment_id: str) -> List[Dict[str, Any]]:
        data = await self._request("GET", f"/v1/environments/{environment_id}/collections")
        return data.get("collections") or []

    async def create_collection(self, environment_id: str, name: str) -> Dict[str, Any]:
        return await self._request(
            "POST",
            f"/v1/environments/{environment_id}/collections",
            json={"name": name, "language": "en"},
        )

    async def get_collection(self, environment_id: str, collection_id: str) -> Dict[str, Any]:
        return await self._request(
            "GET", f"/v1/environments/{environment_id}/collections/{collection_id}"
        )

    async def add_document(self, environment_id: str, collection_id: str, path: Path) -> Dict[str, Any]:
        content = await asyncio.to_thread(path.read_bytes)
        return await self._request(
            "POST",
            f"/v1/environments/{environment_id}/collections/{collection_id}/documents",
            files={"file": (path.name, content)},
        )
