from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from relay.services.base import ServiceError
from relay.services.discovery import DiscoveryClient
from relay.setup.base import SetupFailed

logger = logging.getLogger(__name__)


class DiscoverySetup:
    """Prepares the collection that passage queries run against.

    The handle it yields is the default query parameters,
    ``{"environment_id": ..., "collection_id": ...}``.
    """

    def __init__(self, client: DiscoveryClient):
        self.client = client

    async def setup(
        self,
        default_name: str,
        documents: Sequence[str] = (),
        environment_id: Optional[str] = None,
        collection_id: Optional[str] = None,
    ) -> Dict[str, str]:
        paths = [Path(doc) for doc in documents]
        missing = [str(p) for p in paths if not p.is_file()]
        if missing:
            raise SetupFailed(f"documents not found: {', '.join(missing)}")

        try:
            environment_id = environment_id or await self._find_environment(default_name)
            collection_id = collection_id or await self._find_collection(environment_id, default_name)
            await self._ingest(environment_id, collection_id, paths)
        except ServiceError as exc:
            raise SetupFailed(str(exc)) from exc

        return {"environment_id": environment_id, "collection_id": collection_id}

    async def _find_environment(self, name: str) -> str:
        for environment in await self.client.list_environments():
            if not environment.get("read_only"):
                return environment["environment_id"]
        logger.info("Creating Discovery environment %r", name)
        created = await self.client.create_environment(name)
        return created["environment_id"]

    async def _find_collection(self, environment_id: str, name: str) -> str:
        for collection in await self.client.list_collections(environment_id):
            if collection.get("name") == name:
                return collection["collection_id"]
        logger.info("Creating Discovery collection %r", name)
        created = await self.client.create_collection(environment_id, name)
        return created["collection_id"]

    async def _ingest(self, environment_id: str, collection_id: str, paths: List[Path]) -> None:
        if not paths:
            return
        collection = await self.client.get_collection(environment_id, collection_id)
        counts = collection.get("document_counts") or {}
        if counts.get("available", 0) + counts.get("processing", 0) > 0:
            logger.info("Collection %s already holds documents, skipping ingestion", collection_id)
            return
        for path in paths:
            logger.info("Adding document %s", path)
            await self.client.add_document(environment_id, collection_id, path)
