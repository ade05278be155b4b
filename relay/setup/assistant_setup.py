from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

from relay.services.assistant import AssistantClient
from relay.services.base import ServiceError
from relay.setup.base import SetupFailed

logger = logging.getLogger(__name__)


class AssistantSetup:
    """Finds the dialog workspace to talk to, creating it when necessary.

    Resolution order: the configured workspace id, then an existing workspace
    named ``default_name``, then a new workspace built from ``workspace_file``.
    """

    def __init__(self, client: AssistantClient):
        self.client = client

    async def setup(
        self,
        default_name: str,
        workspace_id: Optional[str] = None,
        workspace_file: Optional[str] = None,
    ) -> str:
        if workspace_id:
            return await self._validate(workspace_id)

        try:
            workspaces = await self.client.list_workspaces()
        except ServiceError as exc:
            raise SetupFailed(f"could not list workspaces: {exc}") from exc
        for workspace in workspaces:
            if workspace.get("name") == default_name:
                logger.info("Using workspace %s named %r", workspace.get("workspace_id"), default_name)
                return workspace["workspace_id"]

        if not workspace_file:
            raise SetupFailed(
                f"no workspace named {default_name!r} and no WORKSPACE_FILE to create one from"
            )
        return await self._create(default_name, Path(workspace_file))

    async def _validate(self, workspace_id: str) -> str:
        try:
            await self.client.get_workspace(workspace_id)
        except ServiceError as exc:
            raise SetupFailed(f"workspace {workspace_id} is not usable: {exc}") from exc
        logger.info("Validated workspace %s", workspace_id)
        return workspace_id

    async def _create(self, name: str, path: Path) -> str:
        try:
            definition = json.loads(await asyncio.to_thread(path.read_text, encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise SetupFailed(f"cannot load workspace definition {path}: {exc}") from exc
        if not isinstance(definition, dict):
            raise SetupFailed(f"workspace definition {path} is not a JSON object")

        definition["name"] = name
        logger.info("Creating workspace %r from %s", name, path)
        try:
            created = await self.client.create_workspace(definition)
        except ServiceError as exc:
            raise SetupFailed(f"could not create workspace: {exc}") from exc
        return created["workspace_id"]
