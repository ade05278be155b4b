from __future__ import annotations

import asyncio
import logging
import os
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import Body, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, ConfigDict, Field

from config.settings import Settings, get_settings
from relay import MessageRelay, ReadinessState
from relay.readiness import ASSISTANT, DISCOVERY
from relay.services import AssistantClient, DiscoveryClient, ServiceError
from relay.setup import AssistantSetup, DiscoverySetup, run_setup


logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(levelname)s - %(message)s")
logger = logging.getLogger("chat_relay")


class ChatTurn(BaseModel):
    """One client turn. Fields are taken as sent; the relay decides what to
    forward once the readiness guards have passed."""

    model_config = ConfigDict(extra="ignore")

    input: Any = Field(default=None, description="User input for this turn, e.g. {'text': '...'}")
    context: Any = Field(
        default=None, description="Context returned by the previous turn (client-managed)"
    )

    @classmethod
    def from_body(cls, body: Any) -> "ChatTurn":
        return cls.model_validate(body) if isinstance(body, dict) else cls()


def create_app(
    settings: Optional[Settings] = None,
    state: Optional[ReadinessState] = None,
    assistant: Optional[AssistantClient] = None,
    discovery: Optional[DiscoveryClient] = None,
    start_setup: bool = True,
) -> FastAPI:
    settings = settings or get_settings()
    state = state or ReadinessState()
    assistant = assistant or AssistantClient(
        settings.assistant_url,
        settings.assistant_version,
        apikey=settings.assistant_apikey,
        timeout=settings.http_timeout,
    )
    discovery = discovery or DiscoveryClient(
        settings.discovery_url,
        settings.discovery_version,
        apikey=settings.discovery_apikey,
        timeout=settings.http_timeout,
    )
    relay = MessageRelay(state, assistant, discovery)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup: both setups run concurrently, each settling its own slot
        if start_setup:
            assistant_setup = AssistantSetup(assistant).setup(
                settings.default_name,
                workspace_id=settings.workspace_id,
                workspace_file=settings.workspace_file,
            )
            discovery_setup = DiscoverySetup(discovery).setup(
                settings.default_name,
                documents=settings.discovery_docs,
                environment_id=settings.discovery_environment_id,
                collection_id=settings.discovery_collection_id,
            )
            app.state.setup_tasks = [
                asyncio.create_task(run_setup(state, ASSISTANT, "Watson Assistant", assistant_setup)),
                asyncio.create_task(run_setup(state, DISCOVERY, "Discovery", discovery_setup)),
            ]

        yield

        # Shutdown
        for task in app.state.setup_tasks:
            if not task.done():
                task.cancel()
        await assistant.aclose()
        await discovery.aclose()

    app = FastAPI(
        title="Watson Assistant + Discovery Chat Relay",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.readiness = state
    app.state.relay = relay
    app.state.setup_tasks = []

    # CORS: allow local frontend during development
    if settings.app_env.lower() in {"dev", "development", "local"}:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.post("/api/message")
    async def message(body: Any = Body(default=None)):
        turn = ChatTurn.from_body(body)
        try:
            return await relay.handle(input=turn.input, context=turn.context)
        except ServiceError as exc:
            logger.warning("Assistant call failed (%s): %s", exc.code, exc)
            return JSONResponse(status_code=exc.code, content=exc.to_body())

    @app.get("/health")
    def health() -> Dict[str, Any]:
        services = state.snapshot()
        if state.setup_error:
            status = "failed"
        elif all(value == "ready" for value in services.values()):
            status = "ok"
        else:
            status = "initializing"
        return {"status": status, "services": services}

    # Load UI from the public folder; mounted last so API routes win.
    if os.path.isdir(settings.public_dir):
        app.mount("/", StaticFiles(directory=settings.public_dir, html=True), name="public")

    return app


app = create_app()
