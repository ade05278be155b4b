from __future__ import annotations

import os
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv


load_dotenv()


def _split_list(raw: Optional[str]) -> List[str]:
    return [item.strip() for item in (raw or "").split(",") if item.strip()]


class Settings:
    """Application settings loaded from environment variables.

    Service credentials, endpoints and resource names all live here; the
    service clients and setup coordinators receive them explicitly.
    """

    app_env: str = os.getenv("APP_ENV", "development")
    app_host: str = os.getenv("APP_HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))
    public_dir: str = os.getenv("PUBLIC_DIR", "public")
    http_timeout: float = float(os.getenv("HTTP_TIMEOUT_SECONDS", "30"))

    default_name: str = os.getenv("DEFAULT_NAME", "Acarya Trial ChatBot")

    assistant_url: str = os.getenv(
        "ASSISTANT_URL", "https://gateway.watsonplatform.net/assistant/api"
    )
    assistant_apikey: Optional[str] = os.getenv("ASSISTANT_APIKEY")
    assistant_version: str = os.getenv("ASSISTANT_VERSION", "2018-09-20")
    workspace_id: Optional[str] = os.getenv("WORKSPACE_ID")
    workspace_file: Optional[str] = os.getenv("WORKSPACE_FILE")

    discovery_url: str = os.getenv(
        "DISCOVERY_URL", "https://gateway.watsonplatform.net/discovery/api"
    )
    discovery_apikey: Optional[str] = os.getenv("DISCOVERY_APIKEY")
    discovery_version: str = os.getenv("DISCOVERY_VERSION", "2018-10-15")
    discovery_environment_id: Optional[str] = os.getenv("DISCOVERY_ENVIRONMENT_ID")
    discovery_collection_id: Optional[str] = os.getenv("DISCOVERY_COLLECTION_ID")
    discovery_docs: List[str] = _split_list(os.getenv("DISCOVERY_DOCS"))


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
