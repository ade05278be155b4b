from relay.services.assistant import AssistantClient
from relay.services.base import ServiceError, WatsonClient
from relay.services.discovery import DiscoveryClient

__all__ = ["AssistantClient", "DiscoveryClient", "ServiceError", "WatsonClient"]
