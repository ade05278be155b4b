from relay.setup.assistant_setup import AssistantSetup
from relay.setup.base import SetupFailed, run_setup
from relay.setup.discovery_setup import DiscoverySetup

__all__ = ["AssistantSetup", "DiscoverySetup", "SetupFailed", "run_setup"]
