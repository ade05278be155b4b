from relay.merge import MAX_PASSAGES, merge_search_results
from relay.readiness import ReadinessState
from relay.relay import MessageRelay

__all__ = ["MAX_PASSAGES", "MessageRelay", "ReadinessState", "merge_search_results"]
