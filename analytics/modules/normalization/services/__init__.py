from .normalization_service import EventNormalizer, build_default_handlers
from .replay_service import EventReplayService, ReplayConfigurationError, ReplayMode

__all__ = [
    "EventNormalizer",
    "build_default_handlers",
    "EventReplayService",
    "ReplayConfigurationError",
    "ReplayMode",
]
