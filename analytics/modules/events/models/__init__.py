from .raw_event_models import RawEvent

__all__ = ["RawEvent"]
