from .raw_event_repository import RawEventRepository

__all__ = ["RawEventRepository"]
