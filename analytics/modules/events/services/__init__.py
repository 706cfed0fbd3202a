from .raw_event_service import HUB_SOURCE, RawEventService, hub_envelope_to_message, squad_from_channel

__all__ = ["HUB_SOURCE", "RawEventService", "hub_envelope_to_message", "squad_from_channel"]
