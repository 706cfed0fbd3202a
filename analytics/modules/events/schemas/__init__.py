from .event_schemas import EventMessage, HubDestination, HubEnvelope

__all__ = ["EventMessage", "HubDestination", "HubEnvelope"]
