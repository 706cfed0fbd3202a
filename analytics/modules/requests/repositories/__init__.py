from .request_repository import ServiceRequestRepository

__all__ = ["ServiceRequestRepository"]
