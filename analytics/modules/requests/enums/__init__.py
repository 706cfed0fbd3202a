from .request_status_enum import RequestStatus

__all__ = ["RequestStatus"]
