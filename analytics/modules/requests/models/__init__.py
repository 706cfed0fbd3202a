from .request_models import ServiceRequest

__all__ = ["ServiceRequest"]
