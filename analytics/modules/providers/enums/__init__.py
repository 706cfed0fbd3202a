from .provider_status_enum import ProviderStatus

__all__ = ["ProviderStatus"]
