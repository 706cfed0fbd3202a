from .provider_models import Provider, ProviderSkill, ProviderZone

__all__ = ["Provider", "ProviderSkill", "ProviderZone"]
