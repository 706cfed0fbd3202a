from .provider_repository import ProviderRepository, ProviderSkillRepository, ProviderZoneRepository

__all__ = ["ProviderRepository", "ProviderSkillRepository", "ProviderZoneRepository"]
