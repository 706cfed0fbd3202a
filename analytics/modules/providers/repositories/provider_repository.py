# -*- coding: utf-8 -*-
"""
analytics/modules/providers/repositories/provider_repository.py

Repositorios de prestadores, habilidades y zonas.

Autor: Equipo Analytics
Fecha: 2025-11-04
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from analytics.shared.database.repository import BaseRepository, ExternalIdRepository
from analytics.modules.providers.models import Provider, ProviderSkill, ProviderZone


class ProviderRepository(ExternalIdRepository[Provider]):
    def __init__(self) -> None:
        super().__init__(Provider)


class ProviderSkillRepository(BaseRepository[ProviderSkill]):
    def __init__(self) -> None:
        super().__init__(ProviderSkill)

    async def get_for_provider(
        self, session: AsyncSession, provider_id: int, skill_id: int
    ) -> Optional[ProviderSkill]:
        stmt = select(ProviderSkill).where(
            ProviderSkill.provider_id == provider_id,
            ProviderSkill.skill_id == skill_id,
        )
        result = await session.execute(stmt)
        return result.scalars().first()

    async def upsert(self, session: AsyncSession, provider_id: int, skill_id: int, **values) -> ProviderSkill:
        existing = await self.get_for_provider(session, provider_id, skill_id)
        if existing is None:
            return await self.create(session, provider_id=provider_id, skill_id=skill_id, **values)
        return await self.update(session, existing, **values)


class ProviderZoneRepository(BaseRepository[ProviderZone]):
    def __init__(self) -> None:
        super().__init__(ProviderZone)

    async def get_for_provider(
        self, session: AsyncSession, provider_id: int, zone_id: int
    ) -> Optional[ProviderZone]:
        stmt = select(ProviderZone).where(
            ProviderZone.provider_id == provider_id,
            ProviderZone.zone_id == zone_id,
        )
        result = await session.execute(stmt)
        return result.scalars().first()

    async def upsert(self, session: AsyncSession, provider_id: int, zone_id: int, **values) -> ProviderZone:
        existing = await self.get_for_provider(session, provider_id, zone_id)
        if existing is None:
            return await self.create(session, provider_id=provider_id, zone_id=zone_id, **values)
        return await self.update(session, existing, **values)

    async def find_active_zone_name(self, session: AsyncSession, name: str) -> Optional[str]:
        """Nombre canónico de una zona activa (coincidencia exacta sin distinguir mayúsculas)."""
        stmt = (
            select(ProviderZone.zone_name)
            .where(
                func.lower(ProviderZone.zone_name) == name.strip().lower(),
                ProviderZone.active.is_(True),
            )
            .limit(1)
        )
        result = await session.execute(stmt)
        return result.scalars().first()

    async def first_active_for_provider(self, session: AsyncSession, provider_id: int) -> Optional[ProviderZone]:
        stmt = (
            select(ProviderZone)
            .where(ProviderZone.provider_id == provider_id, ProviderZone.active.is_(True))
            .order_by(ProviderZone.id.asc())
            .limit(1)
        )
        result = await session.execute(stmt)
        return result.scalars().first()


__all__ = ["ProviderRepository", "ProviderSkillRepository", "ProviderZoneRepository"]

# Fin del archivo analytics/modules/providers/repositories/provider_repository.py
