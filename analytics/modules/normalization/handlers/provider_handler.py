# -*- coding: utf-8 -*-
"""
analytics/modules/normalization/handlers/provider_handler.py

Normaliza eventos de prestador (alta, modificación, baja).

Las habilidades y zonas del prestador llegan como arrays embebidos y se
upsertean como sub-colecciones (clave compuesta prestador + habilidad/zona).
Una baja solo cambia el estado: no toca las sub-colecciones.

Autor: Equipo Analytics
Fecha: 2025-11-06
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from analytics.modules.normalization.classifier import EventKind
from analytics.modules.normalization.coercion import ExternalId, extract_id
from analytics.modules.normalization.handlers.base import EventContext, EventHandler
from analytics.modules.normalization.payload import ExtractedPayload, PayloadShape
from analytics.modules.normalization.results import NormalizationOutcome
from analytics.modules.providers.enums import ProviderStatus
from analytics.modules.providers.repositories import (
    ProviderRepository,
    ProviderSkillRepository,
    ProviderZoneRepository,
)

logger = logging.getLogger(__name__)

PROVIDER_ID_KEYS = ("prestadorId", "id_prestador", "providerId", "id")
FIRST_NAME_KEYS = ("nombre", "name", "firstName")
LAST_NAME_KEYS = ("apellido", "lastName", "surname")
PHOTO_KEYS = ("foto", "photo", "photoUrl")
SKILLS_KEYS = ("habilidades", "skills")
ZONES_KEYS = ("zonas", "zones")

SKILL_ID_KEYS = ("id", "skillId", "habilidadId", "id_habilidad")
SKILL_NAME_KEYS = ("nombre", "name", "skillName")
SKILL_CATEGORY_KEYS = ("categoryId", "rubroId", "id_rubro")
ZONE_ID_KEYS = ("id", "zoneId", "zonaId", "id_zona")
ZONE_NAME_KEYS = ("nombre", "name", "zona", "zoneName")


def is_deactivation(ctx: EventContext) -> bool:
    return ctx.name_has("baja", "deactivat")


def profile_complete(payload: ExtractedPayload) -> bool:
    """Nombre, apellido, foto, zonas y habilidades presentes."""
    return all(
        payload.first(*keys) is not None
        for keys in (FIRST_NAME_KEYS, LAST_NAME_KEYS, PHOTO_KEYS, ZONES_KEYS, SKILLS_KEYS)
    )


def _item(value: Any) -> ExtractedPayload:
    # Elementos sueltos (solo el id) se tratan como {"id": valor}
    if isinstance(value, Mapping):
        return ExtractedPayload(PayloadShape.FLAT, value)
    return ExtractedPayload(PayloadShape.FLAT, {"id": value})


def _text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, (dict, list)):
        return None
    return str(value).strip() or None


class ProviderEventHandler(EventHandler):
    kind = EventKind.PROVIDER

    def __init__(
        self,
        providers: ProviderRepository,
        skills: ProviderSkillRepository,
        zones: ProviderZoneRepository,
    ) -> None:
        self.providers = providers
        self.skills = skills
        self.zones = zones

    async def handle(self, session: AsyncSession, ctx: EventContext) -> NormalizationOutcome:
        provider_id = ctx.require_id("providerId", PROVIDER_ID_KEYS)

        if is_deactivation(ctx):
            await self.providers.upsert(session, provider_id, status=ProviderStatus.DEACTIVATED)
            logger.debug("[Normalization] provider %s dado de baja (event=%s)", provider_id, ctx.event_id)
            return NormalizationOutcome.APPLIED

        payload = ctx.payload
        values: dict[str, Any] = {
            "status": ProviderStatus.ACTIVE,
            "profile_complete": profile_complete(payload),
        }
        first_name = _text(payload.first(*FIRST_NAME_KEYS))
        last_name = _text(payload.first(*LAST_NAME_KEYS))
        if first_name is not None:
            values["first_name"] = first_name
        if last_name is not None:
            values["last_name"] = last_name

        _, created = await self.providers.upsert(session, provider_id, **values)

        skills = await self._upsert_skills(session, ctx, provider_id)
        zones = await self._upsert_zones(session, ctx, provider_id)
        logger.debug(
            "[Normalization] provider %s %s (skills=%d, zones=%d, event=%s)",
            provider_id,
            "creado" if created else "actualizado",
            skills,
            zones,
            ctx.event_id,
        )
        return NormalizationOutcome.APPLIED

    async def _upsert_skills(self, session: AsyncSession, ctx: EventContext, provider_id: ExternalId) -> int:
        items = ctx.payload.first(*SKILLS_KEYS)
        if not isinstance(items, list):
            return 0
        count = 0
        for raw in items:
            item = _item(raw)
            skill_id = extract_id(item.first(*SKILL_ID_KEYS))
            if skill_id is None:
                logger.warning("[Normalization] habilidad sin id en provider %s (event=%s)", provider_id, ctx.event_id)
                continue
            await self.skills.upsert(
                session,
                provider_id,
                skill_id,
                skill_name=_text(item.first(*SKILL_NAME_KEYS)),
                category_id=extract_id(item.first(*SKILL_CATEGORY_KEYS)),
                active=True,
            )
            count += 1
        return count

    async def _upsert_zones(self, session: AsyncSession, ctx: EventContext, provider_id: ExternalId) -> int:
        items = ctx.payload.first(*ZONES_KEYS)
        if not isinstance(items, list):
            return 0
        count = 0
        for raw in items:
            item = _item(raw)
            zone_id = extract_id(item.first(*ZONE_ID_KEYS))
            if zone_id is None:
                logger.warning("[Normalization] zona sin id en provider %s (event=%s)", provider_id, ctx.event_id)
                continue
            await self.zones.upsert(
                session,
                provider_id,
                zone_id,
                zone_name=_text(item.first(*ZONE_NAME_KEYS)) or "unknown",
                active=True,
            )
            count += 1
        return count


__all__ = ["ProviderEventHandler", "profile_complete", "is_deactivation"]

# Fin del archivo analytics/modules/normalization/handlers/provider_handler.py
