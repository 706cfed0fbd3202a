# -*- coding: utf-8 -*-
"""
analytics/modules/normalization/handlers/user_handler.py

Normaliza eventos de usuario (user_created, user_updated, user_deactivated,
user_rejected y sus equivalentes en español).

Autor: Equipo Analytics
Fecha: 2025-11-05
"""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from analytics.modules.normalization.classifier import EventKind
from analytics.modules.normalization.handlers.base import EventContext, EventHandler
from analytics.modules.normalization.results import NormalizationOutcome
from analytics.modules.users.enums import UserStatus
from analytics.modules.users.repositories import UserRepository

logger = logging.getLogger(__name__)

USER_ID_KEYS = ("userId", "id_usuario", "user_id", "id")
ROLE_KEYS = ("role", "rol", "tipo_usuario")
LOCATION_KEYS = ("location", "ubicacion", "city", "provincia")
PROVIDER_ROLES = ("prestador", "provider")


def status_for(ctx: EventContext) -> UserStatus:
    if ctx.name_has("deactivated", "baja"):
        return UserStatus.DEACTIVATED
    if ctx.name_has("rejected", "rechazado"):
        return UserStatus.REJECTED
    return UserStatus.ACTIVE


class UserEventHandler(EventHandler):
    kind = EventKind.USER

    def __init__(self, users: UserRepository) -> None:
        self.users = users

    async def handle(self, session: AsyncSession, ctx: EventContext) -> NormalizationOutcome:
        user_id = ctx.require_id("userId", USER_ID_KEYS)

        status = status_for(ctx)
        role = str(ctx.payload.first(*ROLE_KEYS) or "unknown").strip()
        location = ctx.payload.first(*LOCATION_KEYS) if role.lower() in PROVIDER_ROLES else None
        if location is not None:
            location = str(location)

        values = {
            "role": role,
            "status": status,
            "location": location,
            "last_event_at": ctx.occurred_at,
        }
        if status is UserStatus.DEACTIVATED:
            values["deactivated_at"] = ctx.occurred_at

        _, created = await self.users.upsert(session, user_id, **values)
        logger.debug(
            "[Normalization] user %s %s (status=%s, event=%s)",
            user_id,
            "creado" if created else "actualizado",
            status,
            ctx.event_id,
        )
        return NormalizationOutcome.APPLIED


__all__ = ["UserEventHandler", "status_for"]

# Fin del archivo analytics/modules/normalization/handlers/user_handler.py
