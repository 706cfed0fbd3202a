# -*- coding: utf-8 -*-
"""
analytics/modules/normalization/handlers/zone_handler.py

Eventos de catálogo de zonas. Hoy no se mantienen zonas independientes: las
zonas se desnormalizan desde los eventos de prestador, así que el evento se
registra y se omite.

Autor: Equipo Analytics
Fecha: 2025-11-06
"""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from analytics.modules.normalization.classifier import EventKind
from analytics.modules.normalization.handlers.base import EventContext, EventHandler
from analytics.modules.normalization.results import NormalizationOutcome

logger = logging.getLogger(__name__)


class ZoneEventHandler(EventHandler):
    kind = EventKind.ZONE

    async def handle(self, session: AsyncSession, ctx: EventContext) -> NormalizationOutcome:
        logger.info(
            "[Normalization] evento de zona %r sin efecto; las zonas llegan vía prestador (event=%s)",
            ctx.name,
            ctx.event_id,
        )
        return NormalizationOutcome.SKIPPED


__all__ = ["ZoneEventHandler"]

# Fin del archivo analytics/modules/normalization/handlers/zone_handler.py
