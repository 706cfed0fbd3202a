# -*- coding: utf-8 -*-
"""
analytics/modules/normalization/handlers/category_handler.py

Normaliza eventos de categoría (rubro): upsert en alta/modificación y
borrado físico en baja.

Autor: Equipo Analytics
Fecha: 2025-11-06
"""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from analytics.modules.categories.repositories import CategoryRepository
from analytics.modules.normalization.classifier import EventKind
from analytics.modules.normalization.handlers.base import EventContext, EventHandler
from analytics.modules.normalization.results import NormalizationOutcome

logger = logging.getLogger(__name__)

CATEGORY_ID_KEYS = ("categoryId", "rubroId", "id_rubro", "id")
CATEGORY_NAME_KEYS = ("nombre", "name", "nombre_rubro", "rubro")


class CategoryEventHandler(EventHandler):
    kind = EventKind.CATEGORY

    def __init__(self, categories: CategoryRepository) -> None:
        self.categories = categories

    async def handle(self, session: AsyncSession, ctx: EventContext) -> NormalizationOutcome:
        category_id = ctx.require_id("categoryId", CATEGORY_ID_KEYS)

        if ctx.name_has("deactivated", "baja", "deleted"):
            deleted = await self.categories.delete_by_external_id(session, category_id)
            logger.debug(
                "[Normalization] category %s eliminada (filas=%d, event=%s)",
                category_id,
                deleted,
                ctx.event_id,
            )
            return NormalizationOutcome.APPLIED

        name = ctx.payload.first(*CATEGORY_NAME_KEYS)
        await self.categories.upsert(session, category_id, name=str(name) if name is not None else "unknown")
        logger.debug("[Normalization] category %s normalizada (event=%s)", category_id, ctx.event_id)
        return NormalizationOutcome.APPLIED


__all__ = ["CategoryEventHandler"]

# Fin del archivo analytics/modules/normalization/handlers/category_handler.py
