# -*- coding: utf-8 -*-
"""
analytics/modules/normalization/handlers/base.py

Contrato común de los handlers de normalización.

Cada handler recibe la sesión inyectada y un EventContext ya preparado
(payload extraído, nombre en minúsculas, timestamps) y devuelve un
NormalizationOutcome:

- APPLIED: escribió (o confirmó) el estado de la entidad.
- SKIPPED: el evento no aplica (no-op legítimo).

Las omisiones por calidad de datos se señalan con UnresolvableIdentifier /
ReferentialGap; cualquier otra excepción es un fallo.

Autor: Equipo Analytics
Fecha: 2025-11-05
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from analytics.modules.normalization.classifier import EventKind
from analytics.modules.normalization.coercion import ExternalId, extract_id
from analytics.modules.normalization.errors import UnresolvableIdentifier
from analytics.modules.normalization.payload import ExtractedPayload
from analytics.modules.normalization.results import NormalizationOutcome


@dataclass(frozen=True)
class EventContext:
    """Vista de un evento crudo preparada para los handlers."""

    event_id: Any
    category: str
    name: str
    payload: ExtractedPayload
    occurred_at: datetime
    processed_at: datetime

    def name_has(self, *keywords: str) -> bool:
        return any(k in self.name for k in keywords)

    def id_from(self, *keys: str) -> ExternalId | None:
        return extract_id(self.payload.first(*keys))

    def require_id(self, field: str, keys: Iterable[str]) -> ExternalId:
        external_id = self.id_from(*keys)
        if external_id is None:
            raise UnresolvableIdentifier(field, event_id=self.event_id)
        return external_id


class EventHandler(ABC):
    """Handler de una entidad normalizada."""

    kind: EventKind

    @abstractmethod
    async def handle(self, session: AsyncSession, ctx: EventContext) -> NormalizationOutcome:
        raise NotImplementedError


__all__ = ["EventContext", "EventHandler"]

# Fin del archivo analytics/modules/normalization/handlers/base.py
