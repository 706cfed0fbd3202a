# -*- coding: utf-8 -*-
"""
analytics/modules/normalization/services/normalization_service.py

Motor de reconciliación: clasifica un evento crudo, lo despacha a su handler
y aísla los fallos por evento.

Contrato de `normalize_event`:
- Nunca lanza hacia afuera; siempre devuelve un NormalizationResult.
- Cada evento corre dentro de un SAVEPOINT: si el handler falla, se
  deshacen solo sus escrituras y la sesión sigue usable para el resto
  del lote.
- La sesión se inyecta; el commit lo decide quien llama.

Autor: Equipo Analytics
Fecha: 2025-11-06
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from analytics.modules.categories.repositories import CategoryRepository
from analytics.modules.normalization.classifier import EventKind, classify
from analytics.modules.normalization.errors import ReferentialGap, UnresolvableIdentifier
from analytics.modules.normalization.handlers import (
    CategoryEventHandler,
    EventContext,
    EventHandler,
    PaymentEventHandler,
    ProviderEventHandler,
    QuoteAcceptanceHandler,
    RequestEventHandler,
    UserEventHandler,
    ZoneEventHandler,
)
from analytics.modules.normalization.metrics import observe_event
from analytics.modules.normalization.payload import extract_payload
from analytics.modules.normalization.results import NormalizationOutcome, NormalizationResult
from analytics.modules.payments.repositories import PaymentRepository
from analytics.modules.providers.repositories import (
    ProviderRepository,
    ProviderSkillRepository,
    ProviderZoneRepository,
)
from analytics.modules.requests.repositories import ServiceRequestRepository
from analytics.modules.users.repositories import UserRepository

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _aware(value: Optional[datetime], fallback: datetime) -> datetime:
    if value is None:
        return fallback
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def build_default_handlers(default_currency: str = "ARS") -> dict[EventKind, EventHandler]:
    """Handlers estándar con sus repositorios."""
    requests = ServiceRequestRepository()
    zones = ProviderZoneRepository()
    return {
        EventKind.USER: UserEventHandler(UserRepository()),
        EventKind.REQUEST: RequestEventHandler(requests, zones),
        EventKind.QUOTE_ACCEPTANCE: QuoteAcceptanceHandler(requests),
        EventKind.PAYMENT: PaymentEventHandler(PaymentRepository(), default_currency=default_currency),
        EventKind.PROVIDER: ProviderEventHandler(ProviderRepository(), ProviderSkillRepository(), zones),
        EventKind.CATEGORY: CategoryEventHandler(CategoryRepository()),
        EventKind.ZONE: ZoneEventHandler(),
    }


class EventNormalizer:
    """
    Orquestador de normalización.

    Acepta cualquier objeto con atributos `id`, `category`, `name`, `body`
    y `timestamp` (normalmente un RawEvent).
    """

    def __init__(
        self,
        handlers: Optional[Mapping[EventKind, EventHandler]] = None,
        *,
        default_currency: str = "ARS",
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.handlers: Mapping[EventKind, EventHandler] = (
            handlers if handlers is not None else build_default_handlers(default_currency)
        )
        self._clock = clock

    def build_context(self, event: Any) -> EventContext:
        processed_at = self._clock()
        return EventContext(
            event_id=getattr(event, "id", None),
            category=(getattr(event, "category", None) or "").strip().lower(),
            name=(getattr(event, "name", None) or "").strip().lower(),
            payload=extract_payload(getattr(event, "body", None)),
            occurred_at=_aware(getattr(event, "timestamp", None), processed_at),
            processed_at=processed_at,
        )

    async def normalize_event(self, session: AsyncSession, event: Any) -> NormalizationResult:
        result = await self._normalize(session, event)
        observe_event(result)
        return result

    async def _normalize(self, session: AsyncSession, event: Any) -> NormalizationResult:
        event_id = getattr(event, "id", None)
        kind = classify(getattr(event, "category", None), getattr(event, "name", None))
        if kind is None:
            logger.warning(
                "[Normalization] Evento %s sin clasificación (category=%r, name=%r); descartado",
                event_id,
                getattr(event, "category", None),
                getattr(event, "name", None),
            )
            return NormalizationResult.skipped(event_id, None, "unclassified")

        handler = self.handlers.get(kind)
        if handler is None:
            logger.warning("[Normalization] Sin handler registrado para %s (event=%s)", kind, event_id)
            return NormalizationResult.skipped(event_id, kind, "no_handler")

        try:
            ctx = self.build_context(event)
            async with session.begin_nested():
                outcome = await handler.handle(session, ctx)
        except (UnresolvableIdentifier, ReferentialGap) as e:
            logger.warning("[Normalization] Evento %s omitido (%s): %s", event_id, kind, e.message)
            return NormalizationResult.skipped(event_id, kind, e.message)
        except Exception as e:
            logger.exception("[Normalization] Error normalizando evento %s (%s): %s", event_id, kind, e)
            return NormalizationResult.failed(event_id, kind, e)

        if outcome is NormalizationOutcome.SKIPPED:
            return NormalizationResult.skipped(event_id, kind, "no_op")
        return NormalizationResult.ok(event_id, kind)


__all__ = ["EventNormalizer", "build_default_handlers"]

# Fin del archivo analytics/modules/normalization/services/normalization_service.py
