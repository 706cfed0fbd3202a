# -*- coding: utf-8 -*-
"""
analytics/modules/events/services/raw_event_service.py

Ingesta de eventos crudos.

- hub_envelope_to_message(): convierte una entrega del bus (MessageEnvelope)
  al EventMessage interno.
- RawEventService.record_event(): persiste el evento, idempotente por
  message_id (una re-entrega devuelve la fila existente).
- RawEventService.record_and_normalize(): camino en línea de la ingesta en
  vivo; guarda el evento y, si la normalización no falla, lo marca
  processed=true. Los atrasos los cubre el replay por lotes.

Autor: Equipo Analytics
Fecha: 2025-11-06
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Mapping, Optional, Union

from sqlalchemy.ext.asyncio import AsyncSession

from analytics.modules.events.models import RawEvent
from analytics.modules.events.repositories import RawEventRepository
from analytics.modules.events.schemas import EventMessage, HubEnvelope

if TYPE_CHECKING:
    from analytics.modules.normalization.results import NormalizationResult
    from analytics.modules.normalization.services import EventNormalizer

logger = logging.getLogger(__name__)

HUB_SOURCE = "core-hub"


def squad_from_channel(channel: Optional[str]) -> str:
    """Squad productor: primer segmento del canal ("payments.payment.processed" -> "payments")."""
    if not channel:
        return "unknown"
    return channel.split(".", 1)[0] or "unknown"


def hub_envelope_to_message(envelope: Union[HubEnvelope, Mapping[str, Any]]) -> EventMessage:
    """
    Convierte un sobre del bus al formato interno.

    El body conserva la forma de sobre (clave `payload`) para que el
    extractor lo reconozca como entrega multi-salto.
    """
    hub = envelope if isinstance(envelope, HubEnvelope) else HubEnvelope.model_validate(envelope)
    channel = hub.destination.channel
    timestamp = hub.timestamp or datetime.now(timezone.utc)

    body = {
        "messageId": hub.message_id,
        "timestamp": timestamp.isoformat(),
        "payload": hub.payload,
        "destination": hub.destination.model_dump(mode="json", by_alias=True),
    }
    return EventMessage(
        squad=squad_from_channel(channel),
        category=channel or "unknown",
        name=hub.destination.routing_key or "unknown",
        body=body,
        timestamp=timestamp,
        message_id=hub.message_id,
        correlation_id=hub.correlation_id,
        source=HUB_SOURCE,
    )


class RawEventService:
    def __init__(self, events: Optional[RawEventRepository] = None) -> None:
        self.events = events or RawEventRepository()

    async def record_event(self, session: AsyncSession, message: EventMessage) -> tuple[RawEvent, bool]:
        """
        Persiste el evento.

        Returns:
            (evento, created): created=False si el message_id ya existía.
        """
        if message.message_id:
            existing = await self.events.get_by_message_id(session, message.message_id)
            if existing is not None:
                logger.info(
                    "[RawEvents] message_id %s ya registrado (id=%s); re-entrega ignorada",
                    message.message_id,
                    existing.id,
                )
                return existing, False

        event = await self.events.create(
            session,
            squad=message.squad,
            category=message.category,
            name=message.name,
            body=message.body,
            timestamp=message.timestamp,
            processed=False,
            message_id=message.message_id,
            correlation_id=message.correlation_id,
            source=message.source,
        )
        logger.debug("[RawEvents] Evento %s registrado (%s/%s)", event.id, event.category, event.name)
        return event, True

    async def record_and_normalize(
        self,
        session: AsyncSession,
        message: EventMessage,
        normalizer: "EventNormalizer",
    ) -> tuple[RawEvent, Optional["NormalizationResult"]]:
        """
        Guarda y normaliza en línea. Una re-entrega ya procesada no se
        vuelve a normalizar (resultado None).
        """
        event, created = await self.record_event(session, message)
        if not created and event.processed:
            return event, None

        result = await normalizer.normalize_event(session, event)
        if not result.is_failure:
            await self.events.mark_processed(session, event)
        return event, result


__all__ = ["RawEventService", "hub_envelope_to_message", "squad_from_channel", "HUB_SOURCE"]

# Fin del archivo analytics/modules/events/services/raw_event_service.py
