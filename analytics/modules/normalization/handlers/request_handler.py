# -*- coding: utf-8 -*-
"""
analytics/modules/normalization/handlers/request_handler.py

Normaliza eventos de solicitudes de servicio (solicitud creada, cancelada,
aceptada, rechazada, prestador asignado, pedido finalizado...).

Reglas:
- El estado sale de palabras clave del nombre del evento; "assigned" marca
  provider_assigned sin tocar el estado.
- La zona se resuelve contra el catálogo de zonas activas (coincidencia
  exacta sin distinguir mayúsculas). Si no hay coincidencia se guarda el
  texto original. Si el evento no trae zona pero se conoce el prestador,
  se infiere de su primera zona activa.
- Solo se actualizan los campos presentes en el evento.

Autor: Equipo Analytics
Fecha: 2025-11-05
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from analytics.modules.normalization.classifier import EventKind
from analytics.modules.normalization.errors import UnresolvableIdentifier
from analytics.modules.normalization.handlers.base import EventContext, EventHandler
from analytics.modules.normalization.results import NormalizationOutcome
from analytics.modules.providers.repositories import ProviderZoneRepository
from analytics.modules.requests.enums import RequestStatus
from analytics.modules.requests.repositories import ServiceRequestRepository

logger = logging.getLogger(__name__)

REQUEST_ID_KEYS = ("requestId", "solicitudId", "id_solicitud", "orderId", "pedidoId", "id")
REQUESTER_ID_KEYS = ("userId", "id_usuario", "clienteId", "requesterId")
PROVIDER_ID_KEYS = ("providerId", "prestadorId", "id_prestador")
SKILL_ID_KEYS = ("skillId", "habilidadId", "id_habilidad")

ADDRESS_KEYS = ("address", "direccion")
ADDRESS_ZONE_KEYS = ("zone", "zona", "city", "ciudad", "provincia", "state")
FLAT_ZONE_KEYS = ("zona", "zone", "location", "ciudad", "provincia")

CRITICAL_FLAG_KEYS = ("es_critica", "critica", "isCritical", "critical")


def status_for(ctx: EventContext) -> Optional[RequestStatus]:
    """Estado reclamado por el nombre del evento, o None si no reclama ninguno."""
    if ctx.name_has("cancel"):
        return RequestStatus.CANCELLED
    if ctx.name_has("accept", "aceptada", "finalized", "finalizado"):
        return RequestStatus.ACCEPTED
    if ctx.name_has("reject", "rechazada"):
        return RequestStatus.REJECTED
    if ctx.name_has("created", "requested", "creada"):
        return RequestStatus.CREATED
    return None


def raw_zone(ctx: EventContext) -> Optional[str]:
    """Zona en texto libre: primero el sub-objeto de dirección, luego campos planos."""
    for key in ADDRESS_KEYS:
        address = ctx.payload.section(key)
        value = address.first(*ADDRESS_ZONE_KEYS)
        if value is not None:
            return str(value).strip()
    value = ctx.payload.first(*FLAT_ZONE_KEYS)
    if value is not None and not isinstance(value, (dict, list)):
        return str(value).strip()
    return None


def critical_flag(ctx: EventContext) -> Optional[bool]:
    """None si el evento no dice nada sobre criticidad."""
    fields = ctx.payload.fields
    present = "urgency" in fields or any(k in fields for k in CRITICAL_FLAG_KEYS)
    if not present:
        return None
    urgency = str(fields.get("urgency") or "").strip().lower()
    return urgency == "high" or any(fields.get(k) is True for k in CRITICAL_FLAG_KEYS)


class RequestEventHandler(EventHandler):
    kind = EventKind.REQUEST

    def __init__(self, requests: ServiceRequestRepository, zones: ProviderZoneRepository) -> None:
        self.requests = requests
        self.zones = zones

    async def _resolve_zone(self, session: AsyncSession, ctx: EventContext, raw: str) -> str:
        canonical = await self.zones.find_active_zone_name(session, raw)
        if canonical is None:
            logger.warning(
                "[Normalization] Zona %r sin coincidencia en catálogo; se guarda tal cual (event=%s)",
                raw,
                ctx.event_id,
            )
            return raw
        return canonical

    async def _infer_zone(self, session: AsyncSession, provider_id: int) -> Optional[str]:
        zone = await self.zones.first_active_for_provider(session, provider_id)
        return zone.zone_name if zone is not None else None

    async def handle(self, session: AsyncSession, ctx: EventContext) -> NormalizationOutcome:
        request_id = ctx.require_id("requestId", REQUEST_ID_KEYS)
        existing = await self.requests.get_by_external_id(session, request_id)

        requester_id = ctx.id_from(*REQUESTER_ID_KEYS)
        if existing is None and requester_id is None:
            raise UnresolvableIdentifier("requesterId", event_id=ctx.event_id)

        provider_id = ctx.id_from(*PROVIDER_ID_KEYS)
        skill_id = ctx.id_from(*SKILL_ID_KEYS)
        status = status_for(ctx)
        assigned = ctx.name_has("assigned", "asignado")

        values: dict[str, Any] = {"last_event_at": ctx.occurred_at}
        if requester_id is not None:
            values["requester_id"] = requester_id
        if provider_id is not None:
            values["provider_id"] = provider_id
        if skill_id is not None:
            values["skill_id"] = skill_id
        if status is not None:
            values["status"] = status
        elif existing is None:
            values["status"] = RequestStatus.CREATED
        if assigned:
            values["provider_assigned"] = True

        critical = critical_flag(ctx)
        if critical is not None:
            values["is_critical"] = critical

        zone_text = raw_zone(ctx)
        if zone_text:
            values["zone_name"] = await self._resolve_zone(session, ctx, zone_text)
        elif existing is None or existing.zone_name is None:
            known_provider = provider_id if provider_id is not None else (existing.provider_id if existing else None)
            if known_provider is not None:
                inferred = await self._infer_zone(session, known_provider)
                if inferred is not None:
                    values["zone_name"] = inferred

        if existing is None:
            await self.requests.create(session, external_id=request_id, **values)
        else:
            await self.requests.update(session, existing, **values)

        logger.debug(
            "[Normalization] request %s %s (status=%s, event=%s)",
            request_id,
            "creada" if existing is None else "actualizada",
            values.get("status", existing.status if existing else None),
            ctx.event_id,
        )
        return NormalizationOutcome.APPLIED


__all__ = ["RequestEventHandler", "status_for", "raw_zone", "critical_flag"]

# Fin del archivo analytics/modules/normalization/handlers/request_handler.py
