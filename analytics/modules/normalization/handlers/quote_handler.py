# -*- coding: utf-8 -*-
"""
analytics/modules/normalization/handlers/quote_handler.py

Aceptación de cotización: actualiza la Solicitud (no existe entidad
Cotización normalizada). confirmed_at es la señal autoritativa para las
métricas de latencia de matching.

Autor: Equipo Analytics
Fecha: 2025-11-05
"""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from analytics.modules.normalization.classifier import EventKind
from analytics.modules.normalization.errors import ReferentialGap
from analytics.modules.normalization.handlers.base import EventContext, EventHandler
from analytics.modules.normalization.handlers.request_handler import PROVIDER_ID_KEYS
from analytics.modules.normalization.results import NormalizationOutcome
from analytics.modules.requests.enums import RequestStatus
from analytics.modules.requests.repositories import ServiceRequestRepository

logger = logging.getLogger(__name__)

# `id` aquí es el id de la cotización, no de la solicitud
QUOTE_REQUEST_ID_KEYS = ("requestId", "solicitudId", "id_solicitud", "orderId", "pedidoId")


class QuoteAcceptanceHandler(EventHandler):
    kind = EventKind.QUOTE_ACCEPTANCE

    def __init__(self, requests: ServiceRequestRepository) -> None:
        self.requests = requests

    async def handle(self, session: AsyncSession, ctx: EventContext) -> NormalizationOutcome:
        request_id = ctx.require_id("requestId", QUOTE_REQUEST_ID_KEYS)

        request = await self.requests.get_by_external_id(session, request_id)
        if request is None:
            # La aceptación no puede crear la solicitud retroactivamente
            raise ReferentialGap("ServiceRequest", request_id, event_id=ctx.event_id)

        values = {
            "status": RequestStatus.ACCEPTED,
            "confirmed_at": ctx.processed_at,
            "last_event_at": ctx.occurred_at,
        }
        provider_id = ctx.id_from(*PROVIDER_ID_KEYS)
        if provider_id is not None:
            values["provider_id"] = provider_id

        await self.requests.update(session, request, **values)
        logger.debug("[Normalization] request %s aceptada vía cotización (event=%s)", request_id, ctx.event_id)
        return NormalizationOutcome.APPLIED


__all__ = ["QuoteAcceptanceHandler"]

# Fin del archivo analytics/modules/normalization/handlers/quote_handler.py
