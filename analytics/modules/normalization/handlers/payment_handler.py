# -*- coding: utf-8 -*-
"""
analytics/modules/normalization/handlers/payment_handler.py

Normaliza eventos de pago. Es el handler con más reglas de reconciliación.

Formas de evento soportadas:

1. Productor de matching: los campos del pago vienen bajo `payment` y el
   evento no trae id de pago, solo el de la solicitud. Se crea (o refresca) un placeholder
   con id sintético request_id + PLACEHOLDER_ID_OFFSET. Si ya existe un pago
   real para esa solicitud, el evento no hace nada.

2. Productor de pagos: trae el id real. Si el pago aún no existe se borra el
   placeholder de la misma solicitud (si lo hay) y se crea la fila real.

Merge de estado contra la fila existente:
- Evento de selección de método: no reclama estado; actualiza `method` y
  completa los ids (pagador, prestador, solicitud) que traiga.
- Estado terminal + reclamo `pending`: se conserva el terminal (warning).
- En otro caso gana el estado reclamado.

captured_at: solo cuando el estado resultante es `approved` (updatedAt del
payload o, si falta, la hora de procesamiento); si no, se conserva el previo.

Autor: Equipo Analytics
Fecha: 2025-11-06
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Mapping, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from analytics.modules.normalization.classifier import EventKind
from analytics.modules.normalization.coercion import ExternalId, extract_decimal, extract_id, parse_component_timestamp
from analytics.modules.normalization.errors import UnresolvableIdentifier
from analytics.modules.normalization.handlers.base import EventContext, EventHandler
from analytics.modules.normalization.payload import ExtractedPayload
from analytics.modules.normalization.results import NormalizationOutcome
from analytics.modules.payments.enums import PaymentStatus
from analytics.modules.payments.models import Payment, placeholder_id_for
from analytics.modules.payments.repositories import PaymentRepository

logger = logging.getLogger(__name__)

MATCHING_SECTION_KEY = "payment"

PAYMENT_ID_KEYS = ("paymentId", "pagoId", "id_pago", "id")
PAYER_ID_KEYS = ("userId", "id_usuario", "clienteId", "payerId")
PROVIDER_ID_KEYS = ("providerId", "prestadorId", "id_prestador")
REQUEST_ID_KEYS = ("requestId", "solicitudId", "id_solicitud", "orderId")

AMOUNT_KEYS = ("amount", "monto", "monto_total", "total")
CURRENCY_KEYS = ("currency", "moneda")
METHOD_KEYS = ("method", "metodo", "paymentMethod")
STATUS_KEYS = ("status", "estado")
REFUND_ID_KEYS = ("refundId", "id_reembolso", "refund_id")
UPDATED_AT_KEYS = ("updatedAt", "updated_at")
CREATED_AT_KEYS = ("createdAt", "created_at")

# Palabras clave del nombre del evento, en orden de prioridad
_NAME_STATUS_KEYWORDS = (
    (("approved", "aprobado"), PaymentStatus.APPROVED),
    (("rejected", "rechazado"), PaymentStatus.REJECTED),
    (("expired", "expirado"), PaymentStatus.EXPIRED),
    (("refund", "reembolso"), PaymentStatus.REFUNDED),
)


def is_method_selection(ctx: EventContext) -> bool:
    return ctx.name_has("method", "metodo")


def claimed_status(ctx: EventContext, fields: ExtractedPayload) -> Optional[PaymentStatus]:
    """
    Estado que reclama el evento, o None para selección de método.

    Prioridad: campo de estado explícito > palabras clave del nombre > pending.
    """
    if is_method_selection(ctx):
        return None
    explicit = PaymentStatus.from_producer(fields.first(*STATUS_KEYS))
    if explicit is not None:
        return explicit
    for keywords, status in _NAME_STATUS_KEYWORDS:
        if ctx.name_has(*keywords):
            return status
    return PaymentStatus.PENDING


def merge_status(
    existing: Optional[PaymentStatus],
    claimed: Optional[PaymentStatus],
) -> PaymentStatus:
    """Aplica las reglas de monotonía sobre el estado guardado."""
    if existing is None:
        return claimed or PaymentStatus.PENDING
    if claimed is None:
        return existing
    if existing.is_terminal and claimed is PaymentStatus.PENDING:
        return existing
    return claimed


class PaymentEventHandler(EventHandler):
    kind = EventKind.PAYMENT

    def __init__(self, payments: PaymentRepository, default_currency: str = "ARS") -> None:
        self.payments = payments
        self.default_currency = default_currency

    async def handle(self, session: AsyncSession, ctx: EventContext) -> NormalizationOutcome:
        if isinstance(ctx.payload.get(MATCHING_SECTION_KEY), Mapping) and ctx.id_from(*PAYMENT_ID_KEYS) is None:
            return await self._handle_matching(session, ctx)
        return await self._handle_direct(session, ctx)

    # -----------------------------------------------------------
    # Productor de matching (placeholder)
    # -----------------------------------------------------------
    async def _handle_matching(self, session: AsyncSession, ctx: EventContext) -> NormalizationOutcome:
        section = ctx.payload.section(MATCHING_SECTION_KEY)
        request_id = ctx.id_from(*REQUEST_ID_KEYS) or extract_id(section.first(*REQUEST_ID_KEYS))
        if request_id is None:
            raise UnresolvableIdentifier("requestId", event_id=ctx.event_id)

        real = await self.payments.get_real_by_request_id(session, request_id)
        if real is not None:
            logger.debug(
                "[Normalization] request %s ya tiene pago real %s; evento de matching ignorado (event=%s)",
                request_id,
                real.external_id,
                ctx.event_id,
            )
            return NormalizationOutcome.SKIPPED

        amount = extract_decimal(section.first(*AMOUNT_KEYS))
        method = self._text(section.first(*METHOD_KEYS))
        placeholder = await self.payments.get_placeholder_for_request(session, request_id)

        if placeholder is not None:
            if placeholder.status is not PaymentStatus.PENDING or placeholder.captured_at is not None:
                logger.debug(
                    "[Normalization] placeholder %s ya no está pendiente; sin cambios (event=%s)",
                    placeholder.external_id,
                    ctx.event_id,
                )
                return NormalizationOutcome.SKIPPED
            await self.payments.update(
                session,
                placeholder,
                amount=amount if section.first(*AMOUNT_KEYS) is not None else placeholder.amount,
                method=method or placeholder.method,
                last_updated_at=ctx.occurred_at,
            )
            logger.debug("[Normalization] placeholder %s refrescado (event=%s)", placeholder.external_id, ctx.event_id)
            return NormalizationOutcome.APPLIED

        payer_id = ctx.id_from(*PAYER_ID_KEYS) or extract_id(section.first(*PAYER_ID_KEYS))
        provider_id = ctx.id_from(*PROVIDER_ID_KEYS) or extract_id(section.first(*PROVIDER_ID_KEYS))
        await self.payments.create(
            session,
            external_id=placeholder_id_for(request_id),
            request_id=request_id,
            payer_id=payer_id,
            provider_id=provider_id,
            amount=amount,
            currency=self._text(section.first(*CURRENCY_KEYS)) or self.default_currency,
            method=method,
            status=PaymentStatus.PENDING,
            created_at=ctx.occurred_at,
            last_updated_at=ctx.occurred_at,
            is_placeholder=True,
        )
        logger.debug(
            "[Normalization] placeholder %s creado para request %s (event=%s)",
            placeholder_id_for(request_id),
            request_id,
            ctx.event_id,
        )
        return NormalizationOutcome.APPLIED

    # -----------------------------------------------------------
    # Productor de pagos (id real)
    # -----------------------------------------------------------
    async def _handle_direct(self, session: AsyncSession, ctx: EventContext) -> NormalizationOutcome:
        fields = ctx.payload
        payment_id = ctx.require_id("paymentId", PAYMENT_ID_KEYS)
        payer_id = ctx.id_from(*PAYER_ID_KEYS)
        provider_id = ctx.id_from(*PROVIDER_ID_KEYS)
        request_id = ctx.id_from(*REQUEST_ID_KEYS)

        existing = await self.payments.get_by_external_id(session, payment_id)
        if existing is None and request_id is not None:
            await self._supersede_placeholder(session, ctx, request_id, payment_id)

        claimed = claimed_status(ctx, fields)
        previous = existing.status if existing is not None else None
        status = merge_status(previous, claimed)
        if previous is not None and previous.is_terminal and claimed is PaymentStatus.PENDING:
            logger.warning(
                "[Normalization] pago %s en estado terminal %s recibió 'pending'; se conserva (event=%s)",
                payment_id,
                previous,
                ctx.event_id,
            )

        updated_at = parse_component_timestamp(fields.first(*UPDATED_AT_KEYS))
        captured_at = self._captured_at(existing, status, updated_at, ctx.processed_at)

        values: dict[str, Any] = {
            "status": status,
            "captured_at": captured_at,
            "last_updated_at": updated_at or ctx.occurred_at,
        }
        method = self._text(fields.first(*METHOD_KEYS))
        if method is not None:
            values["method"] = method

        # Cualquier evento con ids los completa (backfill de pagos huérfanos)
        if payer_id is not None:
            values["payer_id"] = payer_id
        if provider_id is not None:
            values["provider_id"] = provider_id
        if request_id is not None:
            values["request_id"] = request_id

        if claimed is not None:
            # La selección de método no toca monto, moneda ni reembolso
            if fields.first(*AMOUNT_KEYS) is not None:
                values["amount"] = extract_decimal(fields.first(*AMOUNT_KEYS))
            currency = self._text(fields.first(*CURRENCY_KEYS))
            if currency is not None:
                values["currency"] = currency
            if status is PaymentStatus.REFUNDED:
                refund_id = self._text(fields.first(*REFUND_ID_KEYS))
                if refund_id is not None:
                    values["refund_id"] = refund_id

        if existing is not None:
            await self.payments.update(session, existing, **values)
            logger.debug("[Normalization] pago %s actualizado (status=%s, event=%s)", payment_id, status, ctx.event_id)
            return NormalizationOutcome.APPLIED

        if payer_id is None:
            logger.warning(
                "[Normalization] pago %s creado sin pagador; se completará con un evento posterior (event=%s)",
                payment_id,
                ctx.event_id,
            )
        values.setdefault("payer_id", payer_id)
        values.setdefault("provider_id", provider_id)
        values.setdefault("request_id", request_id)
        values.setdefault("amount", extract_decimal(fields.first(*AMOUNT_KEYS)))
        values.setdefault("currency", self.default_currency)
        values["created_at"] = parse_component_timestamp(fields.first(*CREATED_AT_KEYS)) or ctx.occurred_at

        await self.payments.create(session, external_id=payment_id, is_placeholder=False, **values)
        logger.debug("[Normalization] pago %s creado (status=%s, event=%s)", payment_id, status, ctx.event_id)
        return NormalizationOutcome.APPLIED

    async def _supersede_placeholder(
        self,
        session: AsyncSession,
        ctx: EventContext,
        request_id: ExternalId,
        payment_id: ExternalId,
    ) -> None:
        placeholder = await self.payments.get_placeholder_for_request(session, request_id)
        if placeholder is None:
            return
        await self.payments.delete(session, placeholder)
        logger.info(
            "[Normalization] placeholder %s reemplazado por pago real %s (request=%s, event=%s)",
            placeholder.external_id,
            payment_id,
            request_id,
            ctx.event_id,
        )

    @staticmethod
    def _captured_at(
        existing: Optional[Payment],
        status: PaymentStatus,
        updated_at: Optional[datetime],
        processed_at: datetime,
    ) -> Optional[datetime]:
        previous = existing.captured_at if existing is not None else None
        if status is not PaymentStatus.APPROVED:
            return previous
        if existing is not None and existing.status is PaymentStatus.APPROVED and previous is not None:
            return previous
        return updated_at or processed_at

    @staticmethod
    def _text(value: Any) -> Optional[str]:
        if value is None or isinstance(value, (dict, list)):
            return None
        text = str(value).strip()
        return text or None


__all__ = ["PaymentEventHandler", "claimed_status", "merge_status", "is_method_selection"]

# Fin del archivo analytics/modules/normalization/handlers/payment_handler.py
