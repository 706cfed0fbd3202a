# -*- coding: utf-8 -*-
"""
analytics/modules/payments/repositories/payment_repository.py

Repositorio de pagos normalizados.

Autor: Equipo Analytics
Fecha: 2025-11-04
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from analytics.shared.database.repository import ExternalIdRepository
from analytics.modules.payments.models import Payment, placeholder_id_for


class PaymentRepository(ExternalIdRepository[Payment]):
    def __init__(self) -> None:
        super().__init__(Payment)

    async def get_placeholder_for_request(self, session: AsyncSession, request_id: int) -> Optional[Payment]:
        return await self.get_by_external_id(session, placeholder_id_for(request_id))

    async def get_real_by_request_id(self, session: AsyncSession, request_id: int) -> Optional[Payment]:
        """Primer pago real (no placeholder) asociado a la solicitud."""
        stmt = (
            select(Payment)
            .where(Payment.request_id == request_id, Payment.is_placeholder.is_(False))
            .order_by(Payment.id.asc())
            .limit(1)
        )
        result = await session.execute(stmt)
        return result.scalars().first()


__all__ = ["PaymentRepository"]

# Fin del archivo analytics/modules/payments/repositories/payment_repository.py
