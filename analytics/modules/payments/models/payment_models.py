# -*- coding: utf-8 -*-
"""
analytics/modules/payments/models/payment_models.py

Modelo ORM para la tabla payments.

Un pago puede existir como placeholder temporal: lo crea el productor de
matching con un id sintético (request_id + PLACEHOLDER_ID_OFFSET) antes de que
llegue el pago real. Cuando llega el evento con el id real, el placeholder se
borra y se reemplaza por la fila real. Nunca coexisten.

Autor: Equipo Analytics
Fecha: 2025-11-04
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import BigInteger, Boolean, Index, Integer, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column

from analytics.shared.database.base import Base, UTCDateTime
from analytics.modules.payments.enums import PaymentStatus

# Rango disjunto reservado para ids sintéticos de placeholders
PLACEHOLDER_ID_OFFSET = 1_000_000_000


def placeholder_id_for(request_id: int) -> int:
    return int(request_id) + PLACEHOLDER_ID_OFFSET


class Payment(Base):
    """Pago normalizado, identificado por el id del productor."""

    __tablename__ = "payments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    external_id: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        unique=True,
        index=True,
        doc="Id real del pago o id sintético si is_placeholder.",
    )

    payer_id: Mapped[Optional[int]] = mapped_column(
        BigInteger,
        nullable=True,
        doc="Puede llegar vacío; se completa con un evento posterior del mismo pago.",
    )
    provider_id: Mapped[Optional[int]] = mapped_column(BigInteger, nullable=True)
    request_id: Mapped[Optional[int]] = mapped_column(BigInteger, nullable=True)

    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"))
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="ARS")
    method: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    status: Mapped[PaymentStatus] = mapped_column(
        PaymentStatus.as_db_enum(),
        nullable=False,
        default=PaymentStatus.PENDING,
    )

    # Timestamps de negocio (no de auditoría)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        server_default=func.now(),
    )
    last_updated_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime(), nullable=True)
    captured_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime(), nullable=True)

    refund_id: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    is_placeholder: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (
        Index("ix_payments_request_id", "request_id"),
        Index("ix_payments_status", "status"),
    )

    def __repr__(self) -> str:
        kind = "placeholder" if self.is_placeholder else "real"
        return f"<Payment external_id={self.external_id} {kind} status={self.status}>"


__all__ = ["Payment", "PLACEHOLDER_ID_OFFSET", "placeholder_id_for"]

# Fin del archivo analytics/modules/payments/models/payment_models.py
