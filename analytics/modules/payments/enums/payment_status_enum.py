# -*- coding: utf-8 -*-
"""
analytics/modules/payments/enums/payment_status_enum.py

Enum de estados del pago y mapeo desde los textos que envían los productores.

Autor: Equipo Analytics
Fecha: 2025-11-04
"""

from __future__ import annotations

from enum import StrEnum
from typing import Optional

from sqlalchemy import Enum as SAEnum

from analytics.shared.database.base import as_str_enum


class PaymentStatus(StrEnum):
    """Estado del pago en su ciclo de vida."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    EXPIRED = "expired"
    REFUNDED = "refunded"

    __db_enum_name__ = "payment_status_enum"

    @classmethod
    def as_db_enum(cls) -> SAEnum:
        return as_str_enum(cls)

    @property
    def is_terminal(self) -> bool:
        """Desde un estado terminal nunca se vuelve a `pending`."""
        return self in TERMINAL_PAYMENT_STATUSES

    @classmethod
    def from_producer(cls, raw: object) -> Optional["PaymentStatus"]:
        """
        Mapea el texto libre del productor al enum de cinco estados.
        Devuelve None si el valor no se reconoce.
        """
        if raw is None:
            return None
        key = str(raw).strip().lower()
        return _PRODUCER_STATUS_MAP.get(key)


TERMINAL_PAYMENT_STATUSES = frozenset(
    {
        PaymentStatus.APPROVED,
        PaymentStatus.REJECTED,
        PaymentStatus.EXPIRED,
        PaymentStatus.REFUNDED,
    }
)

# Sinónimos observados en los distintos productores (es/en, pasarelas)
_PRODUCER_STATUS_MAP = {
    "pending": PaymentStatus.PENDING,
    "pendiente": PaymentStatus.PENDING,
    "created": PaymentStatus.PENDING,
    "in_process": PaymentStatus.PENDING,
    "in_progress": PaymentStatus.PENDING,
    "approved": PaymentStatus.APPROVED,
    "aprobado": PaymentStatus.APPROVED,
    "accredited": PaymentStatus.APPROVED,
    "paid": PaymentStatus.APPROVED,
    "completed": PaymentStatus.APPROVED,
    "succeeded": PaymentStatus.APPROVED,
    "rejected": PaymentStatus.REJECTED,
    "rechazado": PaymentStatus.REJECTED,
    "failed": PaymentStatus.REJECTED,
    "cancelled": PaymentStatus.REJECTED,
    "canceled": PaymentStatus.REJECTED,
    "expired": PaymentStatus.EXPIRED,
    "expirado": PaymentStatus.EXPIRED,
    "refunded": PaymentStatus.REFUNDED,
    "reembolsado": PaymentStatus.REFUNDED,
    "charged_back": PaymentStatus.REFUNDED,
}


__all__ = ["PaymentStatus", "TERMINAL_PAYMENT_STATUSES"]

# Fin del archivo analytics/modules/payments/enums/payment_status_enum.py
