# -*- coding: utf-8 -*-
"""
analytics/modules/normalization/coercion.py

Utilidades puras de coerción de campos (sin I/O):

- ExternalId / extract_id: ids enteros a partir de números o de códigos
  alfanuméricos ("PREST_001" -> 1).
- extract_decimal: montos como Decimal; 0 si el valor no es numérico.
- parse_component_timestamp: timestamps como array [Y, M, D, h, m, s, nanos]
  (UTC) o string ISO-8601.

Autor: Equipo Analytics
Fecha: 2025-11-05
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from analytics.modules.normalization.errors import ExternalIdParseError

logger = logging.getLogger(__name__)

_NON_DIGITS = re.compile(r"\D+")
_LETTERS = re.compile(r"[A-Za-z]")

ZERO = Decimal("0")


class ExternalId(int):
    """Id numérico asignado por un productor (distinto del id surrogate de la fila)."""

    __slots__ = ()

    @classmethod
    def parse(cls, value: Any) -> "ExternalId":
        """
        Convierte número o string en ExternalId.

        Raises:
            ExternalIdParseError: None, bool, número negativo o string sin dígitos.
        """
        if value is None or isinstance(value, bool):
            raise ExternalIdParseError(value)

        if isinstance(value, int):
            if value < 0:
                raise ExternalIdParseError(value)
            return cls(value)

        if isinstance(value, float):
            if value != value or value in (float("inf"), float("-inf")) or value < 0:
                raise ExternalIdParseError(value)
            return cls(int(value))

        if isinstance(value, Decimal):
            if not value.is_finite() or value < 0:
                raise ExternalIdParseError(value)
            return cls(int(value))

        if isinstance(value, str):
            digits = _NON_DIGITS.sub("", value)
            if not digits:
                raise ExternalIdParseError(value)
            if _LETTERS.search(value):
                logger.warning(
                    "[Coercion] Id alfanumérico %r convertido a %s; el productor debería enviar ids numéricos",
                    value,
                    int(digits),
                )
            return cls(int(digits))

        raise ExternalIdParseError(value)

    def __repr__(self) -> str:
        return f"ExternalId({int(self)})"


def extract_id(value: Any) -> Optional[ExternalId]:
    """Versión tolerante de ExternalId.parse: devuelve None en lugar de lanzar."""
    try:
        return ExternalId.parse(value)
    except ExternalIdParseError:
        return None


def extract_decimal(value: Any) -> Decimal:
    """Monto como Decimal. None, no numérico, NaN o infinito -> 0."""
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        amount = Decimal(str(value))
    elif isinstance(value, str):
        try:
            amount = Decimal(value.strip())
        except InvalidOperation:
            return ZERO
    else:
        return ZERO
    if not amount.is_finite():
        return ZERO
    return amount


def parse_component_timestamp(value: Any) -> Optional[datetime]:
    """
    Timestamp del productor como datetime aware (UTC).

    Acepta:
    - [año, mes, día, hora?, minuto?, segundo?, nanos?] (serialización de
      LocalDateTime del productor de pagos, siempre en UTC)
    - string ISO-8601 (con o sin zona; sin zona se asume UTC)
    - datetime

    Devuelve None si no se puede interpretar.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)

    if isinstance(value, (list, tuple)):
        if len(value) < 3:
            return None
        try:
            parts = [int(p) for p in value[:7]]
        except (TypeError, ValueError):
            return None
        parts += [0] * (7 - len(parts))
        year, month, day, hour, minute, second, nanos = parts
        try:
            return datetime(year, month, day, hour, minute, second, nanos // 1000, tzinfo=timezone.utc)
        except ValueError:
            return None

    if isinstance(value, str):
        raw = value.strip()
        if not raw:
            return None
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(raw)
        except ValueError:
            return None
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)

    return None


__all__ = ["ExternalId", "extract_id", "extract_decimal", "parse_component_timestamp"]

# Fin del archivo analytics/modules/normalization/coercion.py
