# -*- coding: utf-8 -*-
"""
analytics/modules/normalization/payload.py

Extractor de payload.

El body de un evento crudo llega con una de dos formas:
- ENVELOPE: entrega multi-salto por el bus, los campos van bajo `payload`.
- FLAT: entrega directa, los campos van en la raíz.

`extract_payload` decide la forma una sola vez y devuelve un
ExtractedPayload inmutable; los handlers solo ven `fields`.

Autor: Equipo Analytics
Fecha: 2025-11-05
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import Any, Mapping

PAYLOAD_KEY = "payload"


class PayloadShape(StrEnum):
    ENVELOPE = "envelope"
    FLAT = "flat"


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


@dataclass(frozen=True)
class ExtractedPayload:
    """Vista plana (solo lectura) de los campos del evento."""

    shape: PayloadShape
    fields: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def get(self, key: str, default: Any = None) -> Any:
        return self.fields.get(key, default)

    def has(self, key: str) -> bool:
        """True si la clave existe y no está vacía."""
        return not _is_empty(self.fields.get(key))

    def first(self, *keys: str) -> Any:
        """Primer valor no vacío entre los alias dados, o None."""
        for key in keys:
            value = self.fields.get(key)
            if not _is_empty(value):
                return value
        return None

    def section(self, key: str) -> "ExtractedPayload":
        """Sub-objeto anidado como payload plano (vacío si no es un dict)."""
        value = self.fields.get(key)
        return ExtractedPayload(PayloadShape.FLAT, value if isinstance(value, Mapping) else {})


def extract_payload(body: Any) -> ExtractedPayload:
    """Nunca lanza. Un body que no es dict produce un payload FLAT vacío."""
    if not isinstance(body, Mapping):
        return ExtractedPayload(PayloadShape.FLAT, {})
    inner = body.get(PAYLOAD_KEY)
    if isinstance(inner, Mapping):
        return ExtractedPayload(PayloadShape.ENVELOPE, inner)
    return ExtractedPayload(PayloadShape.FLAT, body)


__all__ = ["PayloadShape", "ExtractedPayload", "extract_payload"]

# Fin del archivo analytics/modules/normalization/payload.py
