# -*- coding: utf-8 -*-
"""
analytics/modules/normalization/errors.py

Excepciones del dominio de normalización.

- NormalizationError: base; lleva el id del evento crudo cuando se conoce.
- UnresolvableIdentifier: falta un id obligatorio o no tiene dígitos.
- ReferentialGap: la entidad referenciada no existe (p.ej. aceptación de
  cotización sobre una solicitud desconocida).
- ExternalIdParseError: valor que no puede convertirse en ExternalId.

Las dos primeras subclases son señales de calidad de datos: el motor las
convierte en resultado SKIPPED, no en error.

Autor: Equipo Analytics
Fecha: 2025-11-05
"""

from __future__ import annotations

from typing import Any, Optional


class NormalizationError(Exception):
    """Error base del motor de normalización."""

    def __init__(self, message: str, *, event_id: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message
        self.event_id = event_id

    def __str__(self) -> str:
        if self.event_id is None:
            return self.message
        return f"{self.message} (event_id={self.event_id})"


class UnresolvableIdentifier(NormalizationError):
    """El evento no trae un identificador utilizable para la entidad destino."""

    def __init__(self, field: str, *, event_id: Optional[Any] = None) -> None:
        super().__init__(f"Identificador '{field}' ausente o sin dígitos", event_id=event_id)
        self.field = field


class ReferentialGap(NormalizationError):
    """El evento referencia una entidad que todavía no existe."""

    def __init__(self, entity: str, external_id: Any, *, event_id: Optional[Any] = None) -> None:
        super().__init__(f"{entity} {external_id} no existe", event_id=event_id)
        self.entity = entity
        self.external_id = external_id


class ExternalIdParseError(ValueError):
    """El valor no contiene un identificador numérico válido."""

    def __init__(self, value: Any) -> None:
        super().__init__(f"No se pudo extraer un id numérico de {value!r}")
        self.value = value


__all__ = [
    "NormalizationError",
    "UnresolvableIdentifier",
    "ReferentialGap",
    "ExternalIdParseError",
]

# Fin del archivo analytics/modules/normalization/errors.py
