# -*- coding: utf-8 -*-
"""
analytics/modules/events/schemas/event_schemas.py

Schemas Pydantic de entrada al almacén de eventos crudos.

- EventMessage: evento interno ya clasificado por el productor
  (squad / categoría / nombre / cuerpo).
- HubDestination / HubEnvelope: formato de entrega del bus (canal +
  routing key + payload) que se traduce a EventMessage.

Autor: Equipo Analytics
Fecha: 2025-11-04
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EventMessage(BaseModel):
    """Registro de evento entrante consumido por el núcleo."""

    model_config = ConfigDict(populate_by_name=True)

    squad: str = Field(default="unknown", description="Equipo/servicio productor")
    category: str = Field(description="Tópico / canal del evento")
    name: str = Field(description="Nombre del evento (routing key)")
    body: Dict[str, Any] = Field(
        default_factory=dict,
        description="Objeto plano o sobre con clave `payload`",
    )
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    message_id: Optional[str] = Field(default=None, alias="messageId")
    correlation_id: Optional[str] = Field(default=None, alias="correlationId")
    source: Optional[str] = None

    @field_validator("timestamp")
    @classmethod
    def _ensure_aware(cls, value: datetime) -> datetime:
        # Timestamps sin zona se interpretan como UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class HubDestination(BaseModel):
    channel: Optional[str] = None
    routing_key: Optional[str] = Field(default=None, alias="routingKey")

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class HubEnvelope(BaseModel):
    """Sobre de entrega del bus de eventos (multi-hop)."""

    message_id: Optional[str] = Field(default=None, alias="messageId")
    correlation_id: Optional[str] = Field(default=None, alias="correlationId")
    timestamp: Optional[datetime] = None
    destination: HubDestination = Field(default_factory=HubDestination)
    payload: Any = None

    model_config = ConfigDict(populate_by_name=True, extra="allow")


__all__ = ["EventMessage", "HubDestination", "HubEnvelope"]

# Fin del archivo analytics/modules/events/schemas/event_schemas.py
