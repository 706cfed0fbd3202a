# -*- coding: utf-8 -*-
"""
analytics/modules/events/models/raw_event_models.py

Modelo ORM para la tabla raw_events: registro inmutable de los eventos
recibidos desde el bus (solo `processed` cambia tras la normalización).

Autor: Equipo Analytics
Fecha: 2025-11-03
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Optional

from sqlalchemy import JSON, Boolean, Index, String, Uuid, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from analytics.shared.database.base import Base, UTCDateTime


class RawEvent(Base):
    """Evento crudo tal como lo entregó el productor."""

    __tablename__ = "raw_events"

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    squad: Mapped[str] = mapped_column(String(100), nullable=False, default="unknown")

    # Tópico / canal del productor (se usa para clasificar)
    category: Mapped[str] = mapped_column(String(100), nullable=False)

    # Nombre del evento (routing key)
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    body: Mapped[dict[str, Any]] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"),
        nullable=False,
        default=dict,
        doc="Cuerpo opaco: objeto plano o sobre con clave `payload`.",
    )

    timestamp: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        server_default=func.now(),
    )

    processed: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default="false",
    )

    # Campos de deduplicación / correlación del bus
    message_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, unique=True)
    correlation_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    source: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        server_default=func.now(),
    )

    __table_args__ = (
        Index("ix_raw_events_squad_category_name", "squad", "category", "name"),
        Index("ix_raw_events_timestamp", "timestamp"),
        Index("ix_raw_events_processed", "processed"),
    )

    def __repr__(self) -> str:
        return f"<RawEvent id={self.id} category={self.category!r} name={self.name!r}>"


__all__ = ["RawEvent"]

# Fin del archivo analytics/modules/events/models/raw_event_models.py
