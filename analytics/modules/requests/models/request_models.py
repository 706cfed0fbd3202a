# -*- coding: utf-8 -*-
"""
analytics/modules/requests/models/request_models.py

Modelo ORM para la tabla service_requests (solicitudes de servicio).

Notas:
- zone_name guarda el nombre canónico del catálogo de zonas cuando hay
  coincidencia, o el texto libre original si no la hay.
- confirmed_at lo estampa la aceptación de cotización y es la señal que se
  usa aguas abajo para medir la latencia de matching.

Autor: Equipo Analytics
Fecha: 2025-11-04
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import BigInteger, Boolean, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from analytics.shared.database.base import Base, TimestampMixin, UTCDateTime
from analytics.modules.requests.enums import RequestStatus


class ServiceRequest(TimestampMixin, Base):
    __tablename__ = "service_requests"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    external_id: Mapped[int] = mapped_column(BigInteger, nullable=False, unique=True, index=True)

    requester_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    provider_id: Mapped[Optional[int]] = mapped_column(BigInteger, nullable=True)
    skill_id: Mapped[Optional[int]] = mapped_column(BigInteger, nullable=True)

    status: Mapped[RequestStatus] = mapped_column(
        RequestStatus.as_db_enum(),
        nullable=False,
        default=RequestStatus.CREATED,
    )

    zone_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    is_critical: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    provider_assigned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    confirmed_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime(), nullable=True)

    last_event_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime(), nullable=True)

    __table_args__ = (
        Index("ix_service_requests_status", "status"),
        Index("ix_service_requests_provider_id", "provider_id"),
    )

    def __repr__(self) -> str:
        return f"<ServiceRequest external_id={self.external_id} status={self.status}>"


__all__ = ["ServiceRequest"]

# Fin del archivo analytics/modules/requests/models/request_models.py
