# -*- coding: utf-8 -*-
"""
analytics/modules/requests/enums/request_status_enum.py

Enum de estados de una solicitud de servicio.

Autor: Equipo Analytics
Fecha: 2025-11-04
"""

from enum import StrEnum

from sqlalchemy import Enum as SAEnum

from analytics.shared.database.base import as_str_enum


class RequestStatus(StrEnum):
    """Ciclo de vida de la solicitud (creada → aceptada / cancelada / rechazada)."""

    CREATED = "created"
    CANCELLED = "cancelled"
    ACCEPTED = "accepted"
    REJECTED = "rejected"

    __db_enum_name__ = "request_status_enum"

    @classmethod
    def as_db_enum(cls) -> SAEnum:
        return as_str_enum(cls)


__all__ = ["RequestStatus"]

# Fin del archivo analytics/modules/requests/enums/request_status_enum.py
