# -*- coding: utf-8 -*-
"""
analytics/modules/users/enums/user_status_enum.py

Enum de estados del usuario normalizado.

Autor: Equipo Analytics
Fecha: 2025-11-04
"""

from enum import StrEnum

from sqlalchemy import Enum as SAEnum

from analytics.shared.database.base import as_str_enum


class UserStatus(StrEnum):
    """Estado del usuario según el último evento recibido."""

    ACTIVE = "active"
    DEACTIVATED = "deactivated"
    REJECTED = "rejected"

    __db_enum_name__ = "user_status_enum"

    @classmethod
    def as_db_enum(cls) -> SAEnum:
        return as_str_enum(cls)


__all__ = ["UserStatus"]

# Fin del archivo analytics/modules/users/enums/user_status_enum.py
