# -*- coding: utf-8 -*-
"""
analytics/modules/providers/enums/provider_status_enum.py

Enum de estados del prestador.

Autor: Equipo Analytics
Fecha: 2025-11-04
"""

from enum import StrEnum

from sqlalchemy import Enum as SAEnum

from analytics.shared.database.base import as_str_enum


class ProviderStatus(StrEnum):
    ACTIVE = "active"
    DEACTIVATED = "deactivated"

    __db_enum_name__ = "provider_status_enum"

    @classmethod
    def as_db_enum(cls) -> SAEnum:
        return as_str_enum(cls)


__all__ = ["ProviderStatus"]

# Fin del archivo analytics/modules/providers/enums/provider_status_enum.py
