# -*- coding: utf-8 -*-
"""
analytics/shared/database/__init__.py

Re-exporta utilidades comunes de base de datos.

Autor: Equipo Analytics
Fecha: 2025-11-03
"""

from __future__ import annotations

from .base import Base, NAMING_CONVENTION, TimestampMixin, UTCDateTime, as_str_enum
from .database import (
    build_engine,
    build_session_factory,
    session_scope,
    check_database_health,
    create_schema,
    import_models,
)
from .repository import BaseRepository, ExternalIdRepository

__all__ = [
    "Base",
    "NAMING_CONVENTION",
    "TimestampMixin",
    "UTCDateTime",
    "as_str_enum",
    "build_engine",
    "build_session_factory",
    "session_scope",
    "check_database_health",
    "create_schema",
    "import_models",
    "BaseRepository",
    "ExternalIdRepository",
]
# Fin del archivo analytics/shared/database/__init__.py
