# -*- coding: utf-8 -*-
"""
analytics/shared/database/base.py

Base declarativa y convención de nombres para modelos ORM.

Este módulo proporciona:
- Base: clase base declarativa de SQLAlchemy
- NAMING_CONVENTION: convención de nombres para constraints
- as_str_enum: helper genérico para mapear enums Python a columnas VARCHAR
- UTCDateTime: DateTime con zona que siempre devuelve valores aware en UTC
- TimestampMixin: columnas created_at / updated_at

Autor: Equipo Analytics
Fecha: 2025-11-03
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Type

from sqlalchemy import DateTime, Enum as SAEnum, MetaData, TypeDecorator, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# ===== NAMING CONVENTION =====
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


# ===== BASE DECLARATIVA =====
class Base(DeclarativeBase):
    """
    Base declarativa para todos los modelos ORM.
    Incluye convención de nombres para constraints.
    """
    metadata = MetaData(naming_convention=NAMING_CONVENTION)


# ===== TIMESTAMPS =====
class UTCDateTime(TypeDecorator):
    """
    DateTime(timezone=True) que se lee siempre como datetime aware en UTC.

    PostgreSQL (timestamptz) ya devuelve valores aware; SQLite guarda el
    texto sin offset, así que se normaliza a UTC al escribir y se adjunta
    UTC al leer.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            return value.astimezone(timezone.utc)
        return value

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class TimestampMixin:
    """Columnas de auditoría de fila (no confundir con timestamps de negocio)."""

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )


# ===== HELPER GENÉRICO PARA ENUMS =====
def as_str_enum(enum_cls: Type[Enum], name: str | None = None) -> SAEnum:
    """
    Devuelve un tipo Enum de SQLAlchemy persistido como VARCHAR + CHECK.

    - Se guardan los `.value` del enum (no los nombres).
    - native_enum=False: portable entre PostgreSQL y SQLite (tests).
    - Si no se pasa `name`, usa `__db_enum_name__` del enum o el nombre de la
      clase en minúsculas.
    """
    enum_name = name or getattr(enum_cls, "__db_enum_name__", enum_cls.__name__.lower())

    def _values(_: object) -> list[str]:
        return [e.value for e in enum_cls]  # type: ignore[arg-type]

    return SAEnum(
        enum_cls,
        name=enum_name,
        native_enum=False,
        create_constraint=True,
        length=32,
        values_callable=_values,
        validate_strings=True,
    )


__all__ = ["Base", "NAMING_CONVENTION", "UTCDateTime", "TimestampMixin", "as_str_enum"]

# Fin del archivo analytics/shared/database/base.py
