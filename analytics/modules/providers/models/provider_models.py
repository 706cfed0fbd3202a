# -*- coding: utf-8 -*-
"""
analytics/modules/providers/models/provider_models.py

Modelos ORM de prestadores y sus sub-colecciones (habilidades y zonas).

Las habilidades y zonas no llegan como eventos propios: se derivan de los
arrays embebidos en los eventos de prestador.

Autor: Equipo Analytics
Fecha: 2025-11-04
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import BigInteger, Boolean, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from analytics.shared.database.base import Base, TimestampMixin
from analytics.modules.providers.enums import ProviderStatus


class Provider(TimestampMixin, Base):
    __tablename__ = "providers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    external_id: Mapped[int] = mapped_column(BigInteger, nullable=False, unique=True, index=True)

    first_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    last_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    status: Mapped[ProviderStatus] = mapped_column(
        ProviderStatus.as_db_enum(),
        nullable=False,
        default=ProviderStatus.ACTIVE,
    )

    profile_complete: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        return f"<Provider external_id={self.external_id} status={self.status}>"


class ProviderSkill(TimestampMixin, Base):
    """Habilidad de un prestador. provider_id es el id externo del prestador."""

    __tablename__ = "provider_skills"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    provider_id: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    skill_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    skill_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    category_id: Mapped[Optional[int]] = mapped_column(BigInteger, nullable=True)

    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    __table_args__ = (
        UniqueConstraint("provider_id", "skill_id", name="uq_provider_skills_provider_skill"),
    )


class ProviderZone(TimestampMixin, Base):
    """Zona de cobertura de un prestador; también actúa como catálogo de zonas."""

    __tablename__ = "provider_zones"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    provider_id: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    zone_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    zone_name: Mapped[str] = mapped_column(String(255), nullable=False)

    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    __table_args__ = (
        UniqueConstraint("provider_id", "zone_id", name="uq_provider_zones_provider_zone"),
        Index("ix_provider_zones_zone_name_active", "zone_name", "active"),
    )


__all__ = ["Provider", "ProviderSkill", "ProviderZone"]

# Fin del archivo analytics/modules/providers/models/provider_models.py
