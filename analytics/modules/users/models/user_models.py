# -*- coding: utf-8 -*-
"""
analytics/modules/users/models/user_models.py

Modelo ORM para la tabla users (usuarios normalizados desde eventos).

Autor: Equipo Analytics
Fecha: 2025-11-04
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import BigInteger, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from analytics.shared.database.base import Base, TimestampMixin, UTCDateTime
from analytics.modules.users.enums import UserStatus


class User(TimestampMixin, Base):
    """
    Usuario identificado por el id que asigna el productor.

    Nunca se borra: la baja se registra como status=deactivated + deactivated_at.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    external_id: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        unique=True,
        index=True,
        doc="Id del usuario en el sistema productor.",
    )

    role: Mapped[str] = mapped_column(String(50), nullable=False, default="unknown")

    status: Mapped[UserStatus] = mapped_column(
        UserStatus.as_db_enum(),
        nullable=False,
        default=UserStatus.ACTIVE,
    )

    # Solo se guarda para prestadores
    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    deactivated_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime(), nullable=True)

    last_event_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime(), nullable=True)

    def __repr__(self) -> str:
        return f"<User external_id={self.external_id} role={self.role!r} status={self.status}>"


__all__ = ["User"]

# Fin del archivo analytics/modules/users/models/user_models.py
