# -*- coding: utf-8 -*-
"""
analytics/modules/categories/models/category_models.py

Modelo ORM para la tabla categories (rubros). Catálogo pequeño de referencia:
es la única entidad que admite borrado físico.

Autor: Equipo Analytics
Fecha: 2025-11-04
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import BigInteger, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from analytics.shared.database.base import Base, TimestampMixin


class Category(TimestampMixin, Base):
    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    external_id: Mapped[int] = mapped_column(BigInteger, nullable=False, unique=True, index=True)
    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    def __repr__(self) -> str:
        return f"<Category external_id={self.external_id} name={self.name!r}>"


__all__ = ["Category"]

# Fin del archivo analytics/modules/categories/models/category_models.py
