# -*- coding: utf-8 -*-
"""
analytics/modules/categories/repositories/category_repository.py

Repositorio de categorías (rubros).

Autor: Equipo Analytics
Fecha: 2025-11-04
"""

from __future__ import annotations

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from analytics.shared.database.repository import ExternalIdRepository
from analytics.modules.categories.models import Category


class CategoryRepository(ExternalIdRepository[Category]):
    def __init__(self) -> None:
        super().__init__(Category)

    async def delete_by_external_id(self, session: AsyncSession, external_id: int) -> int:
        """Borrado físico. Devuelve la cantidad de filas eliminadas (0 o 1)."""
        result = await session.execute(delete(Category).where(Category.external_id == external_id))
        return int(result.rowcount or 0)


__all__ = ["CategoryRepository"]

# Fin del archivo analytics/modules/categories/repositories/category_repository.py
