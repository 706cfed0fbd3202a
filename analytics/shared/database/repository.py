# -*- coding: utf-8 -*-
"""
analytics/shared/database/repository.py

Repositorio base para operaciones async con SQLAlchemy.

Autor: Equipo Analytics
Fecha: 2025-11-03
"""

from typing import Any, Type, TypeVar, Generic, Sequence, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")  # modelo ORM


class BaseRepository(Generic[T]):
    """Repositorio asincrónico base para CRUD común."""

    def __init__(self, model: Type[T]):
        self.model = model

    # -------------------------------------------------------------
    # CRUD básico
    # -------------------------------------------------------------
    async def get(self, session: AsyncSession, obj_id: Any) -> Optional[T]:
        return await session.get(self.model, obj_id)

    async def list(self, session: AsyncSession) -> Sequence[T]:
        result = await session.execute(select(self.model))
        return result.scalars().all()

    async def create(self, session: AsyncSession, **kwargs) -> T:
        obj = self.model(**kwargs)
        session.add(obj)
        await session.flush()
        return obj

    async def update(self, session: AsyncSession, obj: T, **kwargs) -> T:
        for key, value in kwargs.items():
            setattr(obj, key, value)
        await session.flush()
        return obj

    async def delete(self, session: AsyncSession, obj: T) -> None:
        await session.delete(obj)
        await session.flush()


class ExternalIdRepository(BaseRepository[T]):
    """
    Repositorio para entidades identificadas por un id asignado por el
    productor (`external_id`), distinto del id surrogate de la fila.
    """

    async def get_by_external_id(self, session: AsyncSession, external_id: int) -> Optional[T]:
        stmt = select(self.model).where(self.model.external_id == external_id)  # type: ignore[attr-defined]
        result = await session.execute(stmt)
        return result.scalars().first()

    async def upsert(self, session: AsyncSession, external_id: int, **values) -> tuple[T, bool]:
        """
        Inserta o actualiza por external_id.

        Returns:
            (fila, created): created=True si se insertó una fila nueva.
        """
        existing = await self.get_by_external_id(session, external_id)
        if existing is None:
            obj = await self.create(session, external_id=external_id, **values)
            return obj, True
        obj = await self.update(session, existing, **values)
        return obj, False


__all__ = ["BaseRepository", "ExternalIdRepository"]

# Fin del archivo analytics/shared/database/repository.py
