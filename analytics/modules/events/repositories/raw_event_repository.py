# -*- coding: utf-8 -*-
"""
analytics/modules/events/repositories/raw_event_repository.py

Repositorio para la tabla raw_events.

Responsabilidades:
- Paginación ordenada (más antiguos primero) para el replay por lotes
- Conteo por filtro (todos / desde fecha / no procesados)
- Idempotencia por message_id del bus

Autor: Equipo Analytics
Fecha: 2025-11-03
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from sqlalchemy import ColumnElement, func, select, true
from sqlalchemy.ext.asyncio import AsyncSession

from analytics.shared.database.repository import BaseRepository
from analytics.modules.events.models.raw_event_models import RawEvent


class RawEventRepository(BaseRepository[RawEvent]):
    def __init__(self) -> None:
        super().__init__(RawEvent)

    # -----------------------------------------------------------
    # Filtros reutilizables por el replay
    # -----------------------------------------------------------
    @staticmethod
    def all_events() -> ColumnElement[bool]:
        return true()

    @staticmethod
    def since(from_date: datetime) -> ColumnElement[bool]:
        return RawEvent.timestamp >= from_date

    @staticmethod
    def unprocessed() -> ColumnElement[bool]:
        return RawEvent.processed.is_(False)

    # -----------------------------------------------------------
    # Lecturas
    # -----------------------------------------------------------
    async def count(self, session: AsyncSession, criteria: ColumnElement[bool]) -> int:
        stmt = select(func.count()).select_from(RawEvent).where(criteria)
        result = await session.execute(stmt)
        return int(result.scalar_one())

    async def fetch_page(
        self,
        session: AsyncSession,
        criteria: ColumnElement[bool],
        *,
        offset: int,
        limit: int,
    ) -> Sequence[RawEvent]:
        """Página de eventos, más antiguos primero (id como desempate estable)."""
        stmt = (
            select(RawEvent)
            .where(criteria)
            .order_by(RawEvent.timestamp.asc(), RawEvent.id.asc())
            .offset(offset)
            .limit(limit)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_by_message_id(self, session: AsyncSession, message_id: str) -> Optional[RawEvent]:
        stmt = select(RawEvent).where(RawEvent.message_id == message_id)
        result = await session.execute(stmt)
        return result.scalars().first()

    # -----------------------------------------------------------
    # Escrituras
    # -----------------------------------------------------------
    async def mark_processed(self, session: AsyncSession, event: RawEvent) -> None:
        event.processed = True
        await session.flush()


__all__ = ["RawEventRepository"]

# Fin del archivo analytics/modules/events/repositories/raw_event_repository.py
