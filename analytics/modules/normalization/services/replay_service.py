# -*- coding: utf-8 -*-
"""
analytics/modules/normalization/services/replay_service.py

Replay por lotes de eventos crudos a través del motor de normalización.

Modos:
- replay_all():            todos los eventos.
- replay_from(from_date):  eventos con timestamp >= from_date.
- replay_unprocessed():    solo processed=false; marca processed=true en
                           cada evento que no falla.

Los tres comparten `_replay`: páginas de `batch_size` eventos ordenados del
más antiguo al más nuevo, un evento a la vez, commit al final de cada
página. Un fallo por evento suma a `errors` y el lote sigue.

En modo unprocessed los eventos marcados salen del filtro, así que el offset
avanza solo por los eventos que siguen sin procesar (los fallidos).

Sin cancelación: quien necesite cortar antes no debe esperar el resultado.

Autor: Equipo Analytics
Fecha: 2025-11-06
"""

from __future__ import annotations

import logging
import time
from datetime import datetime
from enum import StrEnum
from typing import Optional

from sqlalchemy import ColumnElement
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from analytics.shared.config.settings_base import BaseAppSettings
from analytics.modules.events.repositories import RawEventRepository
from analytics.modules.normalization.metrics import observe_replay_duration, observe_replay_event
from analytics.modules.normalization.results import ReplaySummary
from analytics.modules.normalization.services.normalization_service import EventNormalizer

logger = logging.getLogger(__name__)


class ReplayMode(StrEnum):
    ALL = "all"
    FROM_DATE = "from_date"
    UNPROCESSED = "unprocessed"


class ReplayConfigurationError(ValueError):
    """Parámetros de replay inválidos (se detecta antes de tocar la base)."""


class EventReplayService:
    """Backfill de entidades normalizadas desde raw_events."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        normalizer: EventNormalizer,
        events: Optional[RawEventRepository] = None,
        *,
        batch_size: int = 1000,
        max_batch_size: int = 10000,
        progress_every: int = 10,
    ) -> None:
        self.session_factory = session_factory
        self.normalizer = normalizer
        self.events = events or RawEventRepository()
        self.default_batch_size = batch_size
        self.max_batch_size = max_batch_size
        self.progress_every = max(1, progress_every)

    @classmethod
    def from_settings(
        cls,
        settings: BaseAppSettings,
        session_factory: async_sessionmaker[AsyncSession],
        normalizer: Optional[EventNormalizer] = None,
    ) -> "EventReplayService":
        return cls(
            session_factory,
            normalizer or EventNormalizer(default_currency=settings.normalization_default_currency),
            batch_size=settings.replay_batch_size,
            max_batch_size=settings.replay_max_batch_size,
            progress_every=settings.replay_progress_every,
        )

    # -----------------------------------------------------------
    # API pública
    # -----------------------------------------------------------
    async def replay_all(self, batch_size: Optional[int] = None) -> ReplaySummary:
        return await self._replay(ReplayMode.ALL, RawEventRepository.all_events(), batch_size)

    async def replay_from(self, from_date: datetime, batch_size: Optional[int] = None) -> ReplaySummary:
        if from_date.tzinfo is None:
            raise ReplayConfigurationError("from_date debe incluir zona horaria")
        return await self._replay(ReplayMode.FROM_DATE, RawEventRepository.since(from_date), batch_size)

    async def replay_unprocessed(self, batch_size: Optional[int] = None) -> ReplaySummary:
        return await self._replay(
            ReplayMode.UNPROCESSED,
            RawEventRepository.unprocessed(),
            batch_size,
            mark_processed=True,
        )

    # -----------------------------------------------------------
    # Primitiva de lotes
    # -----------------------------------------------------------
    def _resolve_batch_size(self, batch_size: Optional[int]) -> int:
        size = self.default_batch_size if batch_size is None else batch_size
        if isinstance(size, bool) or not isinstance(size, int) or size < 1:
            raise ReplayConfigurationError(f"batch_size inválido: {batch_size!r}")
        if size > self.max_batch_size:
            raise ReplayConfigurationError(
                f"batch_size {size} supera el máximo permitido ({self.max_batch_size})"
            )
        return size

    async def _replay(
        self,
        mode: ReplayMode,
        criteria: ColumnElement[bool],
        batch_size: Optional[int],
        *,
        mark_processed: bool = False,
    ) -> ReplaySummary:
        size = self._resolve_batch_size(batch_size)
        summary = ReplaySummary()
        started = time.perf_counter()

        async with self.session_factory() as session:
            summary.total = await self.events.count(session, criteria)
        logger.info("[Replay] Iniciando replay %s: %d eventos (batch_size=%d)", mode, summary.total, size)

        offset = 0
        batches = 0
        while True:
            async with self.session_factory() as session:
                page = await self.events.fetch_page(session, criteria, offset=offset, limit=size)
                if not page:
                    break

                failed_in_page = 0
                for event in page:
                    result = await self.normalizer.normalize_event(session, event)
                    summary.record(result)
                    observe_replay_event(mode, result)
                    if result.is_failure:
                        failed_in_page += 1
                    elif mark_processed:
                        await self.events.mark_processed(session, event)

                await session.commit()

            batches += 1
            logger.info(
                "[Replay] Lote %d (%s): eventos %d-%d de %d",
                batches,
                mode,
                offset + 1,
                offset + len(page),
                summary.total,
            )
            offset += failed_in_page if mark_processed else len(page)

            if batches % self.progress_every == 0:
                logger.info(
                    "[Replay] Progreso %s: %d procesados, %d errores, %d omitidos",
                    mode,
                    summary.processed,
                    summary.errors,
                    summary.skipped,
                )

        elapsed = time.perf_counter() - started
        observe_replay_duration(mode, elapsed)
        logger.info(
            "[Replay] Replay %s completado en %.1fs: %d procesados, %d errores, %d omitidos de %d",
            mode,
            elapsed,
            summary.processed,
            summary.errors,
            summary.skipped,
            summary.total,
        )
        return summary


__all__ = ["EventReplayService", "ReplayMode", "ReplayConfigurationError"]

# Fin del archivo analytics/modules/normalization/services/replay_service.py
