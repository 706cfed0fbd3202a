# -*- coding: utf-8 -*-
"""
analytics/modules/normalization/metrics/normalization_metrics.py

Métricas Prometheus del motor de normalización y del replay por lotes.

Métricas expuestas:
- normalization_events_total{kind, outcome}
- normalization_replay_events_total{mode, outcome}
- normalization_replay_duration_seconds{mode}

Autor: Equipo Analytics
Fecha: 2025-11-06
"""

from __future__ import annotations

from typing import Optional

from analytics.shared.core.metrics_helpers import get_or_create_counter, get_or_create_histogram
from analytics.modules.normalization.classifier import EventKind
from analytics.modules.normalization.results import NormalizationResult

EVENTS_TOTAL = get_or_create_counter(
    "normalization_events_total",
    "Eventos crudos normalizados por tipo de entidad y resultado.",
    labelnames=("kind", "outcome"),
)

REPLAY_EVENTS_TOTAL = get_or_create_counter(
    "normalization_replay_events_total",
    "Eventos procesados por el replay por lotes, por modo y resultado.",
    labelnames=("mode", "outcome"),
)

REPLAY_DURATION_SECONDS = get_or_create_histogram(
    "normalization_replay_duration_seconds",
    "Duración de una corrida completa de replay (segundos).",
    labelnames=("mode",),
    buckets=(1, 5, 15, 30, 60, 120, 300, 600, 1800, 3600),
)


def _kind_label(kind: Optional[EventKind]) -> str:
    return kind.value if kind is not None else "unclassified"


def observe_event(result: NormalizationResult) -> None:
    EVENTS_TOTAL.labels(kind=_kind_label(result.kind), outcome=result.outcome.value).inc()


def observe_replay_event(mode: str, result: NormalizationResult) -> None:
    REPLAY_EVENTS_TOTAL.labels(mode=mode, outcome=result.outcome.value).inc()


def observe_replay_duration(mode: str, seconds: float) -> None:
    REPLAY_DURATION_SECONDS.labels(mode=mode).observe(seconds)


__all__ = [
    "EVENTS_TOTAL",
    "REPLAY_EVENTS_TOTAL",
    "REPLAY_DURATION_SECONDS",
    "observe_event",
    "observe_replay_event",
    "observe_replay_duration",
]

# Fin del archivo analytics/modules/normalization/metrics/normalization_metrics.py
