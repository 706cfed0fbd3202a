# -*- coding: utf-8 -*-
"""
analytics/shared/core/metrics_helpers.py

Registro idempotente de métricas Prometheus: si el módulo que las declara se
importa dos veces (recarga en tests, scripts), se reutiliza el collector ya
registrado en lugar de fallar con "Duplicated timeseries".

Autor: Equipo Analytics
Fecha: 2025-11-05
"""

from typing import Optional

from prometheus_client import REGISTRY, Counter, Histogram
from prometheus_client.registry import Collector


def _registered(name: str) -> Optional[Collector]:
    names_to_collectors = getattr(REGISTRY, "_names_to_collectors", {})
    # Los Counter se registran también con sufijo _total
    return names_to_collectors.get(name) or names_to_collectors.get(f"{name}_total")


def get_or_create_counter(name: str, description: str, labelnames: tuple = ()) -> Counter:
    existing = _registered(name)
    if existing is not None:
        return existing  # type: ignore[return-value]
    return Counter(name, description, labelnames=labelnames)


def get_or_create_histogram(
    name: str,
    description: str,
    labelnames: tuple = (),
    buckets: tuple = Histogram.DEFAULT_BUCKETS,
) -> Histogram:
    existing = _registered(name)
    if existing is not None:
        return existing  # type: ignore[return-value]
    return Histogram(name, description, labelnames=labelnames, buckets=buckets)


__all__ = ["get_or_create_counter", "get_or_create_histogram"]

# Fin del archivo analytics/shared/core/metrics_helpers.py
