# -*- coding: utf-8 -*-
"""
Tests del registro idempotente de métricas Prometheus.
"""

from prometheus_client import REGISTRY

from analytics.shared.core.metrics_helpers import (
    get_or_create_counter,
    get_or_create_histogram,
)


def test_counter_is_reused_by_name():
    a = get_or_create_counter("analytics_test_reuse", "contador de prueba", ("kind",))
    b = get_or_create_counter("analytics_test_reuse", "contador de prueba", ("kind",))
    assert a is b

    a.labels(kind="x").inc()
    assert REGISTRY.get_sample_value("analytics_test_reuse_total", {"kind": "x"}) == 1.0


def test_counter_is_found_by_total_suffix():
    a = get_or_create_counter("analytics_test_suffix_total", "contador con sufijo")
    b = get_or_create_counter("analytics_test_suffix", "contador con sufijo")
    assert a is b


def test_histogram_is_reused_with_custom_buckets():
    h1 = get_or_create_histogram(
        "analytics_test_duration_seconds", "histograma de prueba", ("mode",), buckets=(1.0, 5.0)
    )
    h2 = get_or_create_histogram("analytics_test_duration_seconds", "histograma de prueba", ("mode",))
    assert h1 is h2

    h1.labels(mode="all").observe(2.0)
    assert REGISTRY.get_sample_value(
        "analytics_test_duration_seconds_bucket", {"mode": "all", "le": "5.0"}
    ) == 1.0
# Fin del archivo tests/shared/core/test_metrics_helpers.py
