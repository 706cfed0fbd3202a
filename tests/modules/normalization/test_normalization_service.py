# -*- coding: utf-8 -*-
"""
Tests del motor de reconciliación (EventNormalizer): despacho, aislamiento
de fallos por evento y métricas.
"""

import logging

import pytest
from prometheus_client import REGISTRY

from analytics.modules.normalization.classifier import EventKind
from analytics.modules.normalization.handlers import EventHandler, UserEventHandler
from analytics.modules.normalization.results import NormalizationOutcome
from analytics.modules.normalization.services import EventNormalizer, build_default_handlers
from analytics.modules.users.repositories import UserRepository

users = UserRepository()


class ExplodingUserHandler(UserEventHandler):
    """Escribe y luego falla si el payload lo pide."""

    async def handle(self, session, ctx):
        outcome = await super().handle(session, ctx)
        if ctx.payload.get("explode"):
            raise RuntimeError("boom")
        return outcome


@pytest.fixture
def exploding_normalizer(fixed_now):
    handlers = build_default_handlers()
    handlers[EventKind.USER] = ExplodingUserHandler(UserRepository())
    return EventNormalizer(handlers, clock=lambda: fixed_now)


def _events_total(kind, outcome):
    value = REGISTRY.get_sample_value("normalization_events_total", {"kind": kind, "outcome": outcome})
    return value or 0.0


async def test_default_handlers_cover_every_kind():
    assert set(build_default_handlers()) == set(EventKind)


async def test_unclassified_event_is_dropped(normalize, caplog):
    with caplog.at_level(logging.WARNING):
        result = await normalize("billing", "invoice_sent", {"id": 1})

    assert result.outcome is NormalizationOutcome.SKIPPED
    assert result.kind is None
    assert result.reason == "unclassified"
    assert any("sin clasificación" in r.getMessage() for r in caplog.records)


async def test_handler_failure_is_captured_not_raised(db_session, exploding_normalizer, make_event, caplog):
    raw = make_event("user", "user_created", {"userId": 1, "explode": True})

    with caplog.at_level(logging.ERROR):
        result = await exploding_normalizer.normalize_event(db_session, raw)

    assert result.outcome is NormalizationOutcome.FAILED
    assert isinstance(result.error, RuntimeError)
    assert result.event_id == raw.id
    assert any(str(raw.id) in r.getMessage() for r in caplog.records)


async def test_failed_event_writes_are_rolled_back(db_session, exploding_normalizer, make_event):
    ok = make_event("user", "user_created", {"userId": 1})
    bad = make_event("user", "user_created", {"userId": 2, "explode": True})

    await exploding_normalizer.normalize_event(db_session, ok)
    await exploding_normalizer.normalize_event(db_session, bad)

    assert await users.get_by_external_id(db_session, 1) is not None
    assert await users.get_by_external_id(db_session, 2) is None


async def test_session_remains_usable_after_failure(db_session, exploding_normalizer, make_event):
    await exploding_normalizer.normalize_event(db_session, make_event("user", "user_created", {"userId": 2, "explode": True}))
    result = await exploding_normalizer.normalize_event(db_session, make_event("user", "user_created", {"userId": 3}))

    assert result.outcome is NormalizationOutcome.APPLIED
    await db_session.commit()
    assert await users.get_by_external_id(db_session, 3) is not None


async def test_missing_handler_is_skipped(db_session, make_event):
    normalizer = EventNormalizer({})
    result = await normalizer.normalize_event(db_session, make_event("user", "user_created", {"userId": 1}))
    assert result.outcome is NormalizationOutcome.SKIPPED
    assert result.reason == "no_handler"


async def test_naive_event_timestamp_is_treated_as_utc(normalizer, make_event, event_ts):
    raw = make_event("user", "user_created", {"userId": 1}, timestamp=event_ts.replace(tzinfo=None))
    ctx = normalizer.build_context(raw)
    assert ctx.occurred_at == event_ts
    assert ctx.name == "user_created"


async def test_outcomes_are_counted(normalize):
    before_applied = _events_total("user", "applied")
    before_unclassified = _events_total("unclassified", "skipped")

    await normalize("user", "user_created", {"userId": 1})
    await normalize("billing", "invoice_sent", {})

    assert _events_total("user", "applied") == before_applied + 1
    assert _events_total("unclassified", "skipped") == before_unclassified + 1


async def test_custom_handler_contract(db_session, make_event):
    class CountingHandler(EventHandler):
        kind = EventKind.ZONE

        def __init__(self):
            self.seen = []

        async def handle(self, session, ctx):
            self.seen.append(ctx.event_id)
            return NormalizationOutcome.APPLIED

    handler = CountingHandler()
    normalizer = EventNormalizer({EventKind.ZONE: handler})
    raw = make_event("zone", "zone_created", {})

    result = await normalizer.normalize_event(db_session, raw)

    assert result.outcome is NormalizationOutcome.APPLIED
    assert handler.seen == [raw.id]
