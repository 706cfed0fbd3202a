# tests/conftest.py
# -*- coding: utf-8 -*-
"""
Config global de tests del normalizador.

- Motor ASYNC: sqlite+aiosqlite en memoria, uno por test (aislamiento total).
- StaticPool: todas las sesiones comparten la misma conexión (la base en
  memoria vive en esa conexión).
- SAVEPOINT en SQLite: pysqlite/aiosqlite emiten BEGIN por su cuenta y
  rompen begin_nested(); se desactiva y SQLAlchemy emite el BEGIN.
- Fábricas de eventos crudos y normalizador con reloj fijo.
"""

import uuid
from datetime import datetime, timezone

import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from analytics.shared.database import build_session_factory, create_schema
from analytics.modules.events.models import RawEvent
from analytics.modules.normalization.services import EventNormalizer

FIXED_NOW = datetime(2025, 11, 1, 12, 0, 0, tzinfo=timezone.utc)
EVENT_TS = datetime(2025, 10, 31, 9, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
async def engine():
    eng = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)

    @event.listens_for(eng.sync_engine, "connect")
    def _do_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(eng.sync_engine, "begin")
    def _do_begin(conn):
        conn.exec_driver_sql("BEGIN")

    await create_schema(eng)
    try:
        yield eng
    finally:
        await eng.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session
        if session.in_transaction():
            await session.rollback()


@pytest.fixture
def normalizer():
    return EventNormalizer(clock=lambda: FIXED_NOW)


@pytest.fixture
def make_event():
    """Fábrica de RawEvent transitorios (sin persistir)."""

    def _make(category, name, body=None, *, timestamp=EVENT_TS, **extra):
        return RawEvent(
            id=uuid.uuid4(),
            squad="test",
            category=category,
            name=name,
            body=body if body is not None else {},
            timestamp=timestamp,
            processed=False,
            **extra,
        )

    return _make


@pytest.fixture
def normalize(db_session, normalizer, make_event):
    """Atajo: construye el evento y lo normaliza en db_session."""

    async def _normalize(category, name, body=None, **kwargs):
        raw = make_event(category, name, body, **kwargs)
        return await normalizer.normalize_event(db_session, raw)

    return _normalize


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def event_ts():
    return EVENT_TS
