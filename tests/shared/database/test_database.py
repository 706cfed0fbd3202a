# -*- coding: utf-8 -*-
"""
Tests de la capa de base de datos explícita (engine, sesiones, esquema).
"""

import ssl
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import inspect, text
from sqlalchemy import select

from analytics.shared.config.settings_dev import DevSettings
from analytics.modules.users.models import User
from analytics.shared.database.database import (
    _ssl_for_mode,
    build_engine,
    build_session_factory,
    check_database_health,
    create_schema,
    session_scope,
)


@pytest.fixture
def settings(monkeypatch):
    for k in ("DB_URL", "DB_SSLMODE", "DB_ECHO_SQL"):
        monkeypatch.delenv(k, raising=False)
    return DevSettings(_env_file=None)


@pytest.mark.asyncio
async def test_build_engine_with_sqlite_url(settings):
    engine = build_engine(settings, url="sqlite+aiosqlite:///:memory:")
    try:
        assert engine.dialect.name == "sqlite"
        assert await check_database_health(engine) is True
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_health_check_returns_false_on_error(settings):
    engine = build_engine(settings, url="sqlite+aiosqlite:///:memory:")
    try:
        assert await check_database_health(engine, sql="SELECT * FROM no_such_table") is False
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_create_schema_registers_all_tables(engine):
    await create_schema(engine)  # idempotente

    async with engine.connect() as conn:
        tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())

    for name in (
        "raw_events",
        "users",
        "service_requests",
        "payments",
        "providers",
        "provider_skills",
        "provider_zones",
        "categories",
    ):
        assert name in tables


@pytest.mark.asyncio
async def test_session_scope_rolls_back_uncommitted_work(engine):
    factory = build_session_factory(engine)

    async with session_scope(factory) as session:
        await session.execute(text("INSERT INTO categories (external_id, name) VALUES (77, 'Gas')"))

    async with session_scope(factory) as session:
        count = (
            await session.execute(text("SELECT COUNT(*) FROM categories WHERE external_id = 77"))
        ).scalar_one()
    assert count == 0


@pytest.mark.asyncio
async def test_session_scope_keeps_committed_work(engine):
    factory = build_session_factory(engine)

    async with session_scope(factory) as session:
        await session.execute(text("INSERT INTO categories (external_id, name) VALUES (78, 'Plomería')"))
        await session.commit()

    async with session_scope(factory) as session:
        name = (
            await session.execute(text("SELECT name FROM categories WHERE external_id = 78"))
        ).scalar_one()
    assert name == "Plomería"


@pytest.mark.asyncio
async def test_timestamps_are_read_back_as_utc_aware(engine):
    factory = build_session_factory(engine)
    local = datetime(2025, 10, 2, 12, 30, tzinfo=timezone(timedelta(hours=-3)))

    async with session_scope(factory) as session:
        session.add(User(external_id=501, deactivated_at=local))
        await session.commit()

    # Sesión nueva: el valor sale de la base, no del identity map
    async with session_scope(factory) as session:
        user = (await session.execute(select(User).where(User.external_id == 501))).scalar_one()

    assert user.deactivated_at.tzinfo is not None
    assert user.deactivated_at == datetime(2025, 10, 2, 15, 30, tzinfo=timezone.utc)
    assert user.deactivated_at.utcoffset() == timedelta(0)


def test_ssl_for_mode():
    assert _ssl_for_mode("disable") is None
    assert _ssl_for_mode("prefer") is None
    ctx = _ssl_for_mode("REQUIRE")
    assert isinstance(ctx, ssl.SSLContext)
    assert ctx.verify_mode == ssl.CERT_REQUIRED
# Fin del archivo tests/shared/database/test_database.py
