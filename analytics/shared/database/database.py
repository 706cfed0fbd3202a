# -*- coding: utf-8 -*-
"""
analytics/shared/database/database.py

SQLAlchemy async (asyncpg) construido de forma EXPLÍCITA.

No existe un engine global a nivel de módulo: cada proceso (script de
replay, worker de ingesta, tests) construye su engine y su fábrica de
sesiones y los inyecta en los servicios que los necesitan.

Provee:
- build_engine(settings)        -> AsyncEngine
- build_session_factory(engine) -> async_sessionmaker[AsyncSession]
- session_scope(factory)        -> context manager async
- check_database_health(engine)
- import_models() / create_schema(engine)

Autor: Equipo Analytics
Fecha: 2025-11-03
"""

from __future__ import annotations

import asyncio
import importlib
import logging
import ssl
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from analytics.shared.config.settings_base import BaseAppSettings
from analytics.shared.database.base import Base

logger = logging.getLogger(__name__)

# Módulos que registran modelos en Base.metadata
MODEL_MODULES = (
    "analytics.modules.events.models.raw_event_models",
    "analytics.modules.users.models.user_models",
    "analytics.modules.requests.models.request_models",
    "analytics.modules.payments.models.payment_models",
    "analytics.modules.providers.models.provider_models",
    "analytics.modules.categories.models.category_models",
)


def _ssl_for_mode(sslmode: str) -> ssl.SSLContext | bool | None:
    """
    Traduce DB_SSLMODE (estilo libpq) al argumento `ssl` de asyncpg.

    - disable -> sin TLS
    - prefer  -> default de asyncpg (TLS si el servidor lo ofrece)
    - require -> TLS con verificación estándar
    """
    mode = (sslmode or "").lower()
    if mode == "disable":
        return None
    if mode == "require":
        ctx = ssl.create_default_context(purpose=ssl.Purpose.SERVER_AUTH)
        ctx.check_hostname = True
        ctx.verify_mode = ssl.CERT_REQUIRED
        return ctx
    return None


def build_engine(settings: BaseAppSettings, url: str | None = None) -> AsyncEngine:
    """
    Crea el AsyncEngine a partir de settings.

    Args:
        settings: configuración cargada
        url: DSN alternativo (p.ej. sqlite+aiosqlite en tests); si se pasa,
             no se aplican connect_args específicos de asyncpg.
    """
    dsn = url or settings.database_url
    connect_args: dict = {}

    if dsn.startswith("postgresql+asyncpg"):
        connect_args = {
            "timeout": settings.db_connect_timeout_s,          # timeout de conexión
            "command_timeout": settings.db_command_timeout_s,  # timeout por consulta
            "server_settings": {"search_path": "public"},
        }
        ssl_arg = _ssl_for_mode(settings.db_sslmode)
        if ssl_arg is not None:
            connect_args["ssl"] = ssl_arg

    logger.info(
        "[DB] Construyendo engine (driver=%s, echo=%s, sslmode=%s)",
        dsn.split("://", 1)[0],
        settings.db_echo_sql,
        settings.db_sslmode,
    )
    return create_async_engine(
        dsn,
        echo=settings.db_echo_sql,
        pool_pre_ping=dsn.startswith("postgresql"),
        connect_args=connect_args,
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Fábrica de sesiones: sin autoflush y sin expirar objetos en commit."""
    return async_sessionmaker(
        bind=engine,
        expire_on_commit=False,
        class_=AsyncSession,
        autoflush=False,
    )


# ── Context manager reutilizable en scripts/tests
@asynccontextmanager
async def session_scope(
    factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """
    Abre una sesión y garantiza rollback de lo que no se haya confirmado.
    El commit lo decide quien usa el scope.
    """
    async with factory() as session:
        try:
            yield session
        finally:
            if session.in_transaction():
                await session.rollback()


# ── Health check
async def check_database_health(
    engine: AsyncEngine,
    timeout_s: float = 3.0,
    sql: str = "SELECT 1",
) -> bool:
    """
    Verifica conectividad a la base de datos.

    Returns:
        True si la conexión es exitosa, False en caso contrario
    """
    try:
        async with asyncio.timeout(timeout_s):
            async with engine.connect() as conn:
                await conn.execute(text(sql))
        return True
    except Exception as e:
        logger.warning("[DB] Health check falló: %s", e)
        return False


def import_models() -> None:
    """Importa todos los modelos para que queden registrados en Base.metadata."""
    for module in MODEL_MODULES:
        importlib.import_module(module)


async def create_schema(engine: AsyncEngine) -> None:
    """Crea las tablas faltantes desde la metadata ORM (idempotente)."""
    import_models()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("[DB] Esquema verificado (%d tablas)", len(Base.metadata.tables))


__all__ = [
    "MODEL_MODULES",
    "build_engine",
    "build_session_factory",
    "session_scope",
    "check_database_health",
    "import_models",
    "create_schema",
]
# Fin del archivo analytics/shared/database/database.py
