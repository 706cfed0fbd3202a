#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
scripts/replay_events.py

Replay de eventos crudos hacia el modelo normalizado (backfill).

Uso:
    python scripts/replay_events.py all [--batch-size 500]
    python scripts/replay_events.py from 2025-10-01T00:00:00Z
    python scripts/replay_events.py unprocessed
    python scripts/replay_events.py unprocessed --create-schema

Imprime el resumen {total, processed, errors, skipped} como JSON.
Código de salida 1 si hubo errores de normalización, 2 si la configuración
del replay es inválida.

Autor: Equipo Analytics
Fecha: 2025-11-07
"""

import argparse
import asyncio
import json
import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path

# Cargar .env ANTES de leer PYTHON_ENV (selecciona la clase de settings).
# Fuera de producción el .env manda sobre las variables del entorno.
from dotenv import load_dotenv

_ENV_PATH = Path(__file__).resolve().parents[1] / ".env"
_override_env = os.getenv("PYTHON_ENV", "development").strip().lower() != "production"
load_dotenv(dotenv_path=_ENV_PATH, override=_override_env)

from analytics.shared.config import get_settings, setup_logging
from analytics.shared.database import (
    build_engine,
    build_session_factory,
    check_database_health,
    create_schema,
)
from analytics.modules.normalization.services import EventReplayService, ReplayConfigurationError

logger = logging.getLogger("analytics.scripts.replay_events")


def _parse_from_date(raw: str) -> datetime:
    value = raw.strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"fecha ISO-8601 inválida: {raw!r}") from e
    # Sin zona se interpreta como UTC
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Replay de raw_events a través del motor de normalización.")
    parser.add_argument("--batch-size", type=int, default=None, help="Tamaño de lote (default: REPLAY_BATCH_SIZE)")
    parser.add_argument("--create-schema", action="store_true", help="Crear tablas faltantes antes del replay")

    sub = parser.add_subparsers(dest="mode", required=True)
    sub.add_parser("all", help="Todos los eventos")
    from_parser = sub.add_parser("from", help="Eventos desde una fecha (inclusive)")
    from_parser.add_argument("from_date", type=_parse_from_date, help="Fecha ISO-8601, p.ej. 2025-10-01T00:00:00Z")
    sub.add_parser("unprocessed", help="Solo eventos con processed=false (los marca al terminar)")
    return parser


async def run(args: argparse.Namespace) -> int:
    settings = get_settings()
    setup_logging(
        settings.log_level,
        settings.log_format,
        normalization_level=settings.log_level_normalization,
        replay_level=settings.log_level_replay,
        service_name=settings.app_name,
    )

    engine = build_engine(settings)
    try:
        if not await check_database_health(engine, timeout_s=settings.db_connect_timeout_s):
            logger.error("Base de datos no disponible; replay cancelado")
            return 2
        if args.create_schema:
            await create_schema(engine)

        service = EventReplayService.from_settings(settings, build_session_factory(engine))
        try:
            if args.mode == "all":
                summary = await service.replay_all(args.batch_size)
            elif args.mode == "from":
                summary = await service.replay_from(args.from_date, args.batch_size)
            else:
                summary = await service.replay_unprocessed(args.batch_size)
        except ReplayConfigurationError as e:
            logger.error("Configuración de replay inválida: %s", e)
            return 2
    finally:
        await engine.dispose()

    print(json.dumps(summary.as_dict()))
    return 1 if summary.errors else 0


def main() -> None:
    args = build_parser().parse_args()
    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()

# Fin del archivo scripts/replay_events.py
