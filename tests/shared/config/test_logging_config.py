# -*- coding: utf-8 -*-
import json
import logging

import pytest

from analytics.shared.config.logging_config import (
    NORMALIZATION_LOGGER,
    REPLAY_LOGGER,
    build_logging_config,
    setup_logging,
)


@pytest.fixture(autouse=True)
def _reset_module_levels():
    yield
    for name in (NORMALIZATION_LOGGER, REPLAY_LOGGER):
        logging.getLogger(name).setLevel(logging.NOTSET)


def test_setup_logging_plain():
    setup_logging(level="DEBUG", fmt="plain")
    logger = logging.getLogger("test_plain")
    # No debe fallar emitir logs
    logger.debug("hello plain")
    assert logging.getLogger().level == logging.DEBUG
    assert any(isinstance(h, logging.StreamHandler) for h in logging.getLogger().handlers)


def test_setup_logging_json():
    setup_logging(level="INFO", fmt="json")
    logging.getLogger("test_json").info("hello json")
    # El formatter activo del root debe ser el de python-json-logger
    found = any(
        getattr(h, "formatter", None) is not None
        and h.formatter.__class__.__module__.startswith("pythonjsonlogger")
        for h in logging.getLogger().handlers
    )
    assert found, "Se esperaba JsonFormatter activo en modo json"


def test_sqlalchemy_engine_logger_is_quiet():
    setup_logging(level="DEBUG", fmt="plain")
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING


def test_module_levels_are_independent_from_root():
    setup_logging(level="DEBUG", fmt="plain", normalization_level="WARNING", replay_level="INFO")

    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger(NORMALIZATION_LOGGER).level == logging.WARNING
    assert logging.getLogger(REPLAY_LOGGER).level == logging.INFO
    # Los handlers heredan del logger padre
    assert not logging.getLogger(f"{NORMALIZATION_LOGGER}.payment_handler").isEnabledFor(logging.DEBUG)


def test_module_levels_are_omitted_when_not_set():
    cfg = build_logging_config("INFO", "plain")
    assert set(cfg["loggers"]) == {"sqlalchemy.engine"}


def test_json_records_carry_service_and_renamed_fields():
    setup_logging(level="INFO", fmt="json", service_name="replay-test")
    handler = logging.getLogger().handlers[0]
    record = logging.LogRecord("analytics.x", logging.INFO, __file__, 1, "hola", None, None)

    payload = json.loads(handler.formatter.format(record))

    assert payload["service"] == "replay-test"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "analytics.x"
    assert payload["message"] == "hola"
# Fin del archivo tests/shared/config/test_logging_config.py
