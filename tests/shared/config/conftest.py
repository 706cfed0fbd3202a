# -*- coding: utf-8 -*-
import os

import pytest


@pytest.fixture(autouse=True)
def _isolate_env_and_cache(monkeypatch):
    """
    Aísla variables de entorno y limpia el caché de get_settings() en cada test.
    """
    for k in list(os.environ.keys()):
        if k.startswith(("DB_", "APP_", "LOG_", "REPLAY_", "NORMALIZATION_")):
            monkeypatch.delenv(k, raising=False)
    monkeypatch.setenv("PYTHON_ENV", "development")
    # Directorio sin .env para no heredar la configuración local
    monkeypatch.chdir(os.path.dirname(__file__))

    from analytics.shared.config.config_loader import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
