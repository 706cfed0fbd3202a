# -*- coding: utf-8 -*-
import pytest

from analytics.shared.config.config_loader import get_settings, load_settings
from analytics.shared.config.settings_dev import DevSettings
from analytics.shared.config.settings_prod import ProdSettings
from analytics.shared.config.settings_testing import EnvTestingSettings


def test_loader_returns_dev_by_default(monkeypatch):
    monkeypatch.delenv("PYTHON_ENV", raising=False)
    s = get_settings()
    assert isinstance(s, DevSettings)
    assert s.is_dev is True
    assert s.python_env == "development"


def test_loader_selects_test(monkeypatch):
    monkeypatch.setenv("PYTHON_ENV", "test")
    s = get_settings()
    assert isinstance(s, EnvTestingSettings)
    assert s.is_test is True
    assert s.replay_batch_size == 100


def test_loader_selects_prod(monkeypatch):
    monkeypatch.setenv("PYTHON_ENV", "production")
    s = get_settings()
    assert isinstance(s, ProdSettings)
    assert s.is_prod is True
    assert s.log_format == "json"
    assert s.db_sslmode == "require"


def test_loader_caches_singleton():
    a = get_settings()
    b = get_settings()
    assert a is b


def test_load_settings_is_not_cached():
    assert load_settings() is not load_settings()


def test_prod_requires_ssl(monkeypatch):
    monkeypatch.setenv("PYTHON_ENV", "production")
    monkeypatch.setenv("DB_SSLMODE", "disable")
    with pytest.raises(ValueError) as ei:
        get_settings()
    assert "db_sslmode" in str(ei.value).lower()


@pytest.mark.parametrize(
    "env, value",
    [
        ("REPLAY_BATCH_SIZE", "0"),
        ("REPLAY_PROGRESS_EVERY", "0"),
        ("REPLAY_MAX_BATCH_SIZE", "10"),
        ("NORMALIZATION_DEFAULT_CURRENCY", "PESOS"),
    ],
)
def test_consistency_checks(monkeypatch, env, value):
    monkeypatch.setenv(env, value)
    with pytest.raises(ValueError):
        get_settings()
# Fin del archivo tests/shared/config/test_config_loader.py
