# -*- coding: utf-8 -*-
"""
analytics/shared/config/__init__.py

Punto único de acceso a la configuración:
    from analytics.shared.config import get_settings, setup_logging

No se instancia ningún settings al importar; cada proceso (script, worker,
tests) llama a get_settings() o construye su propia instancia.
"""

from .config_loader import get_settings, load_settings
from .logging_config import setup_logging
from .settings_base import BaseAppSettings

__all__ = ["get_settings", "load_settings", "setup_logging", "BaseAppSettings"]
# Fin del archivo analytics/shared/config/__init__.py
