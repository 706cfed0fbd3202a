# -*- coding: utf-8 -*-
"""
analytics/shared/__init__.py

Infraestructura compartida: configuración, logging y acceso a datos.
"""
