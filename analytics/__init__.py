# -*- coding: utf-8 -*-
"""
analytics/__init__.py

Motor de normalización y reconciliación de eventos de negocio
(usuarios, solicitudes, pagos, prestadores, rubros y zonas).

Autor: Equipo Analytics
Fecha: 2025-11-03
"""

__version__ = "0.1.0"

# Fin del archivo analytics/__init__.py
