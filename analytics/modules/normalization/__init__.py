# -*- coding: utf-8 -*-
"""
analytics/modules/normalization

Motor de normalización y reconciliación de eventos crudos hacia el modelo
relacional (usuarios, solicitudes, pagos, prestadores, categorías).
"""
