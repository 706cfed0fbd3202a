# -*- coding: utf-8 -*-
"""
analytics/modules/requests/repositories/request_repository.py

Repositorio de solicitudes de servicio.

Autor: Equipo Analytics
Fecha: 2025-11-04
"""

from analytics.shared.database.repository import ExternalIdRepository
from analytics.modules.requests.models import ServiceRequest


class ServiceRequestRepository(ExternalIdRepository[ServiceRequest]):
    def __init__(self) -> None:
        super().__init__(ServiceRequest)


__all__ = ["ServiceRequestRepository"]

# Fin del archivo analytics/modules/requests/repositories/request_repository.py
