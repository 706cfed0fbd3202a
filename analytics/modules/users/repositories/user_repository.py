# -*- coding: utf-8 -*-
"""
analytics/modules/users/repositories/user_repository.py

Repositorio de usuarios normalizados.

Autor: Equipo Analytics
Fecha: 2025-11-04
"""

from analytics.shared.database.repository import ExternalIdRepository
from analytics.modules.users.models import User


class UserRepository(ExternalIdRepository[User]):
    def __init__(self) -> None:
        super().__init__(User)


__all__ = ["UserRepository"]

# Fin del archivo analytics/modules/users/repositories/user_repository.py
