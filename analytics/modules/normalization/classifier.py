# -*- coding: utf-8 -*-
"""
analytics/modules/normalization/classifier.py

Clasificador de eventos: decide qué handler normaliza un evento a partir de
su categoría (tópico) y su nombre.

El orden de las reglas importa (la primera que coincide gana), porque los
textos de categoría se solapan con subcadenas de los nombres:

 1. category == payment                         -> PAYMENT
 2. category == user  o name ~ user/usuario     -> USER
 3. category == quote y name ~ accepted         -> QUOTE_ACCEPTANCE
 4. category == request o name ~ request/order/solicitud/pedido -> REQUEST
 5. category == pago (tópico alternativo)       -> PAYMENT
 6. category == provider o name ~ provider/prestador + verbo  -> PROVIDER
 7. category == category o name ~ category/rubro + verbo      -> CATEGORY
 8. category == zone o name ~ zone              -> ZONE

Autor: Equipo Analytics
Fecha: 2025-11-05
"""

from __future__ import annotations

from enum import StrEnum
from typing import Iterable, Optional


class EventKind(StrEnum):
    USER = "user"
    QUOTE_ACCEPTANCE = "quote_acceptance"
    REQUEST = "request"
    PAYMENT = "payment"
    PROVIDER = "provider"
    CATEGORY = "category"
    ZONE = "zone"


USER_KEYWORDS = ("user", "usuario")
REQUEST_KEYWORDS = ("request", "order", "solicitud", "pedido")
ALT_PAYMENT_CATEGORIES = ("pago", "pagos")
LIFECYCLE_VERBS = ("created", "deactivated", "updated", "alta", "baja", "modificacion")


def _contains_any(text: str, keywords: Iterable[str]) -> bool:
    return any(k in text for k in keywords)


def classify(category: Optional[str], name: Optional[str]) -> Optional[EventKind]:
    """Devuelve el EventKind del evento, o None si ninguna regla aplica."""
    cat = (category or "").strip().lower()
    evt = (name or "").strip().lower()

    if cat == "payment":
        return EventKind.PAYMENT

    if cat == "user" or _contains_any(evt, USER_KEYWORDS):
        return EventKind.USER

    if cat == "quote" and "accepted" in evt:
        return EventKind.QUOTE_ACCEPTANCE

    if cat == "request" or _contains_any(evt, REQUEST_KEYWORDS):
        return EventKind.REQUEST

    if cat in ALT_PAYMENT_CATEGORIES:
        return EventKind.PAYMENT

    if cat == "provider" or (
        _contains_any(evt, ("provider", "prestador")) and _contains_any(evt, LIFECYCLE_VERBS)
    ):
        return EventKind.PROVIDER

    if cat == "category" or (
        _contains_any(evt, ("category", "rubro")) and _contains_any(evt, LIFECYCLE_VERBS)
    ):
        return EventKind.CATEGORY

    if cat == "zone" or "zone" in evt:
        return EventKind.ZONE

    return None


__all__ = ["EventKind", "classify"]

# Fin del archivo analytics/modules/normalization/classifier.py
