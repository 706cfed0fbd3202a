# -*- coding: utf-8 -*-
"""
analytics/modules/normalization/handlers/__init__.py

Handlers de normalización, uno por entidad destino.
"""

from .base import EventContext, EventHandler
from .category_handler import CategoryEventHandler
from .payment_handler import PaymentEventHandler
from .provider_handler import ProviderEventHandler
from .quote_handler import QuoteAcceptanceHandler
from .request_handler import RequestEventHandler
from .user_handler import UserEventHandler
from .zone_handler import ZoneEventHandler

__all__ = [
    "EventContext",
    "EventHandler",
    "CategoryEventHandler",
    "PaymentEventHandler",
    "ProviderEventHandler",
    "QuoteAcceptanceHandler",
    "RequestEventHandler",
    "UserEventHandler",
    "ZoneEventHandler",
]
