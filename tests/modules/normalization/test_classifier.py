# -*- coding: utf-8 -*-
"""
Tests del clasificador de eventos y su orden de precedencia.
"""

import pytest

from analytics.modules.normalization.classifier import EventKind, classify


def test_payment_category_wins_over_user_name():
    assert classify("payment", "user_payment_created") is EventKind.PAYMENT


def test_user_by_name_beats_request_keywords():
    # "usuario" (regla 2) antes que "solicitud" (regla 4)
    assert classify("misc", "usuario_solicitud_creada") is EventKind.USER


def test_quote_acceptance_requires_quote_category_and_accepted():
    assert classify("quote", "quote.accepted") is EventKind.QUOTE_ACCEPTANCE
    assert classify("quote", "quote.created") is None
    assert classify("other", "quote.accepted") is None


def test_quote_acceptance_before_request_keywords():
    assert classify("quote", "request_quote_accepted") is EventKind.QUOTE_ACCEPTANCE


@pytest.mark.parametrize(
    "category, name",
    [
        ("request", "anything"),
        ("matching", "solicitud.creada"),
        ("orders", "order_finalized"),
        ("x", "pedido_cancelado"),
    ],
)
def test_request_rule(category, name):
    assert classify(category, name) is EventKind.REQUEST


def test_alternate_payment_topic():
    assert classify("pago", "aprobado") is EventKind.PAYMENT


def test_request_keyword_beats_alternate_payment_topic():
    assert classify("pago", "pedido_pagado") is EventKind.REQUEST


@pytest.mark.parametrize(
    "category, name",
    [
        ("provider", "whatever"),
        ("catalog", "provider_created"),
        ("catalog", "prestador.alta"),
        ("catalog", "prestador.modificacion"),
    ],
)
def test_provider_rule(category, name):
    assert classify(category, name) is EventKind.PROVIDER


def test_provider_name_without_lifecycle_verb_is_not_provider():
    assert classify("catalog", "provider_rated") is None


@pytest.mark.parametrize(
    "category, name",
    [("category", "x"), ("catalog", "category_deactivated"), ("catalog", "rubro.baja")],
)
def test_category_rule(category, name):
    assert classify(category, name) is EventKind.CATEGORY


def test_zone_rule():
    assert classify("zone", "x") is EventKind.ZONE
    assert classify("catalog", "zone_renamed") is EventKind.ZONE


def test_classification_is_case_insensitive():
    assert classify("PAYMENT", "X") is EventKind.PAYMENT
    assert classify("Misc", "User_Created") is EventKind.USER


@pytest.mark.parametrize("category, name", [("billing", "invoice_sent"), (None, None), ("", "")])
def test_unmatched_returns_none(category, name):
    assert classify(category, name) is None
