# -*- coding: utf-8 -*-
"""
Tests del handler de pagos: placeholders, monotonía de estados terminales,
selección de método y captured_at.
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from analytics.modules.normalization.results import NormalizationOutcome
from analytics.modules.payments.enums import PaymentStatus
from analytics.modules.payments.models import PLACEHOLDER_ID_OFFSET
from analytics.modules.payments.repositories import PaymentRepository

payments = PaymentRepository()


def _matching(request_id, **payment):
    return {"payload": {"requestId": request_id, "payment": payment}}


def _direct(payment_id, **fields):
    return {"payload": {"paymentId": payment_id, **fields}}


# ------------------------------------------------------------------
# Placeholders (productor de matching)
# ------------------------------------------------------------------
async def test_matching_event_creates_placeholder(db_session, normalize):
    result = await normalize("payment", "payment_intent", _matching(55, amount="1500.50", method="card", userId=7))

    assert result.outcome is NormalizationOutcome.APPLIED
    ph = await payments.get_by_external_id(db_session, PLACEHOLDER_ID_OFFSET + 55)
    assert ph is not None
    assert ph.is_placeholder is True
    assert ph.request_id == 55
    assert ph.payer_id == 7
    assert ph.amount == Decimal("1500.50")
    assert ph.method == "card"
    assert ph.currency == "ARS"
    assert ph.status is PaymentStatus.PENDING
    assert ph.captured_at is None


async def test_pending_placeholder_is_refreshed_in_place(db_session, normalize):
    await normalize("payment", "payment_intent", _matching(55, amount=100, method="card"))
    await normalize("payment", "payment_intent", _matching(55, amount=120, method="transfer"))

    rows = [p for p in await payments.list(db_session) if p.request_id == 55]
    assert len(rows) == 1
    assert rows[0].amount == Decimal("120")
    assert rows[0].method == "transfer"


async def test_placeholder_supersession(db_session, normalize):
    await normalize("payment", "payment_intent", _matching(55, amount=100))
    placeholder_id = PLACEHOLDER_ID_OFFSET + 55

    result = await normalize(
        "payment",
        "payment_created",
        _direct(900, requestId=55, userId=7, amount=100, status="pending"),
    )

    assert result.outcome is NormalizationOutcome.APPLIED
    assert await payments.get_by_external_id(db_session, placeholder_id) is None
    real = await payments.get_by_external_id(db_session, 900)
    assert real is not None
    assert real.is_placeholder is False
    assert real.request_id == 55


async def test_matching_event_after_real_payment_is_noop(db_session, normalize):
    await normalize("payment", "payment_created", _direct(900, requestId=55, userId=7, amount=100))

    result = await normalize("payment", "payment_intent", _matching(55, amount=999))

    assert result.outcome is NormalizationOutcome.SKIPPED
    assert await payments.get_by_external_id(db_session, PLACEHOLDER_ID_OFFSET + 55) is None
    real = await payments.get_by_external_id(db_session, 900)
    assert real.amount == Decimal("100")


async def test_matching_event_without_request_id_is_skipped(normalize):
    result = await normalize("payment", "payment_intent", {"payment": {"amount": 10}})
    assert result.outcome is NormalizationOutcome.SKIPPED


async def test_nested_details_with_real_payment_id_create_real_payment(db_session, normalize):
    body = {"payload": {"paymentId": 901, "requestId": 55, "payment": {"amount": 10}}}

    result = await normalize("payment", "payment_created", body)

    assert result.outcome is NormalizationOutcome.APPLIED
    assert await payments.get_by_external_id(db_session, PLACEHOLDER_ID_OFFSET + 55) is None
    pay = await payments.get_by_external_id(db_session, 901)
    assert pay is not None
    assert pay.is_placeholder is False
    assert pay.request_id == 55


# ------------------------------------------------------------------
# Estados
# ------------------------------------------------------------------
async def test_terminal_status_never_regresses_to_pending(db_session, normalize):
    await normalize("payment", "payment_created", _direct(900, userId=7, amount=100))
    await normalize("payment", "payment_status_updated", _direct(900, status="approved"))

    await normalize("payment", "payment_created", _direct(900, userId=7, amount=100))

    pay = await payments.get_by_external_id(db_session, 900)
    assert pay.status is PaymentStatus.APPROVED


async def test_terminal_to_terminal_transition_is_allowed(db_session, normalize):
    await normalize("payment", "payment_status_updated", _direct(900, userId=7, status="approved"))
    await normalize("payment", "payment_refunded", _direct(900, refundId="R-1"))

    pay = await payments.get_by_external_id(db_session, 900)
    assert pay.status is PaymentStatus.REFUNDED
    assert pay.refund_id == "R-1"
    # captured_at del aprobado se conserva
    assert pay.captured_at is not None


async def test_method_selection_never_changes_status(db_session, normalize):
    await normalize("payment", "payment_status_updated", _direct(900, userId=7, status="rejected"))

    await normalize("payment", "payment_method_selected", _direct(900, method="mercadopago", status="approved"))

    pay = await payments.get_by_external_id(db_session, 900)
    assert pay.status is PaymentStatus.REJECTED
    assert pay.method == "mercadopago"
    assert pay.captured_at is None


async def test_method_selection_backfills_ids_but_not_amount(db_session, normalize):
    await normalize("payment", "payment_created", _direct(900, amount=100))

    await normalize(
        "payment",
        "payment_method_selected",
        _direct(900, method="card", userId=7, providerId=12, requestId=55, amount=999),
    )

    pay = await payments.get_by_external_id(db_session, 900)
    assert pay.payer_id == 7
    assert pay.provider_id == 12
    assert pay.request_id == 55
    assert pay.amount == Decimal("100")
    assert pay.status is PaymentStatus.PENDING


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("APPROVED", PaymentStatus.APPROVED),
        ("aprobado", PaymentStatus.APPROVED),
        ("succeeded", PaymentStatus.APPROVED),
        ("failed", PaymentStatus.REJECTED),
        ("expired", PaymentStatus.EXPIRED),
        ("refunded", PaymentStatus.REFUNDED),
        ("created", PaymentStatus.PENDING),
    ],
)
async def test_explicit_status_field_mapping(db_session, normalize, raw, expected):
    await normalize("payment", "payment_status_updated", _direct(900, userId=7, status=raw))
    pay = await payments.get_by_external_id(db_session, 900)
    assert pay.status is expected


async def test_status_from_event_name_when_no_status_field(db_session, normalize):
    await normalize("pago", "pago_expirado", {"pagoId": 31, "userId": 7})
    pay = await payments.get_by_external_id(db_session, 31)
    assert pay.status is PaymentStatus.EXPIRED


# ------------------------------------------------------------------
# captured_at
# ------------------------------------------------------------------
async def test_captured_at_uses_update_timestamp_array(db_session, normalize):
    await normalize(
        "payment",
        "payment_status_updated",
        _direct(900, userId=7, status="approved", updatedAt=[2025, 10, 2, 15, 30, 0, 0]),
    )
    pay = await payments.get_by_external_id(db_session, 900)
    assert pay.captured_at == datetime(2025, 10, 2, 15, 30, tzinfo=timezone.utc)


async def test_captured_at_falls_back_to_processing_time(db_session, normalize, fixed_now):
    await normalize("payment", "payment_status_updated", _direct(900, userId=7, status="approved"))
    pay = await payments.get_by_external_id(db_session, 900)
    assert pay.captured_at == fixed_now


async def test_captured_at_is_kept_on_repeated_approval(db_session, normalize):
    await normalize(
        "payment",
        "payment_status_updated",
        _direct(900, userId=7, status="approved", updatedAt=[2025, 10, 2, 15, 30]),
    )
    await normalize(
        "payment",
        "payment_status_updated",
        _direct(900, status="approved", updatedAt=[2025, 10, 5, 8, 0]),
    )
    pay = await payments.get_by_external_id(db_session, 900)
    assert pay.captured_at == datetime(2025, 10, 2, 15, 30, tzinfo=timezone.utc)


async def test_pending_payment_has_no_capture(db_session, normalize):
    await normalize("payment", "payment_created", _direct(900, userId=7))
    pay = await payments.get_by_external_id(db_session, 900)
    assert pay.captured_at is None


# ------------------------------------------------------------------
# Pagador faltante
# ------------------------------------------------------------------
async def test_missing_payer_is_tolerated_and_backfilled(db_session, normalize):
    result = await normalize("payment", "payment_created", _direct(900, amount=50))
    assert result.outcome is NormalizationOutcome.APPLIED
    pay = await payments.get_by_external_id(db_session, 900)
    assert pay.payer_id is None

    await normalize("payment", "payment_status_updated", _direct(900, userId=7, status="pending"))
    pay = await payments.get_by_external_id(db_session, 900)
    assert pay.payer_id == 7
    assert pay.amount == Decimal("50")


async def test_direct_event_without_payment_id_is_skipped(normalize):
    result = await normalize("payment", "payment_created", {"payload": {"userId": 7}})
    assert result.outcome is NormalizationOutcome.SKIPPED


async def test_same_payment_event_twice_is_idempotent(db_session, normalize):
    body = _direct(900, userId=7, amount="10.00", status="approved")
    await normalize("payment", "payment_status_updated", body)
    first = await payments.get_by_external_id(db_session, 900)
    captured = first.captured_at

    await normalize("payment", "payment_status_updated", body)

    rows = [p for p in await payments.list(db_session) if p.external_id == 900]
    assert len(rows) == 1
    assert rows[0].status is PaymentStatus.APPROVED
    assert rows[0].captured_at == captured
