# -*- coding: utf-8 -*-
"""
Tests del extractor de payload (sobre vs. plano).
"""

import pytest

from analytics.modules.normalization.payload import ExtractedPayload, PayloadShape, extract_payload


def test_envelope_is_unwrapped():
    body = {"messageId": "m-1", "payload": {"userId": 10, "role": "cliente"}}
    p = extract_payload(body)
    assert p.shape is PayloadShape.ENVELOPE
    assert dict(p.fields) == {"userId": 10, "role": "cliente"}


def test_flat_body_is_returned_unchanged():
    body = {"userId": 10, "role": "cliente"}
    p = extract_payload(body)
    assert p.shape is PayloadShape.FLAT
    assert dict(p.fields) == body


def test_non_dict_payload_key_keeps_flat_shape():
    # `payload` que no es objeto no cuenta como sobre
    body = {"payload": "texto", "id": 3}
    p = extract_payload(body)
    assert p.shape is PayloadShape.FLAT
    assert p.get("id") == 3


@pytest.mark.parametrize("body", [None, [], "x", 42])
def test_non_mapping_body_never_raises(body):
    p = extract_payload(body)
    assert p.shape is PayloadShape.FLAT
    assert dict(p.fields) == {}


def test_first_skips_empty_values():
    p = ExtractedPayload(PayloadShape.FLAT, {"userId": None, "id_usuario": "  ", "id": 5})
    assert p.first("userId", "id_usuario", "id") == 5
    assert p.first("missing") is None


def test_section_returns_nested_fields():
    p = extract_payload({"payload": {"payment": {"amount": 10}, "requestId": 1}})
    assert p.section("payment").get("amount") == 10
    assert dict(p.section("requestId").fields) == {}


def test_fields_are_read_only():
    p = extract_payload({"a": 1})
    with pytest.raises(TypeError):
        p.fields["a"] = 2  # type: ignore[index]
