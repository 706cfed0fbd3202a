# -*- coding: utf-8 -*-
"""
Tests de los handlers de categorías (rubros) y zonas.
"""

import pytest

from analytics.modules.categories.repositories import CategoryRepository
from analytics.modules.normalization.classifier import EventKind
from analytics.modules.normalization.results import NormalizationOutcome

categories = CategoryRepository()


async def test_category_created_and_renamed(db_session, normalize):
    await normalize("category", "rubro.alta", {"rubroId": 4, "nombre": "Hogar"})
    await normalize("category", "rubro.modificacion", {"rubroId": 4, "nombre": "Hogar y Jardín"})

    rows = [c for c in await categories.list(db_session) if c.external_id == 4]
    assert len(rows) == 1
    assert rows[0].name == "Hogar y Jardín"


@pytest.mark.parametrize("name", ["category_deactivated", "rubro.baja", "category_deleted"])
async def test_category_deactivation_is_hard_delete(db_session, normalize, name):
    await normalize("category", "category_created", {"id": 4, "name": "Hogar"})

    result = await normalize("category", name, {"id": 4})

    assert result.outcome is NormalizationOutcome.APPLIED
    assert await categories.get_by_external_id(db_session, 4) is None


async def test_deleting_unknown_category_is_harmless(normalize):
    result = await normalize("category", "category_deactivated", {"id": 77})
    assert result.outcome is NormalizationOutcome.APPLIED


async def test_zone_events_are_skipped(normalize):
    result = await normalize("zone", "zone_created", {"id": 1, "name": "Palermo"})

    assert result.kind is EventKind.ZONE
    assert result.outcome is NormalizationOutcome.SKIPPED
