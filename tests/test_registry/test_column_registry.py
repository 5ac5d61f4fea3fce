"""
Basic unit tests for the Column Registry.
"""

import pytest

from tripeval.registry.column_registry import (
    COLUMN_IDS,
    COLUMN_REGISTRY,
    DMCS,
    HOTELS,
    RATING_FIELDS,
    RESTAURANTS,
    TOURS,
    ColumnRegistry,
)


def test_resolve_known_field():
    assert COLUMN_REGISTRY.resolve("business_id") == "text_mkrkqj1g"
    assert COLUMN_REGISTRY.resolve("survey_type") == "color_mksvhn92"


def test_resolve_unknown_field_is_none():
    assert COLUMN_REGISTRY.resolve("unknown") is None
    assert "unknown" not in COLUMN_REGISTRY


def test_column_ids_are_read_only():
    with pytest.raises(TypeError):
        COLUMN_IDS["client"] = "other"


def test_registry_copies_custom_mapping():
    columns = {"client": "col_a"}
    registry = ColumnRegistry(columns)
    columns["client"] = "col_b"

    assert registry.resolve("client") == "col_a"
    assert len(registry) == 1


def test_column_ids_are_unique():
    assert len(set(COLUMN_IDS.values())) == len(COLUMN_IDS)


def test_entity_kind_slot_counts():
    assert len(HOTELS.slots) == 4
    assert len(TOURS.slots) == 10
    assert len(RESTAURANTS.slots) == 10
    assert len(DMCS.slots) == 2
    assert HOTELS.slots[1] == ("hotel_2_name", "hotel_2_rating")


def test_every_slot_field_resolves():
    for kind in (HOTELS, TOURS, RESTAURANTS, DMCS):
        for name_field, rating_field in kind.slots:
            assert COLUMN_REGISTRY.resolve(name_field) is not None
            assert COLUMN_REGISTRY.resolve(rating_field) is not None


def test_every_rating_field_resolves():
    for rating_field in RATING_FIELDS:
        assert COLUMN_REGISTRY.resolve(rating_field.name) is not None
        if rating_field.label_field:
            assert COLUMN_REGISTRY.resolve(rating_field.label_field) is not None


def test_rating_fields_in_evaluation():
    in_evaluation = [f.name for f in RATING_FIELDS if f.in_evaluation]
    assert "air_network_score" not in in_evaluation
    assert "food_overall" not in in_evaluation
    assert len(in_evaluation) == 21
