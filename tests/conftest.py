"""
Shared fixtures for TripEval tests.

Items are built from logical field names so tests never spell column ids.
"""

import pytest

from tripeval.models.raw_item import ColumnValue, RawItem
from tripeval.registry.column_registry import COLUMN_IDS
from tripeval.utils.storage import ItemStore


def build_item(item_id="1", business_id="100", survey_type="Convidados", extra_columns=None, **fields):
    """
    Create a RawItem from logical field values.

    Numbers are stored as display text, the way the board sends them.
    extra_columns maps raw column ids to ColumnValue for unmapped columns.
    """
    values = {"business_id": business_id, "survey_type": survey_type, **fields}
    column_values = {}
    for field, value in values.items():
        if value is None:
            continue
        column_type = "numbers" if isinstance(value, (int, float)) else "text"
        column_values[COLUMN_IDS[field]] = ColumnValue(text=str(value), type=column_type)
    column_values.update(extra_columns or {})

    return RawItem(
        item_id=item_id,
        board_id="9242892489",
        item_name=f"Response {item_id}",
        column_values=column_values
    )


@pytest.fixture
def make_item():
    """Factory fixture for RawItem objects."""
    return build_item


@pytest.fixture
def store(tmp_path):
    """Empty item store under a temporary directory."""
    return ItemStore(str(tmp_path / "data"))
