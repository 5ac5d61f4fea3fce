"""
Raw item data model.

Represents one respondent's row as stored from the survey board.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass
class ColumnValue:
    """
    One column of a board item.
    Holds the display text, the raw JSON value and the declared column type.
    """
    text: Optional[str] = None
    value: Optional[str] = None
    type: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "ColumnValue":
        """Create ColumnValue from JSON dict."""
        return cls(
            text=data.get("text"),
            value=data.get("value"),
            type=data.get("type")
        )

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {"text": self.text, "value": self.value, "type": self.type}


@dataclass
class RawItem:
    """
    A survey response row keyed by its external item id.
    Replaced wholesale on update notifications, never patched.
    """
    item_id: str  # External item identifier
    board_id: str  # External board identifier
    item_name: str
    column_values: Dict[str, ColumnValue] = field(default_factory=dict)  # column id -> value
    updated_at: str = ""  # ISO timestamp of the last write

    @classmethod
    def from_dict(cls, data: dict) -> "RawItem":
        """Create RawItem from JSON dict."""
        return cls(
            item_id=str(data["item_id"]),
            board_id=str(data.get("board_id", "")),
            item_name=data.get("item_name", ""),
            column_values={
                column_id: ColumnValue.from_dict(value or {})
                for column_id, value in data.get("column_values", {}).items()
            },
            updated_at=data.get("updated_at", "")
        )

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "item_id": self.item_id,
            "board_id": self.board_id,
            "item_name": self.item_name,
            "column_values": {
                column_id: value.to_dict()
                for column_id, value in self.column_values.items()
            },
            "updated_at": self.updated_at
        }
