"""
Storage utility.

File-backed store for raw board items and trip access keys.
"""

import json
import os
import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

from tripeval.models.raw_item import RawItem
from tripeval.registry.column_registry import COLUMN_REGISTRY, ColumnRegistry
from tripeval.utils.accessors import get_text

logger = logging.getLogger(__name__)


class ItemStore:
    """
    Manages file I/O for stored items and access keys.

    Handles:
    - Raw items (data/items/<item_id>.json)
    - Access keys (data/keys.json)

    Items are returned fully materialized; every read goes to disk.
    """

    def __init__(self, data_root: str, registry: ColumnRegistry = COLUMN_REGISTRY):
        """
        Initialize item store.

        Args:
            data_root: Root data directory (e.g., /path/to/data)
            registry: Column registry used to read the survey type column
        """
        self.data_root = data_root
        self.items_dir = os.path.join(data_root, "items")
        self.keys_path = os.path.join(data_root, "keys.json")
        self.registry = registry

        os.makedirs(self.items_dir, exist_ok=True)

        logger.info(f"Initialized ItemStore with data_root={data_root}")

    # Items

    def save_item(self, item: RawItem) -> bool:
        """
        Create or replace an item.

        Returns:
            True if an existing item was replaced, False if it was created
        """
        existed = os.path.exists(self._item_path(item.item_id))
        item.updated_at = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
        self._write_json(self._item_path(item.item_id), item.to_dict())

        action = "Updated" if existed else "Created"
        logger.info(f"{action} item {item.item_id} ({len(item.column_values)} columns)")
        return existed

    def get_item(self, item_id: str) -> Optional[RawItem]:
        """Load an item by external id, or None if it is not stored."""
        filepath = self._item_path(item_id)
        if not os.path.exists(filepath):
            logger.debug(f"No stored item {item_id}")
            return None

        with open(filepath, 'r', encoding='utf-8') as f:
            return RawItem.from_dict(json.load(f))

    def delete_item(self, item_id: str) -> bool:
        """
        Remove an item.

        Returns:
            True if the item existed
        """
        filepath = self._item_path(item_id)
        if not os.path.exists(filepath):
            logger.warning(f"Item {item_id} not found in store")
            return False

        os.remove(filepath)
        logger.info(f"Deleted item {item_id}")
        return True

    def get_all_items(self) -> List[RawItem]:
        """All stored items, ordered by item id."""
        items = []
        for filename in sorted(os.listdir(self.items_dir)):
            if not filename.endswith('.json'):
                continue
            with open(os.path.join(self.items_dir, filename), 'r', encoding='utf-8') as f:
                items.append(RawItem.from_dict(json.load(f)))

        logger.debug(f"Loaded {len(items)} items from {self.items_dir}")
        return items

    def get_items_by_type(self, survey_type: str) -> List[RawItem]:
        """All stored items whose survey type column equals survey_type."""
        return [
            item for item in self.get_all_items()
            if get_text(item.column_values, "survey_type", self.registry) == survey_type
        ]

    # Access keys

    def save_key(self, item_id: str, business_id: str, key: str) -> int:
        """
        Store an access key for an item, replacing the item's earlier keys.

        Returns:
            Number of keys that were replaced
        """
        keys = self._load_keys()
        remaining = [k for k in keys if k["item_id"] != item_id]
        replaced = len(keys) - len(remaining)

        remaining.append({
            "item_id": item_id,
            "business_id": business_id,
            "key": key,
            "created_at": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
        })
        self._write_json(self.keys_path, remaining)

        logger.info(f"Saved key for item {item_id} (replaced {replaced})")
        return replaced

    def find_key(self, key: str) -> Optional[Dict]:
        """Key record for an access key value, or None."""
        for record in self._load_keys():
            if record["key"] == key:
                return record
        return None

    def get_keys_for_item(self, item_id: str) -> List[Dict]:
        return [k for k in self._load_keys() if k["item_id"] == item_id]

    def _load_keys(self) -> List[Dict]:
        if not os.path.exists(self.keys_path):
            return []
        with open(self.keys_path, 'r', encoding='utf-8') as f:
            return json.load(f)

    def _item_path(self, item_id: str) -> str:
        return os.path.join(self.items_dir, f"{item_id}.json")

    @staticmethod
    def _write_json(path: str, data) -> None:
        """Write through a temp file and rename so readers never see a partial file."""
        temp_path = f"{path}.tmp"
        try:
            with open(temp_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(temp_path, path)
        except Exception as e:
            logger.error(f"Failed to write {path}: {e}")
            if os.path.exists(temp_path):
                os.remove(temp_path)
            raise
