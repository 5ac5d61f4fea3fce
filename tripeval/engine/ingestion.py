"""
Webhook Ingestor.

Applies survey board notifications (create/update, delete, access key)
to the item store. The board item itself is fetched by the caller and
handed over as the API returns it.
"""

import json
import logging
from typing import Optional

import config.settings as settings
from tripeval.errors import InvalidArgumentError, NotFoundError
from tripeval.models.raw_item import ColumnValue, RawItem
from tripeval.models.survey import SurveyType
from tripeval.registry.column_registry import COLUMN_REGISTRY, ColumnRegistry
from tripeval.utils.accessors import get_text
from tripeval.utils.storage import ItemStore

logger = logging.getLogger(__name__)


def challenge_response(payload: dict) -> Optional[dict]:
    """Echo of a webhook verification handshake, or None for real events."""
    challenge = (payload or {}).get("challenge")
    if challenge:
        return {"challenge": challenge}
    return None


def extract_item_id(payload: dict) -> str:
    """
    Item id of a webhook event (pulseId, falling back to itemId).

    Raises:
        InvalidArgumentError: If the event carries neither
    """
    event = (payload or {}).get("event") or {}
    item_id = event.get("pulseId") or event.get("itemId")
    if not item_id:
        raise InvalidArgumentError("Item ID is required")
    return str(item_id)


class WebhookIngestor:
    """
    Keeps the item store in sync with the survey board.

    Created or updated items replace the stored copy wholesale; deleted
    items are removed.
    """

    def __init__(self, store: ItemStore, registry: ColumnRegistry = COLUMN_REGISTRY):
        self.store = store
        self.registry = registry

    def ingest(self, board_item: dict) -> RawItem:
        """
        Store a board item fetched after a create/update notification.

        Args:
            board_item: API item with id, name, board.id and column_values

        Returns:
            The stored RawItem
        """
        if not board_item or not board_item.get("id"):
            raise InvalidArgumentError("Board item without id")

        column_values = {
            column["id"]: ColumnValue(
                text=column.get("text") or None,
                value=column.get("value") or None,
                type=column.get("type") or None
            )
            for column in board_item.get("column_values", [])
        }

        item = RawItem(
            item_id=str(board_item["id"]),
            board_id=str((board_item.get("board") or {}).get("id") or settings.BOARD_ID),
            item_name=board_item.get("name", ""),
            column_values=column_values
        )
        self._ensure_survey_type(item)

        self.store.save_item(item)
        return item

    def delete(self, payload: dict) -> str:
        """
        Remove the item named by a delete notification.

        Raises:
            NotFoundError: If the item is not stored
        """
        item_id = extract_item_id(payload)
        if not self.store.delete_item(item_id):
            raise NotFoundError(f"Item {item_id} not found in store", item_id)
        return item_id

    def save_key(self, item_id: str, board_item: dict) -> dict:
        """
        Store the access key carried by a key-board item.

        The business id is read from the mirror column (display value first),
        the key from the key column. Earlier keys of the same item are dropped.
        """
        columns = {
            column["id"]: column for column in (board_item or {}).get("column_values", [])
        }

        mirror = columns.get(self.registry.resolve("key_business_id")) or {}
        business_id = mirror.get("display_value") or mirror.get("text")
        key = (columns.get(self.registry.resolve("access_key")) or {}).get("text")

        if not business_id:
            raise InvalidArgumentError("Business id not found in item")
        if not key:
            raise InvalidArgumentError("Access key not found in item")

        replaced = self.store.save_key(item_id, business_id, key)
        return {
            "item_id": item_id,
            "business_id": business_id,
            "key": key,
            "replaced": replaced
        }

    def _ensure_survey_type(self, item: RawItem) -> None:
        """
        Fill an empty survey type from the author columns.

        A guide name means Guias, a corporate contact means Corporativo,
        otherwise the response came from a guest.
        """
        bag = item.column_values
        if get_text(bag, "survey_type", self.registry).strip():
            return

        if get_text(bag, "guide_name", self.registry).strip():
            survey_type = SurveyType.GUIDES
        elif get_text(bag, "corporate_contact", self.registry).strip():
            survey_type = SurveyType.CORPORATE
        else:
            survey_type = SurveyType.GUESTS

        bag[self.registry.resolve("survey_type")] = ColumnValue(
            text=survey_type.value,
            value=json.dumps({"label": survey_type.value}),
            type="color"
        )
        logger.info(f"Set survey type of item {item.item_id} to {survey_type.value}")
