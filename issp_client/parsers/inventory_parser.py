"""Parser for /api/requests/inventory/items rows."""

from typing import Iterable, List

from issp_client.allocation import coerce_quantity
from issp_client.errors import RecordError
from issp_client.models import InventoryItem, PRICE_RANGES
from issp_client.parsers.base import BaseParser
from issp_client.utils.logging import get_logger

logger = get_logger()


class InventoryParser(BaseParser):
    """Parser for inventory rows."""

    def parse(self, payload: dict) -> InventoryItem:
        if not isinstance(payload, dict):
            raise RecordError("inventory item", payload)
        return InventoryItem(
            id=self.get_str(payload, "id", "_id"),
            name=self.get_str(payload, "name", "item"),
            purpose=self.get_str(payload, "purpose") or "N/A",
            quantity=coerce_quantity(payload.get("quantity")),
            price=self.get_float(payload, "price"),
            range=self.get_choice(payload, "range", PRICE_RANGES, "mid"),
            specification=self.get_str(payload, "specification"),
            status=self.get_str(payload, "status") or "Pending",
            reason=self.get_str(payload, "reason") or "Awaiting review",
            request_title=self.get_str(payload, "requestTitle"),
            request_id=self.get_str(payload, "requestId"),
            request_status=self.get_str(payload, "requestStatus"),
            request_year=self.get_str(payload, "requestYear", "year") or "N/A",
            request_date=self.get_str(payload, "requestDate"),
        )

    def parse_many(self, payloads: Iterable) -> List[InventoryItem]:
        items = []
        for payload in payloads or []:
            try:
                items.append(self.parse(payload))
            except RecordError as e:
                logger.warning(f"Skipping inventory row: {e}")
        return items
