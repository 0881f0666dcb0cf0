"""
Request record parser.

Turns /api/requests payloads into Request and RequestItem objects with
explicit defaulting, so nothing downstream has to trust the shape of the
JSON it was given.
"""

from typing import Iterable, List

from issp_client.allocation import normalize_quantity_by_year, resolve_quantity
from issp_client.errors import RecordError
from issp_client.models import (
    APPROVAL_STATUSES,
    ITEM_STATUS_ORDER,
    PRICE_RANGES,
    PRIORITIES,
    REQUEST_STATUSES,
    REVISION_STATUSES,
    Request,
    RequestItem,
)
from issp_client.parsers.base import BaseParser
from issp_client.utils.logging import get_logger

logger = get_logger()


class ItemParser(BaseParser):
    """Parser for request line items."""

    def parse(self, payload: dict, index: int = 0) -> RequestItem:
        """
        Parse one item payload.

        Args:
            payload: Item object from the backend
            index: Position within the request, used when the item has no id

        Returns:
            RequestItem with normalized per-year quantities
        """
        if not isinstance(payload, dict):
            raise RecordError("item", payload)

        raw_years = payload.get("quantityByYear")
        if raw_years is not None and not isinstance(raw_years, dict):
            logger.debug(f"Ignoring malformed quantityByYear: {raw_years!r}")
        quantity_by_year = normalize_quantity_by_year(raw_years)

        return RequestItem(
            id=self.get_str(payload, "id", "_id", default=str(index)),
            name=self.get_str(payload, "item", "name"),
            quantity=resolve_quantity(quantity_by_year, payload.get("quantity")),
            quantity_by_year=quantity_by_year,
            price=self.get_float(payload, "price"),
            range=self.get_choice(payload, "range", PRICE_RANGES, "mid"),
            specification=self.get_str(payload, "specification"),
            purpose=self.get_str(payload, "purpose"),
            approval_status=self.get_choice(payload, "approvalStatus", APPROVAL_STATUSES, "pending"),
            approval_reason=self.get_str(payload, "approvalReason"),
            item_status=self.get_choice(payload, "itemStatus", ITEM_STATUS_ORDER, None),
            item_status_remarks=self.get_str(payload, "itemStatusRemarks"),
            item_status_updated_at=self.get_str(payload, "itemStatusUpdatedAt"),
        )


class RequestParser(BaseParser):
    """Parser for request payloads (GET /api/requests and friends)."""

    def __init__(self):
        self.item_parser = ItemParser()

    def parse(self, payload: dict) -> Request:
        """
        Parse one request payload.

        Args:
            payload: Request object from the backend

        Returns:
            Request with parsed items

        Raises:
            RecordError: If the payload is not a JSON object
        """
        if not isinstance(payload, dict):
            raise RecordError("request", payload)

        raw_items = payload.get("items")
        if not isinstance(raw_items, list):
            raw_items = []

        items = []
        for index, raw_item in enumerate(raw_items):
            try:
                items.append(self.item_parser.parse(raw_item, index))
            except RecordError as e:
                logger.warning(f"Skipping item {index} of request {payload.get('_id')}: {e}")

        return Request(
            id=self.get_str(payload, "_id", "id"),
            request_title=self.get_str(payload, "requestTitle", "title"),
            priority=self.get_choice(payload, "priority", PRIORITIES, "medium"),
            year=self.get_str(payload, "year", strip=False),
            description=self.get_str(payload, "description"),
            status=self.get_choice(payload, "status", REQUEST_STATUSES, "pending"),
            revision_status=self.get_choice(payload, "revisionStatus", REVISION_STATUSES, "none"),
            revision_notes=self.get_str(payload, "revisionNotes"),
            items=items,
            user_id=self.get_str(payload, "userId"),
            unit=self.get_str(payload, "unit"),
            campus=self.get_str(payload, "campus"),
            created_at=self.get_str(payload, "createdAt"),
            updated_at=self.get_str(payload, "updatedAt"),
        )

    def parse_many(self, payloads: Iterable) -> List[Request]:
        """Parse a list of requests, skipping entries that are not objects."""
        requests = []
        for payload in payloads or []:
            try:
                requests.append(self.parse(payload))
            except RecordError as e:
                logger.warning(f"Skipping request record: {e}")
        return requests


# Module-level shortcuts

def parse_request(payload: dict) -> Request:
    """Parse a single request payload."""
    return RequestParser().parse(payload)


def parse_requests(payloads: Iterable) -> List[Request]:
    """Parse a list of request payloads."""
    return RequestParser().parse_many(payloads)
