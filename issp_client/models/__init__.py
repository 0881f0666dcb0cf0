"""Data models for the ISSP client."""

from issp_client.models.request import (
    Request,
    RequestItem,
    REQUEST_STATUSES,
    REVISION_STATUSES,
    PRIORITIES,
    APPROVAL_STATUSES,
    PRICE_RANGES,
    ITEM_STATUS_ORDER,
    HISTORY_STATUSES,
)
from issp_client.models.group import FlattenedItem, YearGroup
from issp_client.models.insight import ItemInsight
from issp_client.models.inventory import InventoryItem

__all__ = [
    "Request",
    "RequestItem",
    "REQUEST_STATUSES",
    "REVISION_STATUSES",
    "PRIORITIES",
    "APPROVAL_STATUSES",
    "PRICE_RANGES",
    "ITEM_STATUS_ORDER",
    "HISTORY_STATUSES",
    "FlattenedItem",
    "YearGroup",
    "ItemInsight",
    "InventoryItem",
]
