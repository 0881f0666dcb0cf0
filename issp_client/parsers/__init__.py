"""JSON parsers for ISSP API responses."""

from issp_client.parsers.base import BaseParser
from issp_client.parsers.request_parser import (
    ItemParser,
    RequestParser,
    parse_request,
    parse_requests,
)
from issp_client.parsers.insight_parser import InsightParser
from issp_client.parsers.inventory_parser import InventoryParser

__all__ = [
    "BaseParser",
    "ItemParser",
    "RequestParser",
    "parse_request",
    "parse_requests",
    "InsightParser",
    "InventoryParser",
]
