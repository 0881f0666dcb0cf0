"""Async HTTP fetchers for the ISSP API."""

from issp_client.fetchers.base import BaseFetcher, create_session
from issp_client.fetchers.request_fetcher import RequestFetcher
from issp_client.fetchers.inventory_fetcher import InventoryFetcher
from issp_client.fetchers.insight_fetcher import InsightFetcher

__all__ = [
    # Base
    "BaseFetcher",
    "create_session",
    # Endpoints
    "RequestFetcher",
    "InventoryFetcher",
    "InsightFetcher",
]
