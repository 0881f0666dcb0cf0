"""Inventory fetcher for /api/requests/inventory/items."""

from typing import List

import aiohttp

from issp_client.config import endpoints
from issp_client.fetchers.base import BaseFetcher
from issp_client.models import InventoryItem
from issp_client.parsers.inventory_parser import InventoryParser
from issp_client.utils.logging import get_logger

logger = get_logger()


class InventoryFetcher(BaseFetcher):
    """Fetcher for the unit's inventory rows."""

    parser = InventoryParser()

    async def list_items(self, session: aiohttp.ClientSession) -> List[InventoryItem]:
        data = await self.request_json(session, "GET", endpoints.INVENTORY_ITEMS)
        if not isinstance(data, list):
            logger.warning(f"Unexpected inventory payload: {type(data).__name__}")
            return []
        items = self.parser.parse_many(data)
        logger.info(f"Fetched {len(items)} inventory items")
        return items
