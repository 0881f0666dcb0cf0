"""Item insight fetcher for /api/ai/item-insights."""

import aiohttp

from issp_client.config import endpoints
from issp_client.fetchers.base import BaseFetcher
from issp_client.models import ItemInsight
from issp_client.parsers.insight_parser import InsightParser


class InsightFetcher(BaseFetcher):
    """Fetcher for AI-generated price and spec hints about an item name."""

    parser = InsightParser()

    async def fetch(self, session: aiohttp.ClientSession, item_name: str) -> ItemInsight:
        """
        Ask the insight service about an item.

        The endpoint does not require a session token, but one is sent
        when available.
        """
        name = item_name.strip()
        data = await self.request_json(
            session, "POST", endpoints.ITEM_INSIGHTS, {"itemName": name}, require_auth=False
        )
        return self.parser.parse(data, item_name=name)
