"""Parser for /api/ai/item-insights responses."""

from issp_client.errors import RecordError
from issp_client.models import ItemInsight
from issp_client.parsers.base import BaseParser


class InsightParser(BaseParser):
    """Parser for item insight payloads, tolerant of the model's alternate keys."""

    def parse(self, payload: dict, item_name: str = "") -> ItemInsight:
        if not isinstance(payload, dict):
            raise RecordError("item insight", payload)
        return ItemInsight(
            item_name=self.get_str(payload, "itemName", default=item_name),
            quick_summary=self.get_str(payload, "quickSummary", "summary"),
            price_range=self.get_str(payload, "priceRange", "price") or "Information unavailable",
            specs=self.get_list(payload, "specs", "keySpecs"),
            justification=self.get_str(payload, "justification", "justifyText"),
            brand_suggestion=self.get_str(payload, "brandSuggestion", "brand"),
            vendors=self.get_list(payload, "vendors", "suppliers"),
            caution=self.get_str(payload, "caution", "disclaimer", "notes"),
        )
