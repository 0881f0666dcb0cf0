"""Item insight returned by the AI lookup endpoint."""

from dataclasses import dataclass, field


@dataclass
class ItemInsight:
    item_name: str
    quick_summary: str = ""
    price_range: str = "Information unavailable"
    specs: list = field(default_factory=list)
    justification: str = ""
    brand_suggestion: str = ""
    vendors: list = field(default_factory=list)
    caution: str = ""
