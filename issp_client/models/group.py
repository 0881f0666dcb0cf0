"""
Year-group view-models.

These are derived structures, rebuilt from a request collection each
time it changes and never persisted.
"""

from dataclasses import dataclass, field

from issp_client.models.request import RequestItem


@dataclass
class FlattenedItem:
    """A request item tagged with the request it came from."""

    item: RequestItem
    request_id: str
    request_title: str = ""
    request_status: str = ""

    def to_dict(self) -> dict:
        data = self.item.to_dict()
        data.update({
            "requestId": self.request_id,
            "requestTitle": self.request_title,
            "requestStatus": self.request_status,
        })
        return data


@dataclass
class YearGroup:
    """All requests sharing one cycle label."""

    cycle_label: str
    requests: list = field(default_factory=list)
    total_item_count: int = 0
    overall_status: str = "submitted"
    flattened_items: list = field(default_factory=list)
    years: list = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to the view-model shape consumed by a UI layer."""
        return {
            "cycleLabel": self.cycle_label,
            "years": list(self.years),
            "requests": [r.to_dict() for r in self.requests],
            "totalItemCount": self.total_item_count,
            "overallStatus": self.overall_status,
            "flattenedItems": [f.to_dict() for f in self.flattened_items],
        }
