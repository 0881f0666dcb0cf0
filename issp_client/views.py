"""
History and inventory views.

Filters and summaries the history and inventory screens build on top of
the raw request and inventory collections.
"""

from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from issp_client.models import HISTORY_STATUSES, InventoryItem, Request


ALL_CYCLES = "all"


def filter_history(requests: Iterable[Request]) -> List[Request]:
    """Keep only requests that left the draft stage (submitted, approved, rejected)."""
    return [r for r in requests if r.status in HISTORY_STATUSES]


def filter_by_cycle(requests: Iterable[Request], label: str = ALL_CYCLES) -> List[Request]:
    """
    Keep requests of one cycle.

    ``"all"`` keeps everything; otherwise the label must match exactly and
    requests without a label are dropped.
    """
    if label == ALL_CYCLES:
        return list(requests)
    return [r for r in requests if r.year and r.year == label]


def cycle_labels(requests: Iterable[Request]) -> List[str]:
    """Unique non-empty cycle labels, newest first."""
    return sorted({r.year for r in requests if r.year}, reverse=True)


def status_summary(requests: Iterable[Request]) -> Dict[str, int]:
    """Count requests per history status."""
    counts = {status: 0 for status in HISTORY_STATUSES}
    for request in requests:
        if request.status in counts:
            counts[request.status] += 1
    return counts


@dataclass
class InventoryGroup:
    """Inventory rows belonging to one request."""

    request_title: str
    request_id: str = ""
    request_year: str = "N/A"
    items: list = field(default_factory=list)


def group_inventory_by_request(items: Iterable[InventoryItem]) -> "OrderedDict[str, InventoryGroup]":
    """
    Group inventory rows by request title.

    Rows without a title fall back to the request id, then to
    "Unknown Request". First appearance decides group order.
    """
    groups: "OrderedDict[str, InventoryGroup]" = OrderedDict()
    for item in items:
        key = item.request_title or item.request_id or "Unknown Request"
        if key not in groups:
            groups[key] = InventoryGroup(
                request_title=key,
                request_id=item.request_id,
                request_year=item.request_year or "N/A",
            )
        groups[key].items.append(item)
    return groups


def _item_matches(item: InventoryItem, term: str) -> bool:
    return (
        term in item.name.lower()
        or term in item.purpose.lower()
        or (bool(item.specification) and term in item.specification.lower())
    )


def search_inventory(groups: Dict[str, InventoryGroup], term: str) -> "OrderedDict[str, InventoryGroup]":
    """
    Case-insensitive search over grouped inventory.

    A group is kept whole when its title, its year or any of its items'
    name, purpose or specification contains the term.
    """
    needle = (term or "").lower()
    return OrderedDict(
        (key, group) for key, group in groups.items()
        if needle in group.request_title.lower()
        or needle in group.request_year.lower()
        or any(_item_matches(item, needle) for item in group.items)
    )
