"""
Request grouping by year cycle.

Requests are partitioned by their literal cycle label into YearGroup
view-models. Groups are rebuilt in full whenever the request collection
changes; nothing here mutates its input.
"""

from typing import Dict, Iterable, List, Optional

from issp_client.allocation import quantity_for_year
from issp_client.cycles import parse_cycle
from issp_client.models import FlattenedItem, Request, YearGroup


# Label used for requests that arrive without a cycle
UNLABELED_CYCLE = "N/A"

DEFAULT_GROUP_STATUS = "submitted"


def resolve_group_status(requests: Iterable[Request]) -> str:
    """
    Derive one overall status for a group of requests.

    Precedence, highest first:
      1. any resubmitted (status or revision marker) -> resubmitted
      2. all approved                                 -> approved
      3. all rejected                                 -> rejected
      4. any approved and none rejected               -> approved
      5. any rejected                                 -> rejected
      6. any submitted                                -> submitted
      7. otherwise                                    -> submitted

    An empty group resolves to the default.
    """
    requests = list(requests)
    if not requests:
        return DEFAULT_GROUP_STATUS

    statuses = [r.status for r in requests]

    if any(r.is_resubmitted for r in requests):
        return "resubmitted"
    if all(s == "approved" for s in statuses):
        return "approved"
    if all(s == "rejected" for s in statuses):
        return "rejected"

    has_approved = "approved" in statuses
    has_rejected = "rejected" in statuses
    if has_approved and not has_rejected:
        return "approved"
    if has_rejected:
        return "rejected"
    if "submitted" in statuses:
        return "submitted"
    return DEFAULT_GROUP_STATUS


def flatten_group_items(requests: Iterable[Request]) -> List[FlattenedItem]:
    """
    Concatenate every item of every request, tagged with its origin.

    Item order within a request and request order are preserved.
    """
    flattened = []
    for request in requests:
        for item in request.items:
            flattened.append(FlattenedItem(
                item=item,
                request_id=request.id,
                request_title=request.request_title,
                request_status=request.status,
            ))
    return flattened


def build_year_group(cycle_label: str, requests: Iterable[Request]) -> YearGroup:
    """Build one YearGroup from its member requests."""
    members = list(requests)
    return YearGroup(
        cycle_label=cycle_label,
        requests=members,
        total_item_count=sum(r.item_count for r in members),
        overall_status=resolve_group_status(members),
        flattened_items=flatten_group_items(members),
        years=parse_cycle(cycle_label),
    )


def group_by_cycle(requests: Iterable[Request]) -> Dict[str, YearGroup]:
    """
    Partition requests by their cycle label.

    Labels are matched verbatim: "2024-2026" and "2024 - 2026" form two
    groups. Group order follows the first appearance of each label and
    member order follows the input.

    Args:
        requests: Request collection (any iterable)

    Returns:
        Mapping of cycle label to YearGroup
    """
    members: Dict[str, List[Request]] = {}
    for request in requests:
        label = request.year or UNLABELED_CYCLE
        members.setdefault(label, []).append(request)

    return {label: build_year_group(label, group) for label, group in members.items()}


def _recency_key(request: Request) -> str:
    return request.updated_at or request.created_at or ""


def latest_request(requests: Iterable[Request]) -> Optional[Request]:
    """
    Pick the request that represents a group in list views.

    Resubmitted requests come first, then the most recently updated one.
    """
    requests = list(requests)
    if not requests:
        return None
    resubmitted = [r for r in requests if r.is_resubmitted]
    pool = resubmitted or requests
    # ISO-8601 timestamps sort lexicographically
    return max(pool, key=_recency_key)


def per_year_totals(group: YearGroup) -> Dict[str, int]:
    """
    Quantity per cycle year summed across the group's items.

    Returns:
        Mapping of year string to total, in cycle order
    """
    return {
        str(year): sum(quantity_for_year(f.item, year) for f in group.flattened_items)
        for year in group.years
    }
