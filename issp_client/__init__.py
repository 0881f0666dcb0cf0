"""Client for the ISSP equipment/ICT procurement request system."""

from issp_client.allocation import (
    YearAllocation,
    coerce_quantity,
    normalize_quantity_by_year,
    quantity_for_year,
    reset_for_cycle,
    resolve_quantity,
    set_year_quantity,
    total_across_years,
)
from issp_client.cycles import cycle_label, is_valid_cycle, parse_cycle
from issp_client.grouping import (
    flatten_group_items,
    group_by_cycle,
    latest_request,
    per_year_totals,
    resolve_group_status,
)

__version__ = "0.1.0"

__all__ = [
    "YearAllocation",
    "coerce_quantity",
    "normalize_quantity_by_year",
    "quantity_for_year",
    "reset_for_cycle",
    "resolve_quantity",
    "set_year_quantity",
    "total_across_years",
    "cycle_label",
    "is_valid_cycle",
    "parse_cycle",
    "flatten_group_items",
    "group_by_cycle",
    "latest_request",
    "per_year_totals",
    "resolve_group_status",
]
