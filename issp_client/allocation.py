"""
Per-year quantity allocation for request items.

Each item carries a quantity for every year of its request's cycle. The
helpers here keep ``RequestItem.quantity_by_year`` and
``RequestItem.quantity`` consistent: keys are year strings, values are
non-negative integers, and the total is always their sum.
"""

import re
from typing import Dict, Iterable, List, Optional, Union

from issp_client.cycles import parse_cycle
from issp_client.models import RequestItem


Year = Union[int, str]

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def coerce_quantity(raw) -> int:
    """
    Turn any user or upstream input into a non-negative integer.

    Empty strings, None, booleans and anything non-numeric become 0.
    Strings are read up to the first non-digit ("12 units" -> 12) and
    floats are truncated. Negative values are clamped to 0.
    """
    if raw is None or isinstance(raw, bool):
        return 0
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, float):
        if raw != raw or raw in (float("inf"), float("-inf")):
            return 0
        value = int(raw)
    elif isinstance(raw, str):
        match = _LEADING_INT.match(raw)
        if not match:
            return 0
        try:
            value = int(match.group(1))
        except ValueError:
            # Digit runs past the interpreter's int conversion limit
            return 0
    else:
        return 0
    return max(0, value)


def year_key(year: Year) -> str:
    """Canonical string key for a year."""
    return str(year).strip()


def normalize_quantity_by_year(raw) -> Dict[str, int]:
    """
    Normalize a quantity-by-year mapping from upstream data.

    Non-mapping input is treated as empty. Keys become year strings and
    values are coerced with ``coerce_quantity``.
    """
    if not isinstance(raw, dict):
        return {}
    return {year_key(k): coerce_quantity(v) for k, v in raw.items()}


def total_across_years(mapping: Optional[dict]) -> int:
    """Sum all present values, treating missing or None entries as 0."""
    if not mapping:
        return 0
    return sum(value or 0 for value in mapping.values())


def resolve_quantity(quantity_by_year: Optional[dict], fallback=0) -> int:
    """
    Total quantity for an item.

    The per-year map wins when it has entries; otherwise the directly
    supplied quantity is used.
    """
    if quantity_by_year:
        return total_across_years(quantity_by_year)
    return coerce_quantity(fallback)


def quantity_for_year(item: RequestItem, year: Year) -> int:
    """Look up an item's quantity for one year, by int or str year."""
    return item.quantity_by_year.get(year_key(year), 0) or 0


def set_year_quantity(item: RequestItem, year: Year, raw_value) -> RequestItem:
    """
    Store a quantity for one year and recompute the item total.

    Args:
        item: Item to update in place
        year: Year as int or str
        raw_value: User input; coerced to a non-negative integer

    Returns:
        The same item, for chaining
    """
    item.quantity_by_year[year_key(year)] = coerce_quantity(raw_value)
    item.quantity = total_across_years(item.quantity_by_year)
    return item


def reset_for_cycle(item: RequestItem, years: Iterable[Year]) -> RequestItem:
    """
    Rebuild an item's per-year map for a new cycle.

    Years kept from the old cycle keep their quantity, new years start
    at 0 and years outside the new cycle are dropped. An empty year list
    (malformed cycle) leaves the item untouched so its free-form quantity
    stays in use.
    """
    keys = [year_key(y) for y in years]
    if not keys:
        return item
    previous = item.quantity_by_year
    item.quantity_by_year = {key: previous.get(key, 0) or 0 for key in keys}
    item.quantity = total_across_years(item.quantity_by_year)
    return item


class YearAllocation:
    """
    Editing helper binding one item to one cycle.

    Used while composing an item: the running total shown next to the
    per-year inputs is always ``total``.
    """

    def __init__(self, item: RequestItem, cycle: str):
        self.item = item
        self.cycle = cycle
        self.years = parse_cycle(cycle)
        reset_for_cycle(self.item, self.years)

    @property
    def has_years(self) -> bool:
        return bool(self.years)

    @property
    def total(self) -> int:
        return self.item.quantity

    def set(self, year: Year, raw_value) -> int:
        """Set one year's quantity and return the new total."""
        set_year_quantity(self.item, year, raw_value)
        return self.total

    def set_total(self, raw_value) -> int:
        """Set the free-form quantity used when the cycle has no years."""
        if self.has_years:
            raise ValueError(f"Cycle {self.cycle!r} uses per-year quantities")
        self.item.quantity = coerce_quantity(raw_value)
        return self.total

    def change_cycle(self, cycle: str) -> None:
        self.cycle = cycle
        self.years = parse_cycle(cycle)
        reset_for_cycle(self.item, self.years)

    def as_row(self) -> List[int]:
        """Quantities in cycle order followed by the total."""
        return [quantity_for_year(self.item, y) for y in self.years] + [self.total]
