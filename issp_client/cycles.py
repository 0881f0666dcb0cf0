"""
Year-cycle labels.

A cycle label such as "2024-2026" names a multi-year planning window.
Both ends must be four-digit years. Malformed labels never raise; they
simply cover no years.
"""

import re
from functools import lru_cache
from typing import List, Tuple


CYCLE_SEPARATOR = "-"

_YEAR = re.compile(r"[0-9]{4}")


@lru_cache(maxsize=256)
def _cycle_years(label: str) -> Tuple[int, ...]:
    parts = label.split(CYCLE_SEPARATOR)
    if len(parts) != 2:
        return ()
    tokens = [part.strip() for part in parts]
    if not all(_YEAR.fullmatch(token) for token in tokens):
        return ()
    start, end = int(tokens[0]), int(tokens[1])
    # A descending label ("2026-2024") covers no years
    return tuple(range(start, end + 1))


def parse_cycle(label) -> List[int]:
    """
    Expand a cycle label into the years it covers.

    Args:
        label: Cycle label like "2024-2026"; None and non-strings are tolerated

    Returns:
        Ascending list of years, empty for malformed labels
    """
    if not label or not isinstance(label, str):
        return []
    return list(_cycle_years(label))


def is_valid_cycle(label) -> bool:
    """Check whether a label covers at least one year."""
    return bool(parse_cycle(label))


def cycle_label(start: int, end: int) -> str:
    """Build a cycle label from its first and last year."""
    return f"{start}{CYCLE_SEPARATOR}{end}"
