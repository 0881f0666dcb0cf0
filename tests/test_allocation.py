import pytest

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
from conftest import make_item


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("7", 7),
        (7, 7),
        (7.9, 7),
        ("12 units", 12),
        ("", 0),
        ("-5", 0),
        (-3, 0),
        ("abc", 0),
        (None, 0),
        (True, 0),
        (float("nan"), 0),
        ([3], 0),
        ("9" * 5000, 0),
    ],
)
def test_coerce_quantity_is_total(raw, expected):
    assert coerce_quantity(raw) == expected


def test_set_year_quantity_keeps_total_in_sync():
    item = make_item()
    set_year_quantity(item, 2024, "30")
    set_year_quantity(item, "2025", 12)
    set_year_quantity(item, 2024, "10")

    assert item.quantity_by_year == {"2024": 10, "2025": 12}
    assert item.quantity == 22
    assert total_across_years(item.quantity_by_year) == item.quantity


@pytest.mark.parametrize("raw", ["-5", ""])
def test_set_year_quantity_never_stores_negative(raw):
    item = make_item(quantity_by_year={"2024": 4})
    set_year_quantity(item, 2024, raw)
    assert item.quantity_by_year["2024"] == 0
    assert item.quantity == 0


def test_reset_for_cycle_preserves_overlap_and_drops_old_years():
    item = make_item(quantity_by_year={"2024": 5, "2025": 6, "2026": 7})

    reset_for_cycle(item, [2025, 2026, 2027])

    assert item.quantity_by_year == {"2025": 6, "2026": 7, "2027": 0}
    assert item.quantity == 13


def test_reset_for_cycle_with_no_years_leaves_item_alone():
    item = make_item(quantity_by_year={}, quantity=9)
    reset_for_cycle(item, [])
    assert item.quantity_by_year == {}
    assert item.quantity == 9


def test_numeric_and_string_keys_are_equivalent():
    numeric = normalize_quantity_by_year({2024: 5})
    textual = normalize_quantity_by_year({"2024": 5})

    assert numeric == textual == {"2024": 5}
    item = make_item(quantity_by_year=numeric)
    assert quantity_for_year(item, 2024) == quantity_for_year(item, "2024") == 5
    assert quantity_for_year(item, 2030) == 0


def test_normalize_tolerates_garbage():
    assert normalize_quantity_by_year(None) == {}
    assert normalize_quantity_by_year("2024:5") == {}
    assert normalize_quantity_by_year({"2024": "x", "2025": -1}) == {"2024": 0, "2025": 0}


def test_total_across_years_treats_missing_as_zero():
    assert total_across_years({"2024": 3, "2025": None}) == 3
    assert total_across_years(None) == 0


def test_resolve_quantity_falls_back_without_map():
    assert resolve_quantity({"2024": 2, "2025": 3}, fallback=100) == 5
    assert resolve_quantity({}, fallback="8") == 8
    assert resolve_quantity(None, fallback=None) == 0


def test_year_allocation_composes_item():
    item = make_item()
    allocation = YearAllocation(item, "2024-2026")

    assert item.quantity_by_year == {"2024": 0, "2025": 0, "2026": 0}
    assert allocation.set(2024, "30") == 30
    assert allocation.set("2025", "30") == 60
    assert allocation.as_row() == [30, 30, 0, 60]

    allocation.change_cycle("2025-2027")
    assert item.quantity_by_year == {"2025": 30, "2026": 0, "2027": 0}
    assert allocation.total == 30


def test_year_allocation_free_form_for_malformed_cycle():
    item = make_item()
    allocation = YearAllocation(item, "next year")

    assert not allocation.has_years
    assert allocation.set_total("4") == 4
    assert allocation.as_row() == [4]


def test_year_allocation_rejects_free_form_with_years():
    allocation = YearAllocation(make_item(), "2024-2025")
    with pytest.raises(ValueError):
        allocation.set_total(3)
