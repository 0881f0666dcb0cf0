import logging

import pytest

from issp_client.errors import RecordError
from issp_client.parsers import InsightParser, InventoryParser, RequestParser, parse_requests


def test_parse_request_payload(request_payload):
    request = RequestParser().parse(request_payload)

    assert request.id == "65f0c1"
    assert request.request_title == "Computer lab refresh"
    assert request.priority == "high"
    assert request.status == "approved"
    assert request.user_id == "u42"
    assert len(request.items) == 2

    desktop, projector = request.items
    assert desktop.name == "Desktop computer"
    assert desktop.quantity_by_year == {"2024": 30, "2025": 30, "2026": 0}
    assert desktop.quantity == 60
    assert desktop.item_status == "purchased"
    assert desktop.is_approved

    assert projector.quantity_by_year == {}
    assert projector.quantity == 2
    assert projector.range == "mid"
    assert projector.approval_status == "disapproved"
    assert projector.approval_reason == "Over budget"
    assert projector.item_status is None


def test_quantity_follows_year_map_over_stale_total():
    request = RequestParser().parse({
        "_id": "x", "year": "2024-2025",
        "items": [{"id": "1", "item": "UPS", "quantity": 99, "quantityByYear": {2024: 1, 2025: "2"}}],
    })
    item = request.items[0]
    assert item.quantity_by_year == {"2024": 1, "2025": 2}
    assert item.quantity == 3


def test_garbled_year_map_falls_back_to_quantity():
    request = RequestParser().parse({
        "_id": "x",
        "items": [
            {"id": "1", "item": "UPS", "quantity": 4, "quantityByYear": "oops"},
            {"id": "2", "item": "Switch"},
        ],
    })
    assert [i.quantity for i in request.items] == [4, 0]
    assert request.items[0].quantity_by_year == {}


def test_aliases_and_defaults():
    request = RequestParser().parse({
        "id": "abc",
        "title": "Fallback title",
        "items": [{"name": "Printer"}],
    })
    assert request.id == "abc"
    assert request.request_title == "Fallback title"
    assert request.priority == "medium"
    assert request.status == "pending"
    assert request.revision_status == "none"
    assert request.year == ""
    assert request.items[0].name == "Printer"
    assert request.items[0].id == "0"


def test_unknown_enum_values_fall_back(caplog):
    caplog.set_level(logging.WARNING, logger="issp_client")
    request = RequestParser().parse({
        "_id": "x", "status": "archived", "priority": "urgent",
        "items": [{"id": "1", "item": "Tablet", "range": "premium", "itemStatus": "lost"}],
    })
    assert request.status == "pending"
    assert request.priority == "medium"
    assert request.items[0].range == "mid"
    assert request.items[0].item_status is None
    assert "archived" in caplog.text


def test_non_mapping_payloads():
    with pytest.raises(RecordError):
        RequestParser().parse(["not", "a", "dict"])

    requests = parse_requests([{"_id": "ok", "items": ["junk", {"id": "1", "item": "Pen"}]}, "junk", None])
    assert [r.id for r in requests] == ["ok"]
    assert [i.name for i in requests[0].items] == ["Pen"]
    assert parse_requests(None) == []


def test_insight_parser_alternate_keys():
    insight = InsightParser().parse(
        {"summary": "Entry-level laptop", "price": "₱35,000–₱50,000", "keySpecs": "8GB RAM",
         "suppliers": ["Vendor A", ""], "notes": "Check warranty"},
        item_name="Laptop",
    )
    assert insight.item_name == "Laptop"
    assert insight.quick_summary == "Entry-level laptop"
    assert insight.price_range.startswith("₱35,000")
    assert insight.specs == ["8GB RAM"]
    assert insight.vendors == ["Vendor A"]
    assert insight.caution == "Check warranty"


def test_insight_parser_defaults():
    insight = InsightParser().parse({}, item_name="Cable")
    assert insight.price_range == "Information unavailable"
    assert insight.specs == []


def test_inventory_parser():
    items = InventoryParser().parse_many([
        {"id": "1", "name": "Laptop", "quantity": "5", "status": "Approved",
         "requestTitle": "Faculty kit", "requestId": "r1", "requestYear": "2024-2026"},
        {"id": "2", "name": "Cable"},
        42,
    ])
    assert len(items) == 2
    assert items[0].quantity == 5
    assert items[0].request_year == "2024-2026"
    assert items[1].purpose == "N/A"
    assert items[1].status == "Pending"
    assert items[1].reason == "Awaiting review"
    assert items[1].request_year == "N/A"


def test_oversized_quantity_does_not_break_the_list():
    payloads = [
        {"_id": "a", "year": "2024-2026", "items": [{"item": "Laptop", "quantityByYear": {"2024": "9" * 5000}}]},
        {"_id": "b", "year": "2024-2026", "items": [{"item": "Mouse", "quantityByYear": {"2024": 3}}]},
    ]
    requests = parse_requests(payloads)

    assert [r.id for r in requests] == ["a", "b"]
    assert requests[0].items[0].quantity_by_year == {"2024": 0}
    assert requests[1].items[0].quantity == 3


def test_cycle_label_is_kept_verbatim():
    request = RequestParser().parse({"_id": "a", "year": " 2024-2026", "items": []})
    assert request.year == " 2024-2026"
