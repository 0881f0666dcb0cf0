import asyncio

import aiohttp
import pytest

from issp_client.auth import StaticCredentialProvider
from issp_client.errors import ApiError, AuthenticationError, NetworkError, ValidationError
from issp_client.fetchers import InsightFetcher, InventoryFetcher, RequestFetcher
from issp_client.models import Request
from conftest import FakeResponse, FakeSession, make_item


def _fetcher(cls, settings, token="tok-123"):
    return cls(settings, StaticCredentialProvider(token))


def test_list_requests_sends_token_and_parses(settings, request_payload):
    session = FakeSession(FakeResponse(200, [request_payload, {"_id": "r2", "year": "2027-2029"}]))
    fetcher = _fetcher(RequestFetcher, settings)

    requests = asyncio.run(fetcher.list_requests(session))

    assert [r.id for r in requests] == ["65f0c1", "r2"]
    call = session.calls[0]
    assert call["method"] == "GET"
    assert call["url"] == "http://issp.test/api/requests"
    assert call["headers"]["x-auth-token"] == "tok-123"


def test_list_history_filters_statuses(settings):
    session = FakeSession(FakeResponse(200, [
        {"_id": "a", "status": "draft"},
        {"_id": "b", "status": "submitted"},
        {"_id": "c", "status": "rejected"},
    ]))
    requests = asyncio.run(_fetcher(RequestFetcher, settings).list_history(session))
    assert [r.id for r in requests] == ["b", "c"]


def test_missing_token_fails_before_network(settings):
    session = FakeSession()
    fetcher = _fetcher(RequestFetcher, settings, token=None)

    with pytest.raises(AuthenticationError):
        asyncio.run(fetcher.list_requests(session))
    assert session.calls == []


def test_http_errors_carry_server_message(settings):
    session = FakeSession(
        FakeResponse(404, {"message": "Request not found"}),
        FakeResponse(401, {"message": "Token is not valid"}),
    )
    fetcher = _fetcher(RequestFetcher, settings)

    with pytest.raises(ApiError) as excinfo:
        asyncio.run(fetcher.get_request(session, "nope"))
    assert excinfo.value.status == 404
    assert excinfo.value.message == "Request not found"

    with pytest.raises(AuthenticationError):
        asyncio.run(fetcher.get_request(session, "nope"))


def test_timeouts_are_retried_then_succeed(settings):
    session = FakeSession(
        asyncio.TimeoutError(),
        aiohttp.ClientConnectionError("reset"),
        FakeResponse(200, {"_id": "r1", "year": "2024-2026"}),
    )
    request = asyncio.run(_fetcher(RequestFetcher, settings).get_request(session, "r1"))
    assert request.id == "r1"
    assert len(session.calls) == 3


def test_retries_exhausted_raise_network_error(settings):
    session = FakeSession(*[asyncio.TimeoutError() for _ in range(settings.max_retries + 1)])
    with pytest.raises(NetworkError):
        asyncio.run(_fetcher(RequestFetcher, settings).get_request(session, "r1"))


def test_update_item_status_validates_locally(settings):
    session = FakeSession()
    fetcher = _fetcher(RequestFetcher, settings)

    with pytest.raises(ValidationError):
        asyncio.run(fetcher.update_item_status(session, "r1", "i1", "shipped"))
    assert session.calls == []


def test_update_item_status_payload(settings):
    session = FakeSession(FakeResponse(200, {"message": "ok", "request": {"_id": "r1"}}))
    fetcher = _fetcher(RequestFetcher, settings)

    updated = asyncio.run(fetcher.update_item_status(session, "r1", "i 1", "in_transit", "On the truck"))

    assert updated.id == "r1"
    call = session.calls[0]
    assert call["method"] == "PUT"
    assert call["url"] == "http://issp.test/api/requests/r1/items/i%201/status"
    assert call["json"] == {"itemStatus": "in_transit", "remarks": "On the truck"}


def test_submit_and_resubmit(settings):
    session = FakeSession(FakeResponse(200, {"_id": "r1", "status": "submitted"}),
                          FakeResponse(200, {"message": "Resubmitted"}))
    fetcher = _fetcher(RequestFetcher, settings)

    submitted = asyncio.run(fetcher.submit_request(session, "r1"))
    resubmitted = asyncio.run(fetcher.resubmit_revision(
        session, "r1", [make_item("1", quantity_by_year={"2024": 2})], "Fixed specs"))

    assert submitted.status == "submitted"
    assert resubmitted is None
    assert session.calls[0]["json"] == {"status": "submitted"}
    assert session.calls[1]["url"].endswith("/api/requests/r1/resubmit-revision")
    assert session.calls[1]["json"]["revisionNotes"] == "Fixed specs"
    assert session.calls[1]["json"]["items"][0]["quantityByYear"] == {"2024": 2}


def test_create_request_validation_and_payload(settings):
    fetcher = _fetcher(RequestFetcher, settings)

    with pytest.raises(ValidationError):
        asyncio.run(fetcher.create_request(FakeSession(), Request(id="", year="2024-2026")))
    with pytest.raises(ValidationError):
        asyncio.run(fetcher.create_request(
            FakeSession(), Request(id="", year="2024-2026", items=[make_item("1")])))

    session = FakeSession(FakeResponse(201, {"_id": "new", "year": "2024-2026"}))
    request = Request(id="", request_title="Lab", year="2024-2026",
                      items=[make_item("1", quantity_by_year={"2024": 3})])
    created = asyncio.run(fetcher.create_request(session, request))

    assert created.id == "new"
    body = session.calls[0]["json"]
    assert body["year"] == "2024-2026"
    assert body["items"][0]["item"] == "Laptop"
    assert body["items"][0]["quantity"] == 3


def test_inventory_fetcher(settings):
    session = FakeSession(FakeResponse(200, [{"id": "1", "name": "Laptop", "requestYear": "2024-2026"}]))
    items = asyncio.run(_fetcher(InventoryFetcher, settings).list_items(session))
    assert items[0].name == "Laptop"
    assert session.calls[0]["url"] == "http://issp.test/api/requests/inventory/items"


def test_insight_fetcher_works_without_token(settings):
    session = FakeSession(FakeResponse(200, {"itemName": "Laptop", "priceRange": "₱40k"}))
    fetcher = _fetcher(InsightFetcher, settings, token=None)

    insight = asyncio.run(fetcher.fetch(session, "  Laptop "))

    assert insight.price_range == "₱40k"
    call = session.calls[0]
    assert call["json"] == {"itemName": "Laptop"}
    assert "x-auth-token" not in call["headers"]
