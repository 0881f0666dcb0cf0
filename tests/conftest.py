"""Pytest configuration and shared factories for issp_client tests."""

import json

import pytest

from issp_client.config import ClientSettings
from issp_client.models import Request, RequestItem


def make_item(item_id="i1", name="Laptop", quantity_by_year=None, **kwargs) -> RequestItem:
    quantity_by_year = dict(quantity_by_year or {})
    kwargs.setdefault("quantity", sum(quantity_by_year.values()))
    return RequestItem(id=item_id, name=name, quantity_by_year=quantity_by_year, **kwargs)


def make_request(request_id="r1", year="2024-2026", status="submitted", items=None, **kwargs) -> Request:
    return Request(id=request_id, year=year, status=status, items=list(items or []), **kwargs)


class FakeResponse:
    """Just enough of aiohttp.ClientResponse for the fetchers."""

    def __init__(self, status=200, body=None):
        self.status = status
        self._body = body

    async def text(self):
        if self._body is None:
            return ""
        if isinstance(self._body, str):
            return self._body
        return json.dumps(self._body)

    async def json(self, content_type=None):
        return json.loads(await self.text())

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    """Replays queued responses (or raises queued exceptions) in order."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def request(self, method, url, headers=None, json=None, timeout=None):
        self.calls.append({"method": method, "url": url, "headers": headers or {}, "json": json})
        response = self.responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return response


@pytest.fixture
def settings(tmp_path):
    return ClientSettings(
        api_base="http://issp.test/",
        max_retries=2,
        retry_delay=0,
        session_dir=tmp_path / "session",
    )


@pytest.fixture
def request_payload():
    return {
        "_id": "65f0c1",
        "requestTitle": "Computer lab refresh",
        "priority": "high",
        "year": "2024-2026",
        "status": "approved",
        "revisionStatus": "none",
        "userId": {"_id": "u42", "unit": "CCS"},
        "unit": "CCS",
        "createdAt": "2024-02-01T08:00:00.000Z",
        "updatedAt": "2024-03-01T08:00:00.000Z",
        "items": [
            {
                "id": "1700000000001",
                "item": "Desktop computer",
                "quantity": 60,
                "quantityByYear": {"2024": 30, "2025": 30, "2026": 0},
                "price": 45000,
                "range": "mid",
                "specification": "i5, 16GB RAM",
                "purpose": "Lab replacement",
                "approvalStatus": "approved",
                "itemStatus": "purchased",
                "itemStatusRemarks": "PO 1182",
            },
            {
                "id": "1700000000002",
                "item": "Projector",
                "quantity": 2,
                "price": 30000,
                "approvalStatus": "disapproved",
                "approvalReason": "Over budget",
            },
        ],
    }
