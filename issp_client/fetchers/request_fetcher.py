"""
Request fetcher.

Reads and updates procurement requests through the /api/requests
endpoints and returns parsed Request objects.
"""

from typing import List, Optional

import aiohttp

from issp_client.config import endpoints
from issp_client.errors import ValidationError
from issp_client.fetchers.base import BaseFetcher
from issp_client.models import ITEM_STATUS_ORDER, Request, RequestItem
from issp_client.parsers.request_parser import RequestParser
from issp_client.utils.logging import get_logger
from issp_client.views import filter_history

logger = get_logger()


class RequestFetcher(BaseFetcher):
    """Fetcher for procurement requests."""

    parser = RequestParser()

    async def list_requests(self, session: aiohttp.ClientSession) -> List[Request]:
        """
        Fetch every request visible to the current user.

        Args:
            session: aiohttp session

        Returns:
            Parsed requests in backend order (newest first)
        """
        data = await self.request_json(session, "GET", endpoints.REQUESTS)
        if not isinstance(data, list):
            logger.warning(f"Unexpected request list payload: {type(data).__name__}")
            return []
        requests = self.parser.parse_many(data)
        logger.info(f"Fetched {len(requests)} requests")
        return requests

    async def list_history(self, session: aiohttp.ClientSession) -> List[Request]:
        """Fetch requests that have been submitted, approved or rejected."""
        return filter_history(await self.list_requests(session))

    async def get_request(self, session: aiohttp.ClientSession, request_id: str) -> Request:
        """Fetch a single request by id."""
        data = await self.request_json(session, "GET", endpoints.request_detail(request_id))
        return self.parser.parse(data)

    async def create_request(self, session: aiohttp.ClientSession, request: Request) -> Request:
        """
        Create a request.

        Raises:
            ValidationError: If the request has no items or a non-positive item quantity
        """
        if not request.items:
            raise ValidationError("A request needs at least one item")
        for item in request.items:
            if not item.name or item.quantity <= 0:
                raise ValidationError(f"Item {item.id!r} needs a name and a positive quantity")

        data = await self.request_json(session, "POST", endpoints.REQUESTS, request.to_payload())
        created = self.parser.parse(data)
        logger.info(f"Created request {created.id} for cycle {created.year}")
        return created

    async def submit_request(self, session: aiohttp.ClientSession, request_id: str) -> Optional[Request]:
        """Move a draft/pending request to submitted."""
        data = await self.request_json(
            session, "PUT", endpoints.request_detail(request_id), {"status": "submitted"}
        )
        logger.info(f"Submitted request {request_id}")
        return self._parse_updated(data)

    async def resubmit_revision(
        self,
        session: aiohttp.ClientSession,
        request_id: str,
        items: List[RequestItem],
        revision_notes: str = "",
    ) -> Optional[Request]:
        """Send a revised item list back for review."""
        data = await self.request_json(
            session,
            "PUT",
            endpoints.resubmit_revision(request_id),
            {"items": [i.to_payload() for i in items], "revisionNotes": revision_notes},
        )
        logger.info(f"Resubmitted revision for request {request_id}")
        return self._parse_updated(data)

    async def update_item_status(
        self,
        session: aiohttp.ClientSession,
        request_id: str,
        item_id: str,
        item_status: str,
        remarks: str = "",
    ) -> Optional[Request]:
        """
        Record fulfilment progress for an approved item.

        Raises:
            ValidationError: If ``item_status`` is not a known item status
        """
        if item_status not in ITEM_STATUS_ORDER:
            raise ValidationError(
                f"Invalid item status {item_status!r}; expected one of {', '.join(ITEM_STATUS_ORDER)}"
            )
        data = await self.request_json(
            session,
            "PUT",
            endpoints.item_status(request_id, item_id),
            {"itemStatus": item_status, "remarks": remarks},
        )
        logger.info(f"Item {item_id} of request {request_id} set to {item_status}")
        return self._parse_updated(data)

    def _parse_updated(self, data) -> Optional[Request]:
        # Update endpoints answer either with the request or {"message", "request"}
        if isinstance(data, dict) and isinstance(data.get("request"), dict):
            data = data["request"]
        if isinstance(data, dict) and ("_id" in data or "id" in data):
            return self.parser.parse(data)
        return None
