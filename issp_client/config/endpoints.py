"""
REST endpoint paths for the ISSP backend.

All paths are relative to ``ClientSettings.api_base``.
"""

from urllib.parse import quote


REQUESTS = "/api/requests"
INVENTORY_ITEMS = "/api/requests/inventory/items"
ITEM_INSIGHTS = "/api/ai/item-insights"


def request_detail(request_id: str) -> str:
    return f"{REQUESTS}/{quote(str(request_id), safe='')}"


def resubmit_revision(request_id: str) -> str:
    return f"{request_detail(request_id)}/resubmit-revision"


def item_status(request_id: str, item_id: str) -> str:
    return f"{request_detail(request_id)}/items/{quote(str(item_id), safe='')}/status"


def build_url(api_base: str, path: str) -> str:
    """
    Join the API base and an endpoint path.

    Args:
        api_base: Backend root, e.g. 'http://localhost:5000'
        path: Endpoint path starting with '/'

    Returns:
        Complete URL string
    """
    return f"{api_base.rstrip('/')}{path}"
