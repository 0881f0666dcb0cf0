"""
Inventory data model.

One row of /api/requests/inventory/items: a requested item joined with
the request it belongs to.
"""

from dataclasses import dataclass


@dataclass
class InventoryItem:
    id: str
    name: str = ""
    purpose: str = "N/A"
    quantity: int = 0
    price: float = 0.0
    range: str = "mid"
    specification: str = ""
    status: str = "Pending"  # Approved / Disapproved / Pending
    reason: str = "Awaiting review"
    request_title: str = ""
    request_id: str = ""
    request_status: str = ""
    request_year: str = "N/A"
    request_date: str = ""
