"""
Procurement request data models.

Contains the Request and RequestItem dataclasses for ISSP equipment
requests as returned by the /api/requests endpoints.
"""

from dataclasses import dataclass, field
from typing import Optional


# Request lifecycle
REQUEST_STATUSES = (
    "draft", "pending", "submitted", "resubmitted", "revised",
    "in-review", "approved", "rejected",
)
REVISION_STATUSES = ("none", "pending_revision", "revised", "resubmitted")
PRIORITIES = ("low", "medium", "high")

# Item-level review and fulfilment
APPROVAL_STATUSES = ("pending", "approved", "disapproved")
PRICE_RANGES = ("low", "mid", "high")
ITEM_STATUS_ORDER = ("approved", "pr_created", "purchased", "in_transit", "received", "completed")

# Statuses that appear in history and inventory views
HISTORY_STATUSES = ("submitted", "approved", "rejected")


@dataclass
class RequestItem:
    """
    One equipment line within a request.

    ``quantity_by_year`` keys are always year strings ("2024"), and
    ``quantity`` is kept equal to the sum of its values whenever the
    map is non-empty.
    """

    id: str
    name: str = ""
    quantity: int = 0
    quantity_by_year: dict = field(default_factory=dict)
    price: float = 0.0
    range: str = "mid"
    specification: str = ""
    purpose: str = ""

    # Review
    approval_status: str = "pending"
    approval_reason: str = ""

    # Fulfilment, only meaningful once approved
    item_status: Optional[str] = None
    item_status_remarks: str = ""
    item_status_updated_at: str = ""

    @property
    def is_approved(self) -> bool:
        return self.approval_status == "approved"

    def to_dict(self) -> dict:
        """Convert to the camelCase shape the backend and UI layer use."""
        return {
            "id": self.id,
            "name": self.name,
            "quantity": self.quantity,
            "quantityByYear": dict(self.quantity_by_year),
            "price": self.price,
            "range": self.range,
            "specification": self.specification,
            "purpose": self.purpose,
            "approvalStatus": self.approval_status,
            "approvalReason": self.approval_reason,
            "itemStatus": self.item_status,
            "itemStatusRemarks": self.item_status_remarks,
            "itemStatusUpdatedAt": self.item_status_updated_at or None,
        }

    def to_payload(self) -> dict:
        """Convert to the body the backend accepts when creating a request."""
        return {
            "id": self.id,
            "item": self.name,
            "quantity": self.quantity,
            "quantityByYear": dict(self.quantity_by_year),
            "price": self.price,
            "range": self.range,
            "specification": self.specification,
            "purpose": self.purpose,
        }


@dataclass
class Request:
    """
    A procurement submission tied to a single year cycle.

    Created in draft/pending by a unit user, moved to submitted or
    resubmitted by the user, and approved/rejected by an external review.
    """

    id: str
    request_title: str = ""
    priority: str = "medium"
    year: str = ""  # Year cycle label, e.g. "2024-2026"
    description: str = ""
    status: str = "pending"

    # Revision cycle
    revision_status: str = "none"
    revision_notes: str = ""

    items: list = field(default_factory=list)

    # Ownership
    user_id: str = ""
    unit: str = ""
    campus: str = ""

    created_at: str = ""
    updated_at: str = ""

    @property
    def is_resubmitted(self) -> bool:
        return self.status == "resubmitted" or self.revision_status == "resubmitted"

    @property
    def item_count(self) -> int:
        return len(self.items)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "requestTitle": self.request_title,
            "priority": self.priority,
            "year": self.year,
            "description": self.description,
            "status": self.status,
            "revisionStatus": self.revision_status,
            "revisionNotes": self.revision_notes,
            "items": [item.to_dict() for item in self.items],
            "userId": self.user_id,
            "unit": self.unit,
            "campus": self.campus,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    def to_payload(self) -> dict:
        """Convert to the body POST /api/requests accepts."""
        return {
            "requestTitle": self.request_title,
            "priority": self.priority,
            "year": self.year,
            "description": self.description,
            "status": self.status,
            "items": [item.to_payload() for item in self.items],
        }
