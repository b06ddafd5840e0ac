"""
Ownership schemas shared between server and clients.

Covers: owner-set replacement requests, the structured operation result,
and owner listings.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from .common import ErrorCode


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------

class SetOwnersRequest(BaseModel):
    """Replace the owner set of an entity. The list is the full target set."""

    owner_employee_keys: list[int] = Field(
        default_factory=list,
        description="Employee keys that should be owners after the call (empty clears all owners)",
    )


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------

class OwnershipResult(BaseModel):
    """Structured outcome of an ownership or membership operation."""

    success: bool
    message: str
    non_member_ids: Optional[list[int]] = Field(
        default=None,
        description="Requested team owners skipped because they hold no role on the team",
    )
    error_code: Optional[ErrorCode] = None


class OwnerSummary(BaseModel):
    employee_key: int
    name: str
    email: str
    avatar: Optional[str] = None

    model_config = {"from_attributes": True}


class OwnerListResponse(BaseModel):
    data: list[OwnerSummary]
