"""
Organization owner endpoints.

GET /api/v1/organizations/{organization_key}/owners — List current owners
PUT /api/v1/organizations/{organization_key}/owners — Replace the owner set
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from elevate.api.responses import as_http_error, with_status
from elevate.core.auth import get_access_token
from elevate.core.database import get_session
from elevate.services import owners as owner_service
from elevate.services.ownership import EntityNotFoundError
from elevate_shared.schemas.ownership import (
    OwnerListResponse,
    OwnershipResult,
    SetOwnersRequest,
)

router = APIRouter()


@router.get("/{organization_key}/owners", response_model=OwnerListResponse)
async def list_owners(
    organization_key: int,
    session: AsyncSession = Depends(get_session),
):
    """List employees who currently own the organization."""
    try:
        items = await owner_service.list_organization_owners(organization_key, session)
    except EntityNotFoundError as exc:
        raise as_http_error(exc)
    return OwnerListResponse(data=items)


@router.put("/{organization_key}/owners", response_model=OwnershipResult)
async def set_owners(
    organization_key: int,
    body: SetOwnersRequest,
    response: Response,
    access_token: str = Depends(get_access_token),
    session: AsyncSession = Depends(get_session),
):
    """Replace the organization's owners with the given set (empty clears all)."""
    result = await owner_service.set_organization_owners(
        organization_key, body.owner_employee_keys, access_token, session
    )
    return with_status(result, response)
