"""
Team owner and membership endpoints.

GET    /api/v1/teams/{team_key}/owners                        — List current owners
PUT    /api/v1/teams/{team_key}/owners                        — Replace the owner set
GET    /api/v1/teams/{team_key}/members                       — List role rows
POST   /api/v1/teams/{team_key}/members                       — Assign a role
DELETE /api/v1/teams/{team_key}/members/{employee_key}?job_title=… — Remove a role
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from elevate.api.responses import as_http_error, with_status
from elevate.core.auth import get_access_token
from elevate.core.database import get_session
from elevate.services import owners as owner_service
from elevate.services import teams as team_service
from elevate.services.ownership import EntityNotFoundError
from elevate_shared.schemas.ownership import (
    OwnerListResponse,
    OwnershipResult,
    SetOwnersRequest,
)
from elevate_shared.schemas.teams import TeamMemberAssignRequest, TeamMemberListResponse

router = APIRouter()


@router.get("/{team_key}/owners", response_model=OwnerListResponse)
async def list_owners(
    team_key: int,
    session: AsyncSession = Depends(get_session),
):
    """List employees who own the team through any of their roles."""
    try:
        items = await owner_service.list_team_owners(team_key, session)
    except EntityNotFoundError as exc:
        raise as_http_error(exc)
    return OwnerListResponse(data=items)


@router.put("/{team_key}/owners", response_model=OwnershipResult)
async def set_owners(
    team_key: int,
    body: SetOwnersRequest,
    response: Response,
    access_token: str = Depends(get_access_token),
    session: AsyncSession = Depends(get_session),
):
    """Replace the team's owners. Requested owners without a role are reported, not added."""
    result = await owner_service.set_team_owners(
        team_key, body.owner_employee_keys, access_token, session
    )
    return with_status(result, response)


@router.get("/{team_key}/members", response_model=TeamMemberListResponse)
async def list_members(
    team_key: int,
    session: AsyncSession = Depends(get_session),
):
    """List every role held on the team."""
    try:
        items = await team_service.list_team_members(team_key, session)
    except EntityNotFoundError as exc:
        raise as_http_error(exc)
    return TeamMemberListResponse(data=items)


@router.post("/{team_key}/members", response_model=OwnershipResult)
async def assign_member(
    team_key: int,
    body: TeamMemberAssignRequest,
    response: Response,
    access_token: str = Depends(get_access_token),
    session: AsyncSession = Depends(get_session),
):
    """Assign an employee to the team with a job title."""
    result = await team_service.assign_employee_to_team(team_key, body, access_token, session)
    return with_status(result, response)


@router.delete("/{team_key}/members/{employee_key}", response_model=OwnershipResult)
async def remove_member(
    team_key: int,
    employee_key: int,
    response: Response,
    job_title: str = Query(..., min_length=1),
    access_token: str = Depends(get_access_token),
    session: AsyncSession = Depends(get_session),
):
    """Remove one of the employee's roles from the team."""
    result = await team_service.remove_employee_from_team(
        team_key, employee_key, job_title, access_token, session
    )
    return with_status(result, response)
