"""
Team membership service: roles (job titles) employees hold on a team.

A role row is keyed by (employee, team, job_title). Holding at least one role
is what makes an employee eligible for team ownership.
"""

from __future__ import annotations

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from elevate.core.auth import resolve_actor
from elevate.models.base import utcnow
from elevate.models.employee import Employee
from elevate.models.owner_links import EmployeeTeam
from elevate.models.team import Team
from elevate.services.owners import INVALID_ACTOR_MESSAGE, failure
from elevate.services.ownership import (
    AuthorizationError,
    EntityNotFoundError,
    PersistenceError,
)
from elevate_shared.schemas.ownership import OwnershipResult
from elevate_shared.schemas.teams import TeamMemberAssignRequest, TeamMemberResponse

log = structlog.get_logger()


async def _team_exists(team_key: int, session: AsyncSession) -> bool:
    result = await session.execute(select(Team.team_key).where(Team.team_key == team_key))
    return result.scalar_one_or_none() is not None


async def _get_role(
    team_key: int, employee_key: int, job_title: str, session: AsyncSession
) -> EmployeeTeam | None:
    result = await session.execute(
        select(EmployeeTeam).where(
            EmployeeTeam.team_key == team_key,
            EmployeeTeam.employee_key == employee_key,
            EmployeeTeam.job_title == job_title,
        )
    )
    return result.scalar_one_or_none()


async def assign_employee_to_team(
    team_key: int,
    req: TeamMemberAssignRequest,
    access_token: str,
    session: AsyncSession,
) -> OwnershipResult:
    """Give an employee a role on a team, or update the owner flag of that role."""
    try:
        actor_id = await resolve_actor(access_token, session)
        if actor_id is None:
            await session.rollback()
            return failure(AuthorizationError(INVALID_ACTOR_MESSAGE))
        if not await _team_exists(team_key, session):
            await session.rollback()
            return failure(EntityNotFoundError("Team not found."))

        employee = await session.get(Employee, req.employee_key)
        if employee is None:
            await session.rollback()
            return failure(EntityNotFoundError("Failed to assign: Employee not found."))

        role = await _get_role(team_key, req.employee_key, req.job_title, session)
        now = utcnow()
        if role is None:
            role = EmployeeTeam(
                employee_key=req.employee_key,
                team_key=team_key,
                job_title=req.job_title,
                team_owner=req.is_team_owner,
                created_by_id=actor_id,
                updated_by_id=actor_id,
                created_at=now,
                updated_at=now,
            )
            session.add(role)
        elif role.team_owner != req.is_team_owner:
            role.team_owner = req.is_team_owner
            role.updated_by_id = actor_id
            role.updated_at = now
            session.add(role)
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        log.error(
            "team_member.assign_failed",
            team_key=team_key,
            employee_key=req.employee_key,
            error=str(exc),
        )
        return failure(PersistenceError(f"Database operation failed: {exc}"))

    log.info(
        "team_member.assigned",
        team_key=team_key,
        employee_key=req.employee_key,
        job_title=req.job_title,
        team_owner=req.is_team_owner,
        actor_id=actor_id,
    )
    return OwnershipResult(success=True, message="Employee successfully assigned to team.")


async def remove_employee_from_team(
    team_key: int,
    employee_key: int,
    job_title: str,
    access_token: str,
    session: AsyncSession,
) -> OwnershipResult:
    """Remove one role (job title) an employee holds on a team."""
    try:
        actor_id = await resolve_actor(access_token, session)
        if actor_id is None:
            await session.rollback()
            return failure(AuthorizationError(INVALID_ACTOR_MESSAGE))
        role = await _get_role(team_key, employee_key, job_title, session)
        if role is None:
            await session.rollback()
            return failure(
                EntityNotFoundError(
                    "Employee not found in team with that job title, or already removed."
                )
            )
        await session.delete(role)
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        log.error(
            "team_member.remove_failed",
            team_key=team_key,
            employee_key=employee_key,
            error=str(exc),
        )
        return failure(PersistenceError(f"Database operation failed: {exc}"))

    log.info(
        "team_member.removed",
        team_key=team_key,
        employee_key=employee_key,
        job_title=job_title,
        actor_id=actor_id,
    )
    return OwnershipResult(success=True, message="Employee successfully removed from team role.")


async def list_team_members(
    team_key: int, session: AsyncSession
) -> list[TeamMemberResponse]:
    """List every role row on a team with the employee's name."""
    if not await _team_exists(team_key, session):
        raise EntityNotFoundError("Team not found.")

    result = await session.execute(
        select(EmployeeTeam, Employee)
        .join(Employee, Employee.employee_key == EmployeeTeam.employee_key)
        .where(EmployeeTeam.team_key == team_key)
        .order_by(Employee.last_name, Employee.first_name, EmployeeTeam.job_title)
    )
    return [
        TeamMemberResponse(
            employee_key=role.employee_key,
            name=employee.full_name,
            email=employee.email,
            job_title=role.job_title,
            team_owner=role.team_owner,
            updated_at=role.updated_at,
        )
        for role, employee in result.all()
    ]
