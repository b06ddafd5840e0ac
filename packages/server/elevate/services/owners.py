"""
Owner service: caller-facing owner operations for organizations, ARTs and teams.

Each operation resolves the acting employee from the credential, runs the
reconciliation in one transaction, and converts failures into an
``OwnershipResult`` instead of raising.
"""

from __future__ import annotations

from collections.abc import Iterable

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from elevate.core.auth import resolve_actor
from elevate.models.employee import Employee
from elevate.services.ownership import (
    ArtOwnerLinks,
    AuthorizationError,
    EntityNotFoundError,
    Identity,
    OrganizationOwnerLinks,
    OwnerLinks,
    OwnershipError,
    PersistenceError,
    TeamOwnerLinks,
    reconcile_owners,
)
from elevate_shared.schemas.ownership import OwnershipResult, OwnerSummary

log = structlog.get_logger()

INVALID_ACTOR_MESSAGE = "Invalid access token or actor not found."


def failure(error: OwnershipError) -> OwnershipResult:
    return OwnershipResult(success=False, message=str(error), error_code=error.code)


async def _set_owners(
    links_cls: type[OwnerLinks],
    entity_id: int,
    owner_employee_keys: Iterable[Identity],
    access_token: str,
    session: AsyncSession,
) -> OwnershipResult:
    label = links_cls.kind.label

    links = links_cls(session)
    actor_id = None
    try:
        actor_id = await resolve_actor(access_token, session)
        if actor_id is None:
            await session.rollback()
            return failure(AuthorizationError(INVALID_ACTOR_MESSAGE))
        if not await links.entity_exists(entity_id):
            await session.rollback()
            return failure(EntityNotFoundError(f"{label} not found."))
        outcome = await reconcile_owners(links, entity_id, owner_employee_keys, actor_id)
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        log.error(
            "ownership.failed",
            entity=links_cls.kind.value,
            entity_id=entity_id,
            actor_id=actor_id,
            error=str(exc),
        )
        return failure(PersistenceError(f"Database operation failed: {exc}"))

    message = f"{label} owners updated successfully."
    if not links.requires_membership:
        return OwnershipResult(success=True, message=message)

    if outcome.non_member_ids:
        skipped = ", ".join(str(key) for key in outcome.non_member_ids)
        message += (
            f" Skipped employees who are not part of this team: {skipped}."
            " Add them to the team first with a job title."
        )
    return OwnershipResult(
        success=True, message=message, non_member_ids=outcome.non_member_ids
    )


async def set_organization_owners(
    organization_key: int,
    owner_employee_keys: Iterable[Identity],
    access_token: str,
    session: AsyncSession,
) -> OwnershipResult:
    """Replace the owner set of an organization."""
    return await _set_owners(
        OrganizationOwnerLinks, organization_key, owner_employee_keys, access_token, session
    )


async def set_art_owners(
    art_key: int,
    owner_employee_keys: Iterable[Identity],
    access_token: str,
    session: AsyncSession,
) -> OwnershipResult:
    """Replace the owner set of an ART."""
    return await _set_owners(
        ArtOwnerLinks, art_key, owner_employee_keys, access_token, session
    )


async def set_team_owners(
    team_key: int,
    owner_employee_keys: Iterable[Identity],
    access_token: str,
    session: AsyncSession,
) -> OwnershipResult:
    """Replace the owner set of a team.

    Requested owners without a role on the team are skipped and listed in
    ``non_member_ids``; the rest of the set is still applied.
    """
    return await _set_owners(
        TeamOwnerLinks, team_key, owner_employee_keys, access_token, session
    )


# ---------------------------------------------------------------------------
# Listing
# ---------------------------------------------------------------------------

async def _list_owners(
    links_cls: type[OwnerLinks], entity_id: int, session: AsyncSession
) -> list[OwnerSummary]:
    links = links_cls(session)
    if not await links.entity_exists(entity_id):
        raise EntityNotFoundError(f"{links_cls.kind.label} not found.")

    owner_ids = await links.current_owner_ids(entity_id)
    if not owner_ids:
        return []
    result = await session.execute(
        select(Employee)
        .where(Employee.employee_key.in_(owner_ids))
        .order_by(Employee.last_name, Employee.first_name)
    )
    return [
        OwnerSummary(
            employee_key=employee.employee_key,
            name=employee.full_name,
            email=employee.email,
            avatar=employee.profile_photo,
        )
        for employee in result.scalars().all()
    ]


async def list_organization_owners(
    organization_key: int, session: AsyncSession
) -> list[OwnerSummary]:
    return await _list_owners(OrganizationOwnerLinks, organization_key, session)


async def list_art_owners(art_key: int, session: AsyncSession) -> list[OwnerSummary]:
    return await _list_owners(ArtOwnerLinks, art_key, session)


async def list_team_owners(team_key: int, session: AsyncSession) -> list[OwnerSummary]:
    return await _list_owners(TeamOwnerLinks, team_key, session)
