"""
Ownership reconciliation: replace an entity's owner set with a desired set.

The desired set is diffed against the identities currently flagged as owners
and only the difference is written: demoted owners get their flag flipped to
false, desired owners with an existing link row get it flipped to true, and
desired owners with no link row are inserted (organizations, ARTs) or reported
as non-members (teams). Rows are never deleted here.

Each entity kind plugs in through an ``OwnerLinks`` adapter that knows its link
table, owner column and parent table. Every query and update is scoped by the
entity key, so one entity's reconciliation never touches another's rows.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import ClassVar

import structlog
from sqlalchemy import Column, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from elevate.models.art import Art
from elevate.models.base import utcnow
from elevate.models.organization import Organization
from elevate.models.owner_links import EmployeeArt, EmployeeOrg, EmployeeTeam
from elevate.models.team import Team
from elevate_shared.schemas.common import EntityKind, ErrorCode

log = structlog.get_logger()

# An employee key.
Identity = int


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class OwnershipError(Exception):
    """Base class for failures surfaced by ownership operations."""

    code: ClassVar[ErrorCode] = ErrorCode.OPERATION_FAILED


class AuthorizationError(OwnershipError):
    """The credential does not resolve to a known employee."""

    code = ErrorCode.UNAUTHORIZED


class EntityNotFoundError(OwnershipError):
    """The organization, ART or team being reconciled does not exist."""

    code = ErrorCode.NOT_FOUND


class PersistenceError(OwnershipError):
    """A read or write failed inside the reconciliation transaction."""


class NonMemberError(OwnershipError):
    """A team owner link was requested for an employee with no role on the team."""

    code = ErrorCode.NOT_FOUND

    def __init__(self, identity: int):
        super().__init__(f"Employee {identity} is not part of this team.")
        self.identity = identity


# ---------------------------------------------------------------------------
# Pure diff
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class OwnerDiff:
    """Identities to flag as owners and identities to strip of ownership."""

    to_promote: frozenset[Identity]
    to_demote: frozenset[Identity]

    @property
    def is_empty(self) -> bool:
        return not self.to_promote and not self.to_demote


def reconcile_owner_set(
    current: Iterable[Identity], desired: Iterable[Identity]
) -> OwnerDiff:
    """Diff the current owner set against the desired one.

    Order and duplicates in either input do not affect the result.
    """
    current_ids = frozenset(current)
    desired_ids = frozenset(desired)
    return OwnerDiff(
        to_promote=desired_ids - current_ids,
        to_demote=current_ids - desired_ids,
    )


@dataclass
class ReconcileOutcome:
    """Row-level effect of one reconciliation."""

    promoted: int = 0
    demoted: int = 0
    inserted: int = 0
    non_member_ids: list[Identity] = field(default_factory=list)

    @property
    def mutations(self) -> int:
        return self.promoted + self.demoted + self.inserted


# ---------------------------------------------------------------------------
# Link-table adapters
# ---------------------------------------------------------------------------

class OwnerLinks(ABC):
    """Read/write access to one entity kind's owner link table.

    Subclasses name the link model, its entity and owner columns, and the
    parent key column used for the existence check. All three are table
    columns (``Model.__table__.c``), never ORM attributes.
    """

    kind: ClassVar[EntityKind]
    link_model: ClassVar[type[SQLModel]]
    entity_column: ClassVar[Column]
    owner_column: ClassVar[Column]
    parent_key: ClassVar[Column]
    # Owners must already hold a link row; missing identities are reported, not inserted.
    requires_membership: ClassVar[bool] = False

    def __init__(self, session: AsyncSession):
        self.session = session

    async def entity_exists(self, entity_id: int) -> bool:
        result = await self.session.execute(
            select(self.parent_key).where(self.parent_key == entity_id)
        )
        return result.scalar_one_or_none() is not None

    async def current_owner_ids(self, entity_id: int) -> set[Identity]:
        result = await self.session.execute(
            select(self.link_model.employee_key)
            .where(self.entity_column == entity_id, self.owner_column.is_(True))
            .distinct()
        )
        return set(result.scalars().all())

    async def linked_ids(
        self, entity_id: int, identities: Iterable[Identity]
    ) -> set[Identity]:
        """Identities among ``identities`` that have any link row on the entity."""
        identities = list(identities)
        if not identities:
            return set()
        result = await self.session.execute(
            select(self.link_model.employee_key)
            .where(
                self.entity_column == entity_id,
                self.link_model.employee_key.in_(identities),
            )
            .distinct()
        )
        return set(result.scalars().all())

    async def set_owner_flag(
        self,
        entity_id: int,
        identities: Iterable[Identity],
        is_owner: bool,
        actor_id: Identity,
    ) -> int:
        """Flip the owner flag on every row whose flag differs. Returns rows changed."""
        identities = list(identities)
        if not identities:
            return 0
        result = await self.session.execute(
            update(self.link_model)
            .where(
                self.entity_column == entity_id,
                self.link_model.employee_key.in_(identities),
                self.owner_column.is_not(is_owner),
            )
            .values(
                {
                    self.owner_column: is_owner,
                    self.link_model.updated_by_id: actor_id,
                    self.link_model.updated_at: utcnow(),
                }
            )
        )
        return result.rowcount or 0

    @abstractmethod
    def new_owner_link(self, entity_id: int, identity: Identity, actor_id: Identity) -> SQLModel:
        """Build the link row that makes ``identity`` an owner of the entity."""

    async def insert_owner(
        self, entity_id: int, identity: Identity, actor_id: Identity
    ) -> None:
        self.session.add(self.new_owner_link(entity_id, identity, actor_id))
        await self.session.flush()


class OrganizationOwnerLinks(OwnerLinks):
    kind = EntityKind.ORGANIZATION
    link_model = EmployeeOrg
    entity_column = EmployeeOrg.__table__.c.organization_key
    owner_column = EmployeeOrg.__table__.c.org_owner
    parent_key = Organization.__table__.c.organization_key

    def new_owner_link(self, entity_id, identity, actor_id):
        now = utcnow()
        return EmployeeOrg(
            employee_key=identity,
            organization_key=entity_id,
            org_owner=True,
            created_by_id=actor_id,
            updated_by_id=actor_id,
            created_at=now,
            updated_at=now,
        )


class ArtOwnerLinks(OwnerLinks):
    kind = EntityKind.ART
    link_model = EmployeeArt
    entity_column = EmployeeArt.__table__.c.art_key
    owner_column = EmployeeArt.__table__.c.art_owner
    parent_key = Art.__table__.c.art_key

    def new_owner_link(self, entity_id, identity, actor_id):
        now = utcnow()
        return EmployeeArt(
            employee_key=identity,
            art_key=entity_id,
            art_owner=True,
            created_by_id=actor_id,
            updated_by_id=actor_id,
            created_at=now,
            updated_at=now,
        )


class TeamOwnerLinks(OwnerLinks):
    """Team links are per role; flag updates cover every role row of an employee."""

    kind = EntityKind.TEAM
    link_model = EmployeeTeam
    entity_column = EmployeeTeam.__table__.c.team_key
    owner_column = EmployeeTeam.__table__.c.team_owner
    parent_key = Team.__table__.c.team_key
    requires_membership = True

    def new_owner_link(self, entity_id, identity, actor_id):
        raise NonMemberError(identity)


# ---------------------------------------------------------------------------
# Reconciliation
# ---------------------------------------------------------------------------

async def reconcile_owners(
    links: OwnerLinks,
    entity_id: int,
    desired_owner_ids: Iterable[Identity],
    actor_id: Identity,
) -> ReconcileOutcome:
    """Make ``desired_owner_ids`` the exact owner set of the entity.

    Runs inside the caller's transaction and does not commit. Rows whose flag
    already matches the target are left untouched, audit fields included.
    """
    desired = frozenset(desired_owner_ids)
    current = await links.current_owner_ids(entity_id)
    diff = reconcile_owner_set(current, desired)
    outcome = ReconcileOutcome()

    outcome.demoted = await links.set_owner_flag(entity_id, diff.to_demote, False, actor_id)

    # All desired identities, not only new ones: a team member may own through
    # one role row while another role row is still unflagged.
    outcome.promoted = await links.set_owner_flag(entity_id, desired, True, actor_id)

    unlinked = diff.to_promote - await links.linked_ids(entity_id, diff.to_promote)
    if links.requires_membership:
        outcome.non_member_ids = sorted(unlinked)
    else:
        for identity in sorted(unlinked):
            await links.insert_owner(entity_id, identity, actor_id)
            outcome.inserted += 1

    log.info(
        "ownership.reconciled",
        entity=links.kind.value,
        entity_id=entity_id,
        actor_id=actor_id,
        promoted=outcome.promoted,
        demoted=outcome.demoted,
        inserted=outcome.inserted,
        non_members=outcome.non_member_ids,
    )
    return outcome
