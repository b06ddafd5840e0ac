"""
Shared fixtures: a throwaway SQLite database per test plus a small org chart.

Org chart seeded by ``org_chart``:
- employees alice, bob, carol, dave
- organizations "Alpha" and "Beta"
- ART "Payments" in Alpha, ART "Ledger" in Beta
- team "Checkout" in Payments, team "Refunds" in Payments
"""

from __future__ import annotations

from dataclasses import dataclass

import pytest
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import sessionmaker
from sqlmodel import select

from elevate.core.auth import create_access_token
from elevate.core.database import build_engine, init_db
from elevate.models.art import Art
from elevate.models.employee import Employee
from elevate.models.organization import Organization
from elevate.models.owner_links import EmployeeArt, EmployeeOrg, EmployeeTeam
from elevate.models.team import Team


@pytest.fixture
async def engine(tmp_path):
    eng = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'elevate.db'}")
    await init_db(eng)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as s:
        yield s


@dataclass
class OrgChart:
    alice: int
    bob: int
    carol: int
    dave: int
    alpha: int
    beta: int
    payments: int
    ledger: int
    checkout: int
    refunds: int

    def token(self, name: str = "alice") -> str:
        return create_access_token(f"{name}@example.com")


@pytest.fixture
async def org_chart(session_factory) -> OrgChart:
    async with session_factory() as s:
        people = {}
        for name in ("alice", "bob", "carol", "dave"):
            employee = Employee(
                first_name=name.capitalize(),
                last_name="Tester",
                email=f"{name}@example.com",
                lan_id=name,
            )
            s.add(employee)
            people[name] = employee
        alpha = Organization(organization_name="Alpha")
        beta = Organization(organization_name="Beta")
        s.add_all([alpha, beta])
        await s.flush()

        payments = Art(art_name="Payments", organization_key=alpha.organization_key)
        ledger = Art(art_name="Ledger", organization_key=beta.organization_key)
        s.add_all([payments, ledger])
        await s.flush()

        checkout = Team(
            team_name="Checkout",
            art_key=payments.art_key,
            organization_key=alpha.organization_key,
        )
        refunds = Team(
            team_name="Refunds",
            art_key=payments.art_key,
            organization_key=alpha.organization_key,
        )
        s.add_all([checkout, refunds])
        await s.flush()

        chart = OrgChart(
            alice=people["alice"].employee_key,
            bob=people["bob"].employee_key,
            carol=people["carol"].employee_key,
            dave=people["dave"].employee_key,
            alpha=alpha.organization_key,
            beta=beta.organization_key,
            payments=payments.art_key,
            ledger=ledger.art_key,
            checkout=checkout.team_key,
            refunds=refunds.team_key,
        )
        await s.commit()
    return chart


# ---------------------------------------------------------------------------
# Row helpers
# ---------------------------------------------------------------------------

async def add_rows(session_factory, *rows) -> None:
    async with session_factory() as s:
        s.add_all(rows)
        await s.commit()


async def org_links(session_factory, organization_key: int) -> dict[int, EmployeeOrg]:
    async with session_factory() as s:
        result = await s.execute(
            select(EmployeeOrg).where(EmployeeOrg.organization_key == organization_key)
        )
        return {row.employee_key: row for row in result.scalars().all()}


async def art_links(session_factory, art_key: int) -> dict[int, EmployeeArt]:
    async with session_factory() as s:
        result = await s.execute(select(EmployeeArt).where(EmployeeArt.art_key == art_key))
        return {row.employee_key: row for row in result.scalars().all()}


async def team_roles(
    session_factory, team_key: int
) -> dict[tuple[int, str], EmployeeTeam]:
    async with session_factory() as s:
        result = await s.execute(select(EmployeeTeam).where(EmployeeTeam.team_key == team_key))
        return {(row.employee_key, row.job_title): row for row in result.scalars().all()}
