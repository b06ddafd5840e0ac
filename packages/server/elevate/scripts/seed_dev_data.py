"""
Seed a development database with employees, an organization, an ART and a team.

Usage:
    python -m elevate.scripts.seed_dev_data --employees 10

Uses EL_DATABASE_URL (or the default from settings). Prints an access token
for the first seeded employee so the owner endpoints can be tried directly.
"""

import argparse
import asyncio

import structlog
from sqlmodel import select

from elevate.core.auth import create_access_token
from elevate.core.config import get_settings
from elevate.core.database import get_session_context, init_db
from elevate.core.logging import configure_logging
from elevate.models.art import Art
from elevate.models.employee import Employee
from elevate.models.organization import Organization
from elevate.models.owner_links import EmployeeTeam
from elevate.models.team import Team

log = structlog.get_logger()

EMAIL_DOMAIN = "example.com"
LAN_ID_PREFIX = "seededlan"
JOB_TITLES = ["Engineer", "Tester", "Product Owner", "Scrum Master"]


async def seed(num_employees: int) -> str:
    await init_db()

    async with get_session_context() as session:
        employees: list[Employee] = []
        for i in range(1, num_employees + 1):
            lan_id = f"{LAN_ID_PREFIX}{i}"
            result = await session.execute(select(Employee).where(Employee.lan_id == lan_id))
            employee = result.scalar_one_or_none()
            if employee is None:
                employee = Employee(
                    first_name=f"SeededFn{i}",
                    last_name=f"SeededLn{i}",
                    email=f"{lan_id}@{EMAIL_DOMAIN}",
                    lan_id=lan_id,
                )
                session.add(employee)
            employees.append(employee)
        await session.flush()
        actor_id = employees[0].employee_key

        result = await session.execute(
            select(Organization).where(Organization.organization_name == "Seeded Org")
        )
        org = result.scalar_one_or_none()
        if org is None:
            org = Organization(
                organization_name="Seeded Org",
                created_by_id=actor_id,
                updated_by_id=actor_id,
            )
            session.add(org)
            await session.flush()

        result = await session.execute(
            select(Art).where(
                Art.art_name == "Seeded ART", Art.organization_key == org.organization_key
            )
        )
        art = result.scalar_one_or_none()
        if art is None:
            art = Art(
                art_name="Seeded ART",
                organization_key=org.organization_key,
                created_by_id=actor_id,
                updated_by_id=actor_id,
            )
            session.add(art)
            await session.flush()

        result = await session.execute(
            select(Team).where(Team.team_name == "Seeded Team", Team.art_key == art.art_key)
        )
        team = result.scalar_one_or_none()
        if team is None:
            team = Team(
                team_name="Seeded Team",
                art_key=art.art_key,
                organization_key=org.organization_key,
                created_by_id=actor_id,
                updated_by_id=actor_id,
            )
            session.add(team)
            await session.flush()

        # Half of the employees get a role on the team.
        for i, employee in enumerate(employees[: max(1, len(employees) // 2)]):
            job_title = JOB_TITLES[i % len(JOB_TITLES)]
            existing = await session.get(
                EmployeeTeam, (employee.employee_key, team.team_key, job_title)
            )
            if existing is None:
                session.add(
                    EmployeeTeam(
                        employee_key=employee.employee_key,
                        team_key=team.team_key,
                        job_title=job_title,
                        created_by_id=actor_id,
                        updated_by_id=actor_id,
                    )
                )

        log.info(
            "seed.done",
            employees=len(employees),
            organization_key=org.organization_key,
            art_key=art.art_key,
            team_key=team.team_key,
        )
        return create_access_token(employees[0].email)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed a development database.")
    parser.add_argument("--employees", type=int, default=10, help="Number of employees to seed")
    args = parser.parse_args()

    settings = get_settings()
    configure_logging(settings.log_level, "text")
    token = asyncio.run(seed(max(1, args.employees)))
    print(f"Access token for {LAN_ID_PREFIX}1@{EMAIL_DOMAIN}:\n{token}")
