"""Tests for team role assignment, removal and listing."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from conftest import add_rows, team_roles
from elevate.models.owner_links import EmployeeTeam
from elevate.services import owners as owner_service
from elevate.services import teams as team_service
from elevate.services.ownership import EntityNotFoundError
from elevate_shared.schemas.common import ErrorCode
from elevate_shared.schemas.teams import TeamMemberAssignRequest


class TestAssign:
    @pytest.mark.asyncio
    async def test_assign_creates_role(self, session, session_factory, org_chart):
        req = TeamMemberAssignRequest(employee_key=org_chart.bob, job_title="Engineer")
        result = await team_service.assign_employee_to_team(
            org_chart.checkout, req, org_chart.token(), session
        )
        assert result.success
        assert result.message == "Employee successfully assigned to team."

        roles = await team_roles(session_factory, org_chart.checkout)
        role = roles[(org_chart.bob, "Engineer")]
        assert role.team_owner is False
        assert role.created_by_id == org_chart.alice

    @pytest.mark.asyncio
    async def test_assign_same_role_updates_owner_flag(self, session, session_factory, org_chart):
        token = org_chart.token()
        await team_service.assign_employee_to_team(
            org_chart.checkout,
            TeamMemberAssignRequest(employee_key=org_chart.bob, job_title="Engineer"),
            token,
            session,
        )
        await team_service.assign_employee_to_team(
            org_chart.checkout,
            TeamMemberAssignRequest(
                employee_key=org_chart.bob, job_title="Engineer", is_team_owner=True
            ),
            org_chart.token("carol"),
            session,
        )

        roles = await team_roles(session_factory, org_chart.checkout)
        assert len(roles) == 1
        assert roles[(org_chart.bob, "Engineer")].team_owner is True
        assert roles[(org_chart.bob, "Engineer")].updated_by_id == org_chart.carol

    @pytest.mark.asyncio
    async def test_second_job_title_is_second_role(self, session, session_factory, org_chart):
        token = org_chart.token()
        for title in ("Engineer", "Scrum Master"):
            result = await team_service.assign_employee_to_team(
                org_chart.checkout,
                TeamMemberAssignRequest(employee_key=org_chart.bob, job_title=title),
                token,
                session,
            )
            assert result.success

        roles = await team_roles(session_factory, org_chart.checkout)
        assert set(roles) == {(org_chart.bob, "Engineer"), (org_chart.bob, "Scrum Master")}

    @pytest.mark.asyncio
    async def test_unknown_employee(self, session, org_chart):
        result = await team_service.assign_employee_to_team(
            org_chart.checkout,
            TeamMemberAssignRequest(employee_key=9999, job_title="Engineer"),
            org_chart.token(),
            session,
        )
        assert not result.success
        assert result.error_code == ErrorCode.NOT_FOUND
        assert result.message == "Failed to assign: Employee not found."

    @pytest.mark.asyncio
    async def test_unknown_team(self, session, org_chart):
        result = await team_service.assign_employee_to_team(
            9999,
            TeamMemberAssignRequest(employee_key=org_chart.bob, job_title="Engineer"),
            org_chart.token(),
            session,
        )
        assert result.error_code == ErrorCode.NOT_FOUND
        assert result.message == "Team not found."

    @pytest.mark.asyncio
    async def test_invalid_token(self, session, session_factory, org_chart):
        result = await team_service.assign_employee_to_team(
            org_chart.checkout,
            TeamMemberAssignRequest(employee_key=org_chart.bob, job_title="Engineer"),
            "Bearer nope",
            session,
        )
        assert result.error_code == ErrorCode.UNAUTHORIZED
        assert await team_roles(session_factory, org_chart.checkout) == {}

    def test_job_title_is_stripped_and_required(self):
        req = TeamMemberAssignRequest(employee_key=1, job_title="  Engineer  ")
        assert req.job_title == "Engineer"
        with pytest.raises(ValidationError):
            TeamMemberAssignRequest(employee_key=1, job_title="   ")


class TestRemove:
    @pytest.mark.asyncio
    async def test_remove_one_role_keeps_others(self, session, session_factory, org_chart):
        await add_rows(
            session_factory,
            EmployeeTeam(employee_key=org_chart.bob, team_key=org_chart.checkout, job_title="Engineer"),
            EmployeeTeam(employee_key=org_chart.bob, team_key=org_chart.checkout, job_title="Lead"),
        )

        result = await team_service.remove_employee_from_team(
            org_chart.checkout, org_chart.bob, "Lead", org_chart.token(), session
        )
        assert result.success
        assert result.message == "Employee successfully removed from team role."

        roles = await team_roles(session_factory, org_chart.checkout)
        assert list(roles) == [(org_chart.bob, "Engineer")]

    @pytest.mark.asyncio
    async def test_remove_missing_role(self, session, org_chart):
        result = await team_service.remove_employee_from_team(
            org_chart.checkout, org_chart.bob, "Lead", org_chart.token(), session
        )
        assert not result.success
        assert result.error_code == ErrorCode.NOT_FOUND

    @pytest.mark.asyncio
    async def test_removed_member_becomes_non_member(self, session, session_factory, org_chart):
        await add_rows(
            session_factory,
            EmployeeTeam(employee_key=org_chart.bob, team_key=org_chart.checkout, job_title="Engineer"),
        )
        token = org_chart.token()
        await team_service.remove_employee_from_team(
            org_chart.checkout, org_chart.bob, "Engineer", token, session
        )

        result = await owner_service.set_team_owners(
            org_chart.checkout, [org_chart.bob], token, session
        )
        assert result.success
        assert result.non_member_ids == [org_chart.bob]
        assert await team_roles(session_factory, org_chart.checkout) == {}


class TestList:
    @pytest.mark.asyncio
    async def test_list_members(self, session, session_factory, org_chart):
        await add_rows(
            session_factory,
            EmployeeTeam(
                employee_key=org_chart.carol,
                team_key=org_chart.checkout,
                job_title="Engineer",
                team_owner=True,
            ),
            EmployeeTeam(employee_key=org_chart.bob, team_key=org_chart.checkout, job_title="Tester"),
            EmployeeTeam(employee_key=org_chart.dave, team_key=org_chart.refunds, job_title="Tester"),
        )

        members = await team_service.list_team_members(org_chart.checkout, session)
        assert [(m.name, m.job_title, m.team_owner) for m in members] == [
            ("Bob Tester", "Tester", False),
            ("Carol Tester", "Engineer", True),
        ]

    @pytest.mark.asyncio
    async def test_list_unknown_team(self, session):
        with pytest.raises(EntityNotFoundError):
            await team_service.list_team_members(9999, session)

    @pytest.mark.asyncio
    async def test_list_owners(self, session, session_factory, org_chart):
        await add_rows(
            session_factory,
            EmployeeTeam(
                employee_key=org_chart.carol,
                team_key=org_chart.checkout,
                job_title="Engineer",
                team_owner=True,
            ),
            EmployeeTeam(
                employee_key=org_chart.carol,
                team_key=org_chart.checkout,
                job_title="Lead",
                team_owner=True,
            ),
            EmployeeTeam(employee_key=org_chart.bob, team_key=org_chart.checkout, job_title="Tester"),
        )

        owners = await owner_service.list_team_owners(org_chart.checkout, session)
        assert [o.employee_key for o in owners] == [org_chart.carol]
        assert owners[0].email == "carol@example.com"
