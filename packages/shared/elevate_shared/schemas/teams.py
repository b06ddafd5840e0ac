"""Team membership schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class TeamMemberAssignRequest(BaseModel):
    """Give an employee a role (job title) on a team."""

    model_config = {"str_strip_whitespace": True}

    employee_key: int
    job_title: str = Field(..., min_length=1, max_length=255)
    is_team_owner: bool = False


class TeamMemberResponse(BaseModel):
    employee_key: int
    name: str
    email: str
    job_title: str
    team_owner: bool
    updated_at: datetime


class TeamMemberListResponse(BaseModel):
    data: list[TeamMemberResponse]
