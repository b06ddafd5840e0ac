"""Employee link tables carrying the per-entity owner flag.

Organization and ART links hold one row per (employee, entity) pair. Team links
hold one row per role, keyed by (employee, team, job_title); the owner flag is
stored on every role row.
"""

from sqlmodel import Field, SQLModel

from .base import AuditMixin


class EmployeeOrg(AuditMixin, SQLModel, table=True):
    __tablename__ = "employee_org"

    employee_key: int = Field(
        foreign_key="employee.employee_key", ondelete="CASCADE", primary_key=True, index=True
    )
    organization_key: int = Field(
        foreign_key="organization.organization_key",
        ondelete="CASCADE",
        primary_key=True,
        index=True,
    )
    org_owner: bool = Field(default=True, nullable=False)


class EmployeeArt(AuditMixin, SQLModel, table=True):
    __tablename__ = "employee_art"

    employee_key: int = Field(
        foreign_key="employee.employee_key", ondelete="CASCADE", primary_key=True, index=True
    )
    art_key: int = Field(
        foreign_key="art.art_key", ondelete="CASCADE", primary_key=True, index=True
    )
    art_owner: bool = Field(default=True, nullable=False)


class EmployeeTeam(AuditMixin, SQLModel, table=True):
    __tablename__ = "employee_team"

    employee_key: int = Field(
        foreign_key="employee.employee_key", ondelete="CASCADE", primary_key=True, index=True
    )
    team_key: int = Field(
        foreign_key="team.team_key", ondelete="CASCADE", primary_key=True, index=True
    )
    job_title: str = Field(primary_key=True, max_length=255)
    team_owner: bool = Field(default=False, nullable=False)
