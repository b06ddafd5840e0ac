"""Team model. Names are unique within an ART."""

from typing import Optional

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from .base import AuditMixin


class Team(AuditMixin, SQLModel, table=True):
    __tablename__ = "team"
    __table_args__ = (
        sa.UniqueConstraint("team_name", "art_key", name="team_name_art_key_unique"),
    )

    team_key: Optional[int] = Field(default=None, primary_key=True)
    team_name: str = Field(nullable=False, max_length=255)
    art_key: int = Field(foreign_key="art.art_key", ondelete="CASCADE", nullable=False, index=True)
    organization_key: int = Field(
        foreign_key="organization.organization_key",
        ondelete="CASCADE",
        nullable=False,
        index=True,
    )
