"""ART (Agile Release Train) model. Names are unique within an organization."""

from typing import Optional

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from .base import AuditMixin


class Art(AuditMixin, SQLModel, table=True):
    __tablename__ = "art"
    __table_args__ = (
        sa.UniqueConstraint("art_name", "organization_key", name="art_name_organization_key_unique"),
    )

    art_key: Optional[int] = Field(default=None, primary_key=True)
    art_name: str = Field(nullable=False, max_length=255)
    organization_key: int = Field(
        foreign_key="organization.organization_key",
        ondelete="CASCADE",
        nullable=False,
        index=True,
    )
