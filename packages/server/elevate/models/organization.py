"""Organization model."""

from typing import Optional

from sqlmodel import Field, SQLModel

from .base import AuditMixin


class Organization(AuditMixin, SQLModel, table=True):
    __tablename__ = "organization"

    organization_key: Optional[int] = Field(default=None, primary_key=True)
    organization_name: str = Field(unique=True, nullable=False, max_length=255)
