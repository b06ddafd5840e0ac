"""Employee model."""

from typing import Optional

from sqlmodel import Field, SQLModel

from .base import TimestampMixin


class Employee(TimestampMixin, SQLModel, table=True):
    __tablename__ = "employee"

    employee_key: Optional[int] = Field(default=None, primary_key=True)
    first_name: str = Field(nullable=False, max_length=255)
    last_name: str = Field(nullable=False, max_length=255)
    email: str = Field(unique=True, nullable=False, index=True, max_length=255)
    lan_id: str = Field(unique=True, nullable=False, index=True, max_length=255)
    manager_lan_id: Optional[str] = Field(default=None, index=True, max_length=255)
    is_contractor: bool = Field(default=True, nullable=False)
    is_user_active: bool = Field(default=True, nullable=False)
    profile_photo: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
