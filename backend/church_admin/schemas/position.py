# church_admin/schemas/position.py
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from church_admin.models.user import UserRole
from church_admin.schemas.common import CamelModel, required_text


class UserBrief(CamelModel):
    """Minimal user projection embedded in position/subject payloads."""

    id: int
    email: str
    firstname: Optional[str] = None
    middlename: Optional[str] = None
    lastname: Optional[str] = None
    role: UserRole


class PositionCreate(CamelModel):
    name: Optional[str] = None
    description: str = Field(default="", validate_default=True)

    @field_validator("description", mode="before")
    @classmethod
    def _description_required(cls, v):
        return required_text(v, "Description is required")


class PositionUpdate(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None

    @field_validator("description", mode="before")
    @classmethod
    def _description_not_blank(cls, v):
        if v is None:
            return v
        return required_text(v, "Description is required")


class PositionRead(CamelModel):
    id: int
    name: Optional[str] = None
    description: str
    created_at: datetime
    updated_at: datetime
    # Only populated when users are requested (includeUsers / get-by-id)
    users: Optional[List[UserBrief]] = None
