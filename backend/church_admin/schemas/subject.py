# church_admin/schemas/subject.py
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from church_admin.schemas.common import CamelModel, required_text
from church_admin.schemas.position import UserBrief


class SubjectCreate(CamelModel):
    name: Optional[str] = None
    description: str = Field(default="", validate_default=True)
    disabled: bool = False

    @field_validator("description", mode="before")
    @classmethod
    def _description_required(cls, v):
        return required_text(v, "Description is required")

    @field_validator("disabled", mode="before")
    @classmethod
    def _disabled_default(cls, v):
        return False if v is None else v


class SubjectUpdate(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None
    disabled: Optional[bool] = None

    @field_validator("description", mode="before")
    @classmethod
    def _description_not_blank(cls, v):
        if v is None:
            return v
        return required_text(v, "Description is required")


class SubjectUserLink(CamelModel):
    id: int
    user_id: int
    subject_id: int
    created_at: datetime
    updated_at: datetime
    user: UserBrief


class SubjectRead(CamelModel):
    id: int
    name: Optional[str] = None
    description: str
    disabled: bool
    created_at: datetime
    updated_at: datetime
    # Only populated when links are requested (includeUsers / get-by-id)
    user_subjects: Optional[List[SubjectUserLink]] = None
