# church_admin/schemas/auth.py
from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, field_validator

from church_admin.schemas.common import required_text


class LoginIn(BaseModel):
    email: str
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def _email(cls, v):
        return required_text(v, "Invalid email address")

    @field_validator("password", mode="before")
    @classmethod
    def _password(cls, v):
        if v is None or v == "":
            return required_text(v, "Password is required")
        return v


class SessionUser(BaseModel):
    id: str
    role: Literal["admin", "worker"]
    name: Optional[str] = None
    email: Optional[str] = None
    image: Optional[str] = None


class SessionOut(BaseModel):
    user: SessionUser
    expires: datetime


class LoginOut(SessionOut):
    token: str
