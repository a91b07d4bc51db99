# church_admin/schemas/user.py
from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_core import PydanticCustomError

from church_admin.models.user import UserGender, UserRole, UserStatus
from church_admin.schemas.common import (
    CamelModel,
    password_length,
    passwords_match,
    required_secret,
    required_text,
)


def _normalize_email(v):
    if v is None:
        return v
    v = required_text(v, "Email is required")
    if not isinstance(v, str) or "@" not in v:
        raise PydanticCustomError("email", "Invalid email address")
    return v.lower()


# ─────────────────────────────────────────────────────────────────────────────
# Dependent collections (input)
# ─────────────────────────────────────────────────────────────────────────────

class UserChildIn(CamelModel):
    firstname: str
    lastname: str
    middlename: Optional[str] = None
    birthday: date
    gender: UserGender


class UserEducationIn(CamelModel):
    schoolname: str
    education: str


class UserCaseIn(CamelModel):
    year: int
    where: str
    case: str
    reason: str


_EDUCATION_ALIASES = AliasChoices(
    "educationalAttainment", "eudcationalAttainment", "educational_attainment"
)


class _Dependents(CamelModel):
    """Collections owned by a user; `None` means "leave untouched" on update."""

    children: Optional[List[UserChildIn]] = None
    educational_attainment: Optional[List[UserEducationIn]] = Field(
        default=None, validation_alias=_EDUCATION_ALIASES
    )
    cases: Optional[List[UserCaseIn]] = None
    subjects: Optional[List[int]] = None  # subject ids


class _Profile(CamelModel):
    firstname: Optional[str] = None
    middlename: Optional[str] = None
    lastname: Optional[str] = None
    birthday: Optional[date] = None
    gender: Optional[UserGender] = None
    contact: Optional[str] = None
    address: Optional[str] = None
    description: Optional[str] = None
    profile_picture: Optional[str] = None
    status: Optional[UserStatus] = None

    sss: Optional[str] = None
    sssimage: Optional[str] = None
    pagibig: Optional[str] = None
    pagibigimage: Optional[str] = None
    tin: Optional[str] = None
    tinimage: Optional[str] = None
    psn: Optional[str] = None
    psnimage: Optional[str] = None
    philhealth: Optional[str] = None
    philhealthimage: Optional[str] = None

    church_id: Optional[int] = None
    position_id: Optional[int] = None


# ─────────────────────────────────────────────────────────────────────────────
# Generic users (/users)
# ─────────────────────────────────────────────────────────────────────────────

class UserCreate(_Profile, _Dependents):
    email: str = Field(default="", validate_default=True)
    password: str = Field(default="", validate_default=True)
    role: UserRole = UserRole.worker

    @field_validator("email", mode="before")
    @classmethod
    def _email_required(cls, v):
        return required_text(v, "Email and password are required")

    @field_validator("password", mode="before")
    @classmethod
    def _password(cls, v):
        return password_length(required_secret(v, "Email and password are required"))

    @field_validator("email")
    @classmethod
    def _email(cls, v):
        return _normalize_email(v)


class UserUpdate(_Profile, _Dependents):
    email: Optional[str] = None
    password: Optional[str] = None
    confirm_password: Optional[str] = None
    role: Optional[UserRole] = None

    @field_validator("email", mode="before")
    @classmethod
    def _email(cls, v):
        return _normalize_email(v)

    @field_validator("password", mode="before")
    @classmethod
    def _password(cls, v):
        return password_length(v or None)

    @model_validator(mode="after")
    def _check_passwords(self):
        if self.password and self.confirm_password is not None:
            passwords_match(self.password, self.confirm_password)
        return self


# ─────────────────────────────────────────────────────────────────────────────
# Workers (/users/workers)
# ─────────────────────────────────────────────────────────────────────────────

class WorkerCreate(_Profile, _Dependents):
    email: str = Field(default="", validate_default=True)
    birthday: date
    password: str
    confirm_password: str = ""

    @field_validator("email", mode="before")
    @classmethod
    def _email(cls, v):
        return _normalize_email(v)

    @field_validator("password", mode="before")
    @classmethod
    def _password(cls, v):
        return password_length(required_secret(v, "Password must be at least 8 characters"))

    @model_validator(mode="after")
    def _check_passwords(self):
        passwords_match(self.password, self.confirm_password)
        return self


class WorkerUpdate(_Profile, _Dependents):
    """PUT payload. Omitted fields and collections are left as they are."""

    email: Optional[str] = None
    password: Optional[str] = None
    confirm_password: Optional[str] = None

    @field_validator("email", mode="before")
    @classmethod
    def _email(cls, v):
        return _normalize_email(v)

    @field_validator("password", mode="before")
    @classmethod
    def _password(cls, v):
        return password_length(v or None)

    @model_validator(mode="after")
    def _check_passwords(self):
        passwords_match(self.password, self.confirm_password)
        return self


# ─────────────────────────────────────────────────────────────────────────────
# Admins (/users/admin, /create-admin)
# ─────────────────────────────────────────────────────────────────────────────

class AdminCreate(CamelModel):
    email: str = Field(default="", validate_default=True)
    password: str
    confirm_password: str = ""
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    middlename: Optional[str] = None

    @field_validator("email", mode="before")
    @classmethod
    def _email(cls, v):
        return _normalize_email(v)

    @field_validator("password", mode="before")
    @classmethod
    def _password(cls, v):
        return password_length(required_secret(v, "Password must be at least 8 characters"))

    @model_validator(mode="after")
    def _check_passwords(self):
        passwords_match(self.password, self.confirm_password)
        return self


class AdminUpdate(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None
    confirm_password: Optional[str] = None
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    middlename: Optional[str] = None

    @field_validator("email", mode="before")
    @classmethod
    def _email(cls, v):
        return _normalize_email(v)

    @field_validator("password", mode="before")
    @classmethod
    def _password(cls, v):
        return password_length(v or None)

    @model_validator(mode="after")
    def _check_passwords(self):
        passwords_match(self.password, self.confirm_password)
        return self


class BootstrapAdminCreate(CamelModel):
    """First-run admin signup; field names follow the signup form."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: str = Field(default="", validate_default=True)
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def _email(cls, v):
        return _normalize_email(v)

    @field_validator("password", mode="before")
    @classmethod
    def _password(cls, v):
        return password_length(required_secret(v, "Password must be at least 8 characters"))


# ─────────────────────────────────────────────────────────────────────────────
# Read models (returned by API); never carry the password hash
# ─────────────────────────────────────────────────────────────────────────────

class _Stamped(CamelModel):
    id: int
    created_at: datetime
    updated_at: datetime


class UserChildRead(_Stamped, UserChildIn):
    pass


class UserEducationRead(_Stamped, UserEducationIn):
    pass


class UserCaseRead(_Stamped, UserCaseIn):
    pass


class ChurchBrief(CamelModel):
    id: int
    address: str
    latitude: int
    longitude: int


class PositionBrief(CamelModel):
    id: int
    name: Optional[str] = None
    description: str


class SubjectBrief(CamelModel):
    id: int
    name: Optional[str] = None
    description: str
    disabled: bool


class UserSubjectRead(CamelModel):
    id: int
    subject_id: int
    subject: SubjectBrief


class UserRead(_Profile):
    id: int
    email: str
    role: UserRole
    created_at: datetime
    updated_at: datetime

    church: Optional[ChurchBrief] = None
    position: Optional[PositionBrief] = None
    children: List[UserChildRead] = []
    educational_attainment: List[UserEducationRead] = []
    cases: List[UserCaseRead] = []
    user_subjects: List[UserSubjectRead] = []


class AdminRead(CamelModel):
    id: int
    email: str
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    middlename: Optional[str] = None
    created_at: datetime


class BootstrapAdminOut(CamelModel):
    message: str
    user: AdminRead
