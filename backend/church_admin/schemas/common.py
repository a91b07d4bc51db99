# church_admin/schemas/common.py
from __future__ import annotations

from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

T = TypeVar("T")


class CamelModel(BaseModel):
    """Snake_case attributes in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Page(CamelModel, Generic[T]):
    """List envelope shared by every collection endpoint."""

    data: List[T]
    total: int
    page: int
    page_size: int
    total_pages: int


class MessageOut(BaseModel):
    message: str


def required_text(value: Optional[str], message: str) -> str:
    """Reject None/blank strings with a plain, user-facing message."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise PydanticCustomError("required", message)
    # Non-strings fall through to the field's own type validation
    return value.strip() if isinstance(value, str) else value


def required_secret(value: Optional[str], message: str) -> str:
    """Presence check for secrets; the value is kept exactly as sent."""
    if value is None or value == "":
        raise PydanticCustomError("required", message)
    return value


def passwords_match(password: Optional[str], confirm: Optional[str]) -> None:
    if password and password != confirm:
        raise PydanticCustomError("password_mismatch", "Passwords do not match")


def password_length(value: Optional[str]) -> Optional[str]:
    if value is not None and len(value) < 8:
        raise PydanticCustomError("password_length", "Password must be at least 8 characters")
    return value
