# church_admin/schemas/church.py
from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from pydantic import Field, field_validator

from church_admin.schemas.common import CamelModel, required_text


class ChurchImageIn(CamelModel):
    image: str

    @field_validator("image", mode="before")
    @classmethod
    def _image_required(cls, v):
        return required_text(v, "Image URL is required")


def _coerce_images(v: Any) -> Any:
    # The dashboard sometimes posts bare URLs instead of {image: url}
    if isinstance(v, list):
        return [{"image": x} if isinstance(x, str) else x for x in v]
    return v


class ChurchCreate(CamelModel):
    address: str = Field(default="", validate_default=True)
    latitude: int
    longitude: int
    images: List[ChurchImageIn] = Field(default_factory=list)

    @field_validator("address", mode="before")
    @classmethod
    def _address_required(cls, v):
        return required_text(v, "Address is required")

    @field_validator("images", mode="before")
    @classmethod
    def _images(cls, v):
        return _coerce_images(v) if v is not None else []


class ChurchUpdate(CamelModel):
    """Partial update; `images`, when sent, replaces the whole gallery."""

    address: Optional[str] = None
    latitude: Optional[int] = None
    longitude: Optional[int] = None
    images: Optional[List[ChurchImageIn]] = None

    @field_validator("address", mode="before")
    @classmethod
    def _address_not_blank(cls, v):
        if v is None:
            return v
        return required_text(v, "Address is required")

    @field_validator("images", mode="before")
    @classmethod
    def _images(cls, v):
        return _coerce_images(v)


class ChurchImageRead(CamelModel):
    id: int
    image: str
    church_id: int
    created_at: datetime
    updated_at: datetime


class ChurchRead(CamelModel):
    id: int
    address: str
    latitude: int
    longitude: int
    created_at: datetime
    updated_at: datetime
    images: List[ChurchImageRead] = []
