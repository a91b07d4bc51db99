# church_admin/services/churches.py
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from fastapi import HTTPException
from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from church_admin.models.church import Church, ChurchImage
from church_admin.schemas.church import ChurchCreate, ChurchRead, ChurchUpdate
from church_admin.services.listing import (
    ListParams,
    contains,
    date_range,
    equals,
    order_by_clause,
    page_envelope,
    paginate,
)

logger = logging.getLogger(__name__)

SORT_COLUMNS = {
    "id": Church.id,
    "address": Church.address,
    "latitude": Church.latitude,
    "longitude": Church.longitude,
    "createdAt": Church.created_at,
    "updatedAt": Church.updated_at,
}


def list_churches(
    db: Session,
    params: ListParams,
    address: Optional[str] = None,
    latitude: Optional[int] = None,
    longitude: Optional[int] = None,
    created_from: Optional[datetime] = None,
    created_to: Optional[datetime] = None,
) -> Dict[str, Any]:
    conds = [
        *contains(Church.address, address),
        *equals(Church.latitude, latitude),
        *equals(Church.longitude, longitude),
        *date_range(Church.created_at, created_from, created_to),
    ]
    rows, total = paginate(db, Church, conds, order_by_clause(Church, SORT_COLUMNS, params), params)
    return page_envelope([ChurchRead.model_validate(c) for c in rows], total, params)


def get_church(db: Session, church_id: int) -> Optional[Church]:
    return db.get(Church, church_id)


def create_church(db: Session, payload: ChurchCreate) -> Church:
    church = Church(
        address=payload.address,
        latitude=payload.latitude,
        longitude=payload.longitude,
        images=[ChurchImage(image=img.image) for img in payload.images],
    )
    db.add(church)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    db.refresh(church)
    logger.info("church created id=%s images=%s", church.id, len(payload.images))
    return church


def update_church(db: Session, church_id: int, payload: ChurchUpdate) -> Optional[Church]:
    church = db.get(Church, church_id)
    if not church:
        return None

    data = payload.model_dump(exclude_unset=True)
    images = data.pop("images", None)

    for field, value in data.items():
        if value is None:
            continue  # address/latitude/longitude are NOT NULL
        setattr(church, field, value)

    try:
        if images is not None:
            # Gallery is replaced wholesale in the same transaction
            db.execute(delete(ChurchImage).where(ChurchImage.church_id == church_id))
            db.flush()
            for img in images:
                db.add(ChurchImage(church_id=church_id, image=img["image"]))
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    db.refresh(church)
    logger.info("church updated id=%s fields=%s", church_id, sorted(payload.model_fields_set))
    return church


def delete_church(db: Session, church_id: int) -> bool:
    church = db.get(Church, church_id)
    if not church:
        return False
    try:
        # Loaded users get church_id nulled by the ORM; images cascade.
        for user in list(church.users):
            user.church_id = None
        db.delete(church)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    logger.info("church deleted id=%s", church_id)
    return True


def ensure_church_exists(db: Session, church_id: Optional[int]) -> None:
    if church_id is None:
        return
    if db.get(Church, church_id) is None:
        raise HTTPException(status_code=400, detail="Church not found")
