# church_admin/services/positions.py
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from fastapi import HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from church_admin.models.position import Position
from church_admin.models.user import User
from church_admin.schemas.position import PositionCreate, PositionRead, PositionUpdate, UserBrief
from church_admin.services.listing import (
    ListParams,
    contains,
    date_range,
    order_by_clause,
    page_envelope,
    paginate,
)

logger = logging.getLogger(__name__)

SORT_COLUMNS = {
    "id": Position.id,
    "name": Position.name,
    "description": Position.description,
    "createdAt": Position.created_at,
    "updatedAt": Position.updated_at,
}


def _to_read(pos: Position, include_users: bool = False) -> PositionRead:
    return PositionRead(
        id=pos.id,
        name=pos.name,
        description=pos.description,
        created_at=pos.created_at,
        updated_at=pos.updated_at,
        users=[UserBrief.model_validate(u) for u in pos.users] if include_users else None,
    )


def list_positions(
    db: Session,
    params: ListParams,
    name: Optional[str] = None,
    description: Optional[str] = None,
    created_from: Optional[datetime] = None,
    created_to: Optional[datetime] = None,
    include_users: bool = False,
) -> Dict[str, Any]:
    conds = [
        *contains(Position.name, name),
        *contains(Position.description, description),
        *date_range(Position.created_at, created_from, created_to),
    ]
    options = [selectinload(Position.users)] if include_users else []
    rows, total = paginate(
        db, Position, conds, order_by_clause(Position, SORT_COLUMNS, params), params, options
    )
    return page_envelope([_to_read(p, include_users) for p in rows], total, params)


def get_position(db: Session, position_id: int) -> Optional[PositionRead]:
    pos = db.get(Position, position_id)
    if not pos:
        return None
    return _to_read(pos, include_users=True)


def create_position(db: Session, payload: PositionCreate) -> PositionRead:
    pos = Position(name=payload.name, description=payload.description)
    db.add(pos)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    db.refresh(pos)
    logger.info("position created id=%s", pos.id)
    return _to_read(pos)


def update_position(db: Session, position_id: int, payload: PositionUpdate) -> Optional[PositionRead]:
    pos = db.get(Position, position_id)
    if not pos:
        return None

    data = payload.model_dump(exclude_unset=True)
    if "name" in data:
        pos.name = data["name"]
    if data.get("description") is not None:
        pos.description = data["description"]

    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    db.refresh(pos)
    logger.info("position updated id=%s fields=%s", position_id, sorted(data))
    return _to_read(pos)


def delete_position(db: Session, position_id: int) -> bool:
    """
    Delete a position unless workers still hold it.
    The row is locked before counting so the guard and the delete share
    one transaction.
    """
    pos = db.get(Position, position_id, with_for_update=True)
    if not pos:
        return False

    holders = db.execute(
        select(func.count()).select_from(User).where(User.position_id == position_id)
    ).scalar_one()
    if holders:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete position with associated users",
        )

    try:
        db.delete(pos)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    logger.info("position deleted id=%s", position_id)
    return True


def ensure_position_exists(db: Session, position_id: Optional[int]) -> None:
    if position_id is None:
        return
    if db.get(Position, position_id) is None:
        raise HTTPException(status_code=400, detail="Position not found")
