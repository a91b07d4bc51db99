# church_admin/api/system.py
from __future__ import annotations

import logging
import os
from datetime import datetime
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from church_admin.db import DATABASE_URL, get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["ops"])

APP_NAME = "Church Worker Admin"


def _db_driver_from_url(url: str | None) -> str | None:
    if not url or "://" not in url:
        return None
    scheme = url.split("://", 1)[0]  # e.g., "postgresql+psycopg2"
    if "+" in scheme:
        return scheme.split("+", 1)[1]  # "psycopg2"
    return scheme


@router.get("/health")
def health(db: Session = Depends(get_db)):
    """Liveness check with a lightweight DB probe and local time."""
    tz = os.getenv("TZ", "Asia/Manila")
    now_local = datetime.now(ZoneInfo(tz)).isoformat()

    probe = {"status": "ok", "driver": _db_driver_from_url(DATABASE_URL)}
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning("health probe failed: %s", e)
        probe["status"] = f"error: {type(e).__name__}"

    return {
        "status": "ok",
        "time": {"tz": tz, "now": now_local},
        "db": probe,
    }


@router.get("/version")
def version():
    """Minimal runtime info; confirms DB driver for the UI."""
    return {
        "app": APP_NAME,
        "db_driver": _db_driver_from_url(DATABASE_URL),
        "tz": os.getenv("TZ", "Asia/Manila"),
    }
