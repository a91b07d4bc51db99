# church_admin/api/auth.py
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from church_admin.dependencies import get_db, read_session
from church_admin.schemas.auth import LoginIn, LoginOut, SessionOut
from church_admin.schemas.common import MessageOut
from church_admin.schemas.user import BootstrapAdminCreate, BootstrapAdminOut
from church_admin.services import auth as auth_svc
from church_admin.services import users as users_svc

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=auth_svc.SESSION_COOKIE,
        value=token,
        max_age=int(auth_svc.SESSION_MAX_AGE.total_seconds()),
        path="/",
        httponly=True,
        samesite="lax",
        secure=auth_svc.cookie_secure(),
    )


@router.post("/auth/login", response_model=LoginOut)
def login(payload: LoginIn, response: Response, db: Session = Depends(get_db)):
    user = auth_svc.authenticate(db, payload.email, payload.password)
    if not user:
        logger.info("login failed for %s", payload.email)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")

    token, expires = auth_svc.create_session_token(user)
    _set_session_cookie(response, token)
    logger.info("login ok user_id=%s role=%s", user.id, user.role.value)

    session = auth_svc.session_from_claims(
        {**auth_svc.session_claims(user), "exp": expires.timestamp()}
    )
    return {**session, "token": token}


@router.get("/auth/session", response_model=SessionOut)
def get_session(claims: Optional[Dict[str, Any]] = Depends(read_session)):
    if not claims:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return auth_svc.session_from_claims(claims)


@router.post("/auth/logout", response_model=MessageOut)
def logout(response: Response):
    response.set_cookie(
        key=auth_svc.SESSION_COOKIE,
        value="",
        expires=_EPOCH,
        path="/",
        httponly=True,
        samesite="lax",
        secure=auth_svc.cookie_secure(),
    )
    return {"message": "Logout successful"}


@router.post("/create-admin", response_model=BootstrapAdminOut, status_code=status.HTTP_201_CREATED)
def create_admin_account(payload: BootstrapAdminCreate, db: Session = Depends(get_db)):
    user = users_svc.bootstrap_admin(db, payload)
    return {"message": "Admin account created successfully", "user": user}
