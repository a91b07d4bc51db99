# church_admin/services/auth.py
from __future__ import annotations

import logging
import os
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from pwdlib import PasswordHash
from pwdlib.exceptions import UnknownHashError
from sqlalchemy import select
from sqlalchemy.orm import Session

from church_admin.models.user import User

logger = logging.getLogger(__name__)

password_hash = PasswordHash.recommended()

JWT_ALGORITHM = "HS256"
SESSION_MAX_AGE = timedelta(days=30)
SESSION_COOKIE = "session-token"

_DEV_SECRET = "dev-insecure-secret-change-me"
_warned_dev_secret = False


def _truthy(value: Optional[str]) -> bool:
    return (value or "").lower() in {"1", "true", "yes", "on"}


def auth_enforced() -> bool:
    """Return True if route guards should be enforced (production), False in dev."""
    return _truthy(os.getenv("AUTH_ENFORCE", "false"))


def cookie_secure() -> bool:
    return _truthy(os.getenv("COOKIE_SECURE", "false"))


def _secret() -> str:
    global _warned_dev_secret
    secret = os.getenv("AUTH_SECRET") or os.getenv("NEXTAUTH_SECRET")
    if secret:
        return secret
    if not _warned_dev_secret:
        logger.warning("AUTH_SECRET is not set; signing sessions with the development secret")
        _warned_dev_secret = True
    return _DEV_SECRET


def hash_password(password: str) -> str:
    return password_hash.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return password_hash.verify(plain_password, hashed_password)
    except UnknownHashError:
        # Unrecognised hash formats verify as a mismatch
        logger.warning("password verification failed on an unreadable hash")
        return False


def authenticate(db: Session, email: str, password: str) -> Optional[User]:
    """Return the user for valid credentials, else None (no reason disclosed)."""
    if not email or not password:
        return None
    user = (
        db.execute(select(User).where(User.email == email.strip().lower()))
        .scalars()
        .first()
    )
    if not user:
        return None
    if not verify_password(password, user.password):
        return None
    return user


def session_claims(user: User) -> Dict[str, Any]:
    return {
        "sub": str(user.id),
        "role": user.role.value if hasattr(user.role, "value") else str(user.role),
        "name": user.full_name or None,
        "email": user.email,
        "image": user.profile_picture,
    }


def create_session_token(user: User, now: Optional[datetime] = None) -> tuple[str, datetime]:
    issued = now or datetime.now(timezone.utc)
    expires = issued + SESSION_MAX_AGE
    claims = session_claims(user)
    claims.update({"iat": issued, "exp": expires})
    return jwt.encode(claims, _secret(), algorithm=JWT_ALGORITHM), expires


def decode_session_token(token: str) -> Optional[Dict[str, Any]]:
    """Decode and verify a session token; None if invalid or expired."""
    try:
        payload = jwt.decode(token, _secret(), algorithms=[JWT_ALGORITHM])
    except JWTError:
        return None
    if not payload.get("sub") or payload.get("role") not in {"admin", "worker"}:
        return None
    return payload


def session_from_claims(payload: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "user": {
            "id": payload["sub"],
            "role": payload["role"],
            "name": payload.get("name"),
            "email": payload.get("email"),
            "image": payload.get("image"),
        },
        "expires": datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    }
