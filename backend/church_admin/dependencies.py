"""
Shared FastAPI dependency helpers.

- `get_db` provides a SQLAlchemy session per request and closes it afterward.
- `list_params` parses the pagination/sort query string shared by every
  collection endpoint.
- `current_session` / `require_role` guard routes. Outside production
  (AUTH_ENFORCE unset) they return a fixed dev principal so local tooling
  keeps working without logging in.
"""

from typing import Any, Callable, Dict, Optional

from fastapi import Cookie, Depends, Header, HTTPException, Query, status

from church_admin.db import get_db  # noqa: F401  (re-exported for routers)
from church_admin.services import auth as auth_svc
from church_admin.services.listing import MAX_PAGE_SIZE, ListParams

DEV_PRINCIPAL: Dict[str, Any] = {
    "sub": "0",
    "role": "admin",
    "name": "Dev",
    "email": "dev@local",
    "image": None,
}


def list_params(
    page: int = Query(1, ge=1),
    page_size: Optional[int] = Query(None, alias="pageSize", ge=1, le=MAX_PAGE_SIZE),
    limit: Optional[int] = Query(None, ge=1, le=MAX_PAGE_SIZE, description="Alias of pageSize"),
    sort: Optional[str] = Query(None, description="field:direction, e.g. createdAt:desc"),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_order: Optional[str] = Query(None, alias="sortOrder"),
) -> ListParams:
    return ListParams(
        page=page,
        page_size=page_size or limit or 10,
        sort=sort,
        sort_by=sort_by,
        sort_order=sort_order,
    )


def _bearer(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None
    return token.strip()


def read_session(
    session_token: Optional[str] = Cookie(default=None, alias=auth_svc.SESSION_COOKIE),
    authorization: Optional[str] = Header(default=None),
) -> Optional[Dict[str, Any]]:
    """Decoded token claims from the Bearer header or session cookie, if valid."""
    token = _bearer(authorization) or session_token
    if not token:
        return None
    return auth_svc.decode_session_token(token)


def current_session(
    claims: Optional[Dict[str, Any]] = Depends(read_session),
) -> Dict[str, Any]:
    if not auth_svc.auth_enforced():
        return claims or DEV_PRINCIPAL
    if not claims:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return claims


def require_role(*roles: str) -> Callable[..., Dict[str, Any]]:
    """Dependency factory to enforce one of the given roles."""
    def _inner(claims: Dict[str, Any] = Depends(current_session)) -> Dict[str, Any]:
        # Dev mode: skip role checks entirely.
        if not auth_svc.auth_enforced():
            return claims
        if claims.get("role") not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Requires role: {', '.join(roles)}",
            )
        return claims
    return _inner


require_admin = require_role("admin")
