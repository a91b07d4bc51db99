# church_admin/models/__init__.py
"""
Central model registry.

Import this once at startup (e.g., in main.py) so SQLAlchemy sees all mapped
classes before any relationship is configured, and so Alembic autogenerate
finds every table on `Base.metadata`.
"""
from church_admin.db import Base  # re-export Base

from .church import Church, ChurchImage  # noqa: F401
from .position import Position  # noqa: F401
from .subject import Subject, UserSubject  # noqa: F401
from .user import (  # noqa: F401
    User,
    UserCase,
    UserChild,
    UserEducationalAttainment,
    UserGender,
    UserRole,
    UserStatus,
)

__all__ = [
    "Base",
    "Church",
    "ChurchImage",
    "Position",
    "Subject",
    "UserSubject",
    "User",
    "UserCase",
    "UserChild",
    "UserEducationalAttainment",
    "UserGender",
    "UserRole",
    "UserStatus",
]
