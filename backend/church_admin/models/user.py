# church_admin/models/user.py
"""SQLAlchemy models for the User aggregate.

A User (admin or worker) owns four dependent collections: children,
educational attainment, case history and subject links. The service layer
replaces each collection wholesale on update, never row by row.
"""

from __future__ import annotations

import enum

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.orm import relationship

from church_admin.db import Base


class UserRole(str, enum.Enum):
    admin = "admin"
    worker = "worker"


class UserGender(str, enum.Enum):
    male = "male"
    female = "female"


class UserStatus(str, enum.Enum):
    single = "single"
    married = "married"
    widowed = "widowed"


def _enum_values(enum_cls):
    return [m.value for m in enum_cls]


# Shared by users and user_children so PostgreSQL gets a single type
gender_enum = Enum(UserGender, name="user_gender", values_callable=_enum_values)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)  # argon2 hash

    firstname = Column(String(100), nullable=True)
    middlename = Column(String(100), nullable=True)
    lastname = Column(String(100), nullable=True)
    birthday = Column(Date, nullable=True)
    gender = Column(gender_enum, nullable=True)
    contact = Column(String(50), nullable=True)
    address = Column(Text, nullable=True)
    description = Column(Text, nullable=True)
    profile_picture = Column(String(1024), nullable=True)

    role = Column(
        Enum(UserRole, name="user_role", values_callable=_enum_values),
        nullable=False,
        default=UserRole.worker,
        server_default=UserRole.worker.value,
        index=True,
    )
    status = Column(Enum(UserStatus, name="user_status", values_callable=_enum_values), nullable=True)

    # Government IDs + scanned images
    sss = Column(String(50), nullable=True)
    sssimage = Column(String(1024), nullable=True)
    pagibig = Column(String(50), nullable=True)
    pagibigimage = Column(String(1024), nullable=True)
    tin = Column(String(50), nullable=True)
    tinimage = Column(String(1024), nullable=True)
    psn = Column(String(50), nullable=True)
    psnimage = Column(String(1024), nullable=True)
    philhealth = Column(String(50), nullable=True)
    philhealthimage = Column(String(1024), nullable=True)

    church_id = Column(Integer, ForeignKey("churches.id", ondelete="SET NULL"), nullable=True, index=True)
    position_id = Column(Integer, ForeignKey("positions.id", ondelete="SET NULL"), nullable=True, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    # --- Relationships --------------------------------------------------- #
    church = relationship("Church", back_populates="users", lazy="joined")
    position = relationship("Position", back_populates="users", lazy="joined")

    children = relationship(
        "UserChild",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="UserChild.id",
        lazy="selectin",
    )
    educational_attainment = relationship(
        "UserEducationalAttainment",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="UserEducationalAttainment.id",
        lazy="selectin",
    )
    cases = relationship(
        "UserCase",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="UserCase.id",
        lazy="selectin",
    )
    user_subjects = relationship(
        "UserSubject",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="UserSubject.id",
        lazy="selectin",
    )

    @property
    def full_name(self) -> str:
        return " ".join(p for p in (self.firstname, self.middlename, self.lastname) if p)

    def __repr__(self) -> str:  # pragma: no cover
        return f"<User(id={self.id}, email={self.email!r}, role={self.role})>"


class UserChild(Base):
    __tablename__ = "user_children"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    firstname = Column(String(100), nullable=False)
    middlename = Column(String(100), nullable=True)
    lastname = Column(String(100), nullable=False)
    birthday = Column(Date, nullable=False)
    gender = Column(gender_enum, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    user = relationship("User", back_populates="children")


class UserEducationalAttainment(Base):
    __tablename__ = "user_educational_attainments"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    schoolname = Column(String(255), nullable=False)
    education = Column(String(255), nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    user = relationship("User", back_populates="educational_attainment")


class UserCase(Base):
    """Legal / disciplinary case record of a worker."""

    __tablename__ = "user_cases"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    year = Column(Integer, nullable=False)
    where = Column(String(255), nullable=False)
    case = Column(Text, nullable=False)
    reason = Column(Text, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    user = relationship("User", back_populates="cases")
