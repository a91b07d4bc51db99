# church_admin/models/position.py
from __future__ import annotations

from sqlalchemy import Column, DateTime, Integer, String, Text, func
from sqlalchemy.orm import relationship

from church_admin.db import Base


class Position(Base):
    """A ministerial position held by workers."""

    __tablename__ = "positions"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=True)
    description = Column(Text, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    users = relationship("User", back_populates="position", order_by="User.id")

    def __repr__(self) -> str:  # pragma: no cover
        return f"<Position(id={self.id}, name={self.name!r})>"
