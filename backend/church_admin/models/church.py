# church_admin/models/church.py
from __future__ import annotations

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship

from church_admin.db import Base


class Church(Base):
    __tablename__ = "churches"

    id = Column(Integer, primary_key=True, index=True)
    address = Column(Text, nullable=False)
    latitude = Column(Integer, nullable=False)
    longitude = Column(Integer, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    images = relationship(
        "ChurchImage",
        back_populates="church",
        cascade="all, delete-orphan",
        order_by="ChurchImage.id",
        lazy="selectin",
    )

    # No delete cascade: removing a church nulls users.church_id
    users = relationship("User", back_populates="church")

    def __repr__(self) -> str:  # pragma: no cover
        return f"<Church(id={self.id}, address={self.address!r})>"


class ChurchImage(Base):
    __tablename__ = "church_images"

    id = Column(Integer, primary_key=True, index=True)
    image = Column(String(1024), nullable=False)
    church_id = Column(
        Integer, ForeignKey("churches.id", ondelete="CASCADE"), nullable=False, index=True
    )

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    church = relationship("Church", back_populates="images")
