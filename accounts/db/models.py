"""SQLAlchemy table holding one document per user."""
from __future__ import annotations

from sqlalchemy import Column, DateTime, String, Text

from .session import Base


class UserDocument(Base):
    __tablename__ = "users"

    # ids are UUID text; pages are ordered by this column
    id = Column(String(64), primary_key=True)
    name = Column(Text, nullable=False, default="")
    status = Column(String(16), nullable=False, default="normal")
    registered_at = Column(DateTime(timezone=True), nullable=False)
