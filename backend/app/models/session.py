"""
Server-side session record. The cookie carries only a signed reference to sid;
the row binds sid to the identity subject until expire.
"""
from datetime import datetime
from sqlalchemy import String, DateTime, ForeignKey
from sqlalchemy.types import JSON
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class UserSession(Base):
    __tablename__ = "sessions"

    sid: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    data: Mapped[dict | None] = mapped_column(JSON, nullable=True)  # profile claims captured at login
    expire: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
