"""
College: static reference data, seeded once. Lower ranking is better; fees are annual, whole rupees.
"""
from datetime import datetime
from sqlalchemy import String, Integer, Text, DateTime
from sqlalchemy.types import JSON
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from app.database import Base


class College(Base):
    __tablename__ = "colleges"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    courses: Mapped[list] = mapped_column(JSON, nullable=False)  # list[str]
    fees: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    ranking: Mapped[int | None] = mapped_column(Integer, nullable=True)
    entrance_exam: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
