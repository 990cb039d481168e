"""
Teacher: static reference data, seeded once. rating is tenths of a star (48 = 4.8).
"""
from datetime import datetime
from sqlalchemy import String, Integer, Text, DateTime
from sqlalchemy.types import JSON
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from app.database import Base


class Teacher(Base):
    __tablename__ = "teachers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    specializations: Mapped[list] = mapped_column(JSON, nullable=False)  # list[str]
    experience: Mapped[int] = mapped_column(Integer, nullable=False)  # years
    qualifications: Mapped[list] = mapped_column(JSON, nullable=False)  # list[str]
    hourly_rate: Mapped[int] = mapped_column(Integer, nullable=False)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    total_reviews: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    image_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    availability: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    bookings = relationship("Booking", back_populates="teacher")
