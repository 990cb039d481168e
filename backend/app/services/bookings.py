"""
Booking recorder: one pending booking per request, owned by the session user.
No availability or double-booking check is made; status is never transitioned here.
"""
import logging
import math
from datetime import datetime

from sqlalchemy.orm import Session

from app.models.booking import Booking
from app.services.directory import get_teacher

logger = logging.getLogger(__name__)


def session_total(hourly_rate: int, duration_minutes: int) -> int:
    """Price of a session: hourly rate pro-rated by minutes, rounded up to a whole rupee."""
    return math.ceil(hourly_rate * duration_minutes / 60)


def create_booking(
    db: Session,
    user_id: str,
    teacher_id: int,
    session_date: datetime,
    duration: int,
    subject: str,
    total_amount: int | None = None,
) -> Booking:
    """Persist a pending booking. NotFoundError if the teacher does not exist."""
    teacher = get_teacher(db, teacher_id)
    if total_amount is None:
        total_amount = session_total(teacher.hourly_rate, duration)
    booking = Booking(
        user_id=user_id,
        teacher_id=teacher.id,
        session_date=session_date,
        duration=duration,
        subject=subject,
        status="pending",
        total_amount=total_amount,
    )
    db.add(booking)
    db.commit()
    db.refresh(booking)
    logger.info("Booking %s created: teacher_id=%s duration=%s", booking.id, teacher.id, duration)
    return booking


def list_user_bookings(db: Session, user_id: str) -> list[Booking]:
    return (
        db.query(Booking)
        .filter(Booking.user_id == user_id)
        .order_by(Booking.created_at.desc(), Booking.id.desc())
        .all()
    )
