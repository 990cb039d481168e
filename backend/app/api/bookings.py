"""
Bookings API: request a session with a teacher (status=pending), list the caller's bookings.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import RequestContext, get_current_user
from app.database import get_db
from app.schemas.booking import BookingCreateRequest, BookingResponse
from app.services.bookings import create_booking, list_user_bookings

router = APIRouter(prefix="/api/bookings", tags=["bookings"])


@router.post("", response_model=BookingResponse)
def book_teacher(
    data: BookingCreateRequest,
    ctx: RequestContext = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Record a pending booking. No availability or double-booking check."""
    booking = create_booking(
        db,
        ctx.user_id,
        teacher_id=data.teacher_id,
        session_date=data.session_date,
        duration=data.duration,
        subject=data.session_subject,
        total_amount=data.total_cost,
    )
    return BookingResponse.model_validate(booking)


@router.get("", response_model=list[BookingResponse])
def my_bookings(ctx: RequestContext = Depends(get_current_user), db: Session = Depends(get_db)):
    return [BookingResponse.model_validate(b) for b in list_user_bookings(db, ctx.user_id)]
