"""
SQLAlchemy models. Import here so Alembic and app can use them.
"""
from app.models.user import User
from app.models.session import UserSession
from app.models.test_attempt import TestAttempt
from app.models.college import College
from app.models.teacher import Teacher
from app.models.booking import Booking

__all__ = ["User", "UserSession", "TestAttempt", "College", "Teacher", "Booking"]
