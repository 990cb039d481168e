"""
Auth request/response schemas.
"""
from datetime import datetime

from app.schemas.base import CamelModel


class LoginRequest(CamelModel):
    id_token: str | None = None


class SessionUser(CamelModel):
    """Claims captured from the identity provider at login."""
    uid: str
    email: str | None = None
    name: str | None = None
    picture: str | None = None


class LoginResponse(CamelModel):
    message: str
    user: SessionUser


class UserResponse(CamelModel):
    id: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    profile_image_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
