"""
Auth routes: POST /api/login (identity token -> session cookie), GET /api/logout, GET /api/auth/user.
"""
import logging

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from app.api.deps import RequestContext, get_current_user
from app.config import settings
from app.database import get_db
from app.errors import ValidationError
from app.schemas.auth import LoginRequest, LoginResponse, SessionUser, UserResponse
from app.schemas.base import MessageResponse
from app.services.auth import create_session, destroy_session, session_ttl, upsert_user
from app.services.identity import IdentityOracle, get_identity_oracle

router = APIRouter(prefix="/api", tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/login", response_model=LoginResponse)
def login(
    data: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
    oracle: IdentityOracle = Depends(get_identity_oracle),
):
    """Verify the identity token once, upsert the user, start a week-long session."""
    token = (data.id_token or "").strip()
    if not token:
        raise ValidationError("ID token required")
    claims = oracle.verify_token(token)
    upsert_user(db, claims)
    _, cookie_value = create_session(db, claims)
    response.set_cookie(
        key=settings.session_cookie_name,
        value=cookie_value,
        max_age=int(session_ttl().total_seconds()),
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        path="/",
    )
    logger.info("Login: session started for user %s", claims.uid)
    return LoginResponse(message="Login successful", user=SessionUser(**claims.to_dict()))


@router.get("/logout", response_model=MessageResponse)
def logout(request: Request, response: Response, db: Session = Depends(get_db)):
    """Destroy the session unconditionally."""
    destroy_session(db, request.cookies.get(settings.session_cookie_name))
    response.delete_cookie(settings.session_cookie_name, path="/")
    return MessageResponse(message="Logged out")


@router.get("/auth/user", response_model=UserResponse)
def current_user(ctx: RequestContext = Depends(get_current_user)):
    """Return the caller's user row."""
    return UserResponse.model_validate(ctx.user)
