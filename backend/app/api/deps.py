"""
Shared dependencies: get_current_user resolves the session cookie into an explicit RequestContext.
Every protected route re-checks the subject with the identity oracle; any failure there is a 401.
"""
import logging
from dataclasses import dataclass

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.errors import AuthError
from app.models.user import User
from app.services.auth import resolve_session
from app.services.identity import IdentityOracle, get_identity_oracle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestContext:
    """Authenticated caller for one request; passed explicitly into services."""
    session_id: str
    user_id: str
    user: User


def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
    oracle: IdentityOracle = Depends(get_identity_oracle),
) -> RequestContext:
    """Require a live session whose subject still exists at the identity provider; else 401."""
    cookie = request.cookies.get(settings.session_cookie_name)
    if not cookie:
        logger.debug("Auth failed: no session cookie")
        raise AuthError()
    session = resolve_session(db, cookie)
    if session is None:
        logger.debug("Auth failed: unknown or expired session")
        raise AuthError()
    try:
        oracle.get_user(session.user_id)
    except Exception as e:
        logger.warning("Auth verification failed for session user: %s", e)
        raise AuthError() from e
    user = db.get(User, session.user_id)
    if user is None:
        raise AuthError()
    return RequestContext(session_id=session.sid, user_id=user.id, user=user)
