"""
Session service: user upsert on login, server-side session records, signed cookie values.
The cookie holds a python-jose JWT whose only claim besides exp is the session id; the sessions
table is the source of truth, so logout (row delete) invalidates the cookie immediately.
"""
import logging
import secrets
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from sqlalchemy.orm import Session

from app.config import settings
from app.models.session import UserSession
from app.models.user import User
from app.services.identity import IdentityClaims

logger = logging.getLogger(__name__)


def session_ttl() -> timedelta:
    return timedelta(days=settings.session_ttl_days)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def split_name(name: str | None) -> tuple[str, str]:
    """'Ada King Lovelace' -> ('Ada', 'King Lovelace')."""
    parts = (name or "").split(" ")
    return parts[0], " ".join(parts[1:])


def upsert_user(db: Session, claims: IdentityClaims) -> User:
    """Insert or update the user keyed by identity subject. Commits."""
    first_name, last_name = split_name(claims.name)
    user = db.get(User, claims.uid)
    if user is None:
        user = User(id=claims.uid)
        db.add(user)
    user.email = claims.email or None
    user.first_name = first_name
    user.last_name = last_name
    user.profile_image_url = claims.picture or ""
    user.updated_at = _now()
    db.commit()
    db.refresh(user)
    return user


def sign_session_id(sid: str, expire: datetime) -> str:
    payload = {"sid": sid, "exp": int(expire.timestamp())}
    return jwt.encode(payload, settings.session_secret, algorithm=settings.session_algorithm)


def read_session_id(cookie_value: str | None) -> str | None:
    """Return sid from a signed cookie value, or None if missing, tampered or expired."""
    if not cookie_value:
        return None
    try:
        payload = jwt.decode(cookie_value, settings.session_secret, algorithms=[settings.session_algorithm])
    except JWTError:
        return None
    sid = payload.get("sid")
    return sid if isinstance(sid, str) and sid else None


def create_session(db: Session, claims: IdentityClaims) -> tuple[UserSession, str]:
    """Persist a week-long session for the subject. Returns (row, signed cookie value)."""
    purge_expired_sessions(db)
    expire = _now() + session_ttl()
    row = UserSession(
        sid=secrets.token_urlsafe(32),
        user_id=claims.uid,
        data={"user": claims.to_dict()},
        expire=expire,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row, sign_session_id(row.sid, expire)


def resolve_session(db: Session, cookie_value: str | None) -> UserSession | None:
    """Live session row for the cookie, or None."""
    sid = read_session_id(cookie_value)
    if sid is None:
        return None
    return db.query(UserSession).filter(UserSession.sid == sid, UserSession.expire > _now()).first()


def destroy_session(db: Session, cookie_value: str | None) -> None:
    """Delete the session row if any. Never fails on a missing or invalid cookie."""
    sid = read_session_id(cookie_value)
    if sid is None:
        return
    db.query(UserSession).filter(UserSession.sid == sid).delete(synchronize_session=False)
    db.commit()


def purge_expired_sessions(db: Session) -> int:
    n = db.query(UserSession).filter(UserSession.expire <= _now()).delete(synchronize_session=False)
    db.commit()
    if n:
        logger.info("Purged %s expired session(s)", n)
    return n
