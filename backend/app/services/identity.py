"""
Identity oracle: verifies a login credential once and answers "is this subject still live?".
Production uses Firebase (firebase-admin); IDENTITY_PROVIDER=dev accepts "dev:<uid>[:<email>[:<name>]]"
tokens for local runs and is refused in production. Routes receive the oracle through the
get_identity_oracle dependency so tests can substitute it.
"""
import logging
import threading
from dataclasses import dataclass
from functools import lru_cache
from typing import Protocol

import firebase_admin
from firebase_admin import auth as fb_auth, credentials
from firebase_admin.exceptions import FirebaseError

from app.config import settings
from app.errors import AuthError, UpstreamError

logger = logging.getLogger(__name__)

_FIREBASE_APP_NAME = "wisely"
_firebase_lock = threading.Lock()


@dataclass(frozen=True)
class IdentityClaims:
    uid: str
    email: str | None = None
    name: str | None = None
    picture: str | None = None

    def to_dict(self) -> dict:
        return {"uid": self.uid, "email": self.email, "name": self.name, "picture": self.picture}


class IdentityOracle(Protocol):
    def verify_token(self, id_token: str) -> IdentityClaims:
        """Verify a login credential. AuthError if rejected, UpstreamError if the provider is unreachable."""
        ...

    def get_user(self, uid: str) -> IdentityClaims:
        """Return the live identity for uid. AuthError if unknown or disabled."""
        ...


def _init_firebase_app() -> firebase_admin.App:
    with _firebase_lock:
        try:
            return firebase_admin.get_app(_FIREBASE_APP_NAME)
        except ValueError:
            pass
        options = {"httpTimeout": settings.identity_timeout_seconds}
        if settings.firebase_project_id:
            options["projectId"] = settings.firebase_project_id
        cred_path = settings.firebase_credentials_path
        if cred_path.exists():
            cred = credentials.Certificate(str(cred_path))
        else:
            logger.warning("Firebase credentials file %s not found; using application default credentials", cred_path)
            cred = credentials.ApplicationDefault()
        return firebase_admin.initialize_app(cred, options, name=_FIREBASE_APP_NAME)


class FirebaseIdentityOracle:
    def __init__(self, app: firebase_admin.App | None = None):
        self._app = app or _init_firebase_app()

    def verify_token(self, id_token: str) -> IdentityClaims:
        try:
            decoded = fb_auth.verify_id_token(id_token, app=self._app)
        except fb_auth.CertificateFetchError as e:
            raise UpstreamError("Identity provider unavailable") from e
        except (fb_auth.InvalidIdTokenError, fb_auth.UserDisabledError, ValueError) as e:
            raise AuthError("Invalid ID token") from e
        except FirebaseError as e:
            raise UpstreamError("Identity provider unavailable") from e
        return IdentityClaims(
            uid=decoded["uid"],
            email=decoded.get("email"),
            name=decoded.get("name"),
            picture=decoded.get("picture"),
        )

    def get_user(self, uid: str) -> IdentityClaims:
        try:
            record = fb_auth.get_user(uid, app=self._app)
        except (fb_auth.UserNotFoundError, ValueError) as e:
            raise AuthError() from e
        except FirebaseError as e:
            raise UpstreamError("Identity provider unavailable") from e
        if record.disabled:
            raise AuthError()
        return IdentityClaims(uid=record.uid, email=record.email, name=record.display_name, picture=record.photo_url)


class DevIdentityOracle:
    """Local-only oracle: trusts "dev:<uid>[:<email>[:<name>]]" tokens. Every uid is live."""

    PREFIX = "dev:"

    def verify_token(self, id_token: str) -> IdentityClaims:
        if not id_token.startswith(self.PREFIX):
            raise AuthError("Invalid ID token")
        parts = id_token[len(self.PREFIX):].split(":", 2)
        uid = parts[0].strip()
        if not uid:
            raise AuthError("Invalid ID token")
        email = parts[1].strip() if len(parts) > 1 and parts[1].strip() else None
        name = parts[2].strip() if len(parts) > 2 and parts[2].strip() else None
        return IdentityClaims(uid=uid, email=email, name=name)

    def get_user(self, uid: str) -> IdentityClaims:
        return IdentityClaims(uid=uid)


@lru_cache
def get_identity_oracle() -> IdentityOracle:
    """FastAPI dependency; one oracle per process. Overridden in tests."""
    provider = (settings.identity_provider or "firebase").strip().lower()
    if provider == "dev":
        if settings.is_production:
            raise RuntimeError("IDENTITY_PROVIDER=dev is not allowed in production")
        logger.warning("Using dev identity oracle: any 'dev:<uid>' token is accepted")
        return DevIdentityOracle()
    if provider != "firebase":
        raise ValueError(f"Unsupported IDENTITY_PROVIDER: {settings.identity_provider}")
    return FirebaseIdentityOracle()
