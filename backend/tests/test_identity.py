"""Unit tests for the dev identity oracle and the session service."""
from datetime import datetime, timedelta, timezone

import pytest

from app.errors import AuthError
from app.models.session import UserSession
from app.services.auth import (
    create_session,
    destroy_session,
    purge_expired_sessions,
    read_session_id,
    resolve_session,
    sign_session_id,
    split_name,
    upsert_user,
)
from app.services.identity import DevIdentityOracle, IdentityClaims


def test_dev_oracle_parses_token():
    claims = DevIdentityOracle().verify_token("dev:u1:u1@example.com:Ravi Shankar")
    assert claims == IdentityClaims(uid="u1", email="u1@example.com", name="Ravi Shankar")
    assert DevIdentityOracle().verify_token("dev:u2").email is None


@pytest.mark.parametrize("token", ["u1", "dev:", "dev: :x"])
def test_dev_oracle_rejects_bad_token(token):
    with pytest.raises(AuthError):
        DevIdentityOracle().verify_token(token)


def test_split_name():
    assert split_name("Ada King Lovelace") == ("Ada", "King Lovelace")
    assert split_name("Ravi") == ("Ravi", "")
    assert split_name(None) == ("", "")


def test_signed_session_id_round_trip_and_tamper():
    expire = datetime.now(timezone.utc) + timedelta(hours=1)
    value = sign_session_id("abc", expire)
    assert read_session_id(value) == "abc"
    assert read_session_id(value[:-2] + "xx") is None
    assert read_session_id("") is None
    expired = sign_session_id("abc", datetime.now(timezone.utc) - timedelta(minutes=1))
    assert read_session_id(expired) is None


def test_session_lifecycle(db, user_id):
    claims = IdentityClaims(uid=user_id, email=f"{user_id}@example.com", name="Meera Iyer")
    upsert_user(db, claims)
    row, cookie = create_session(db, claims)
    assert row.data["user"]["uid"] == user_id
    assert resolve_session(db, cookie).sid == row.sid
    destroy_session(db, cookie)
    assert resolve_session(db, cookie) is None
    destroy_session(db, cookie)  # already gone: no error


def test_expired_session_not_resolved_and_purged(db, user_id):
    claims = IdentityClaims(uid=user_id)
    upsert_user(db, claims)
    row, cookie = create_session(db, claims)
    sid = row.sid
    row.expire = datetime.now(timezone.utc) - timedelta(seconds=1)
    db.commit()
    assert resolve_session(db, cookie) is None
    assert purge_expired_sessions(db) >= 1
    assert db.query(UserSession).filter(UserSession.sid == sid).first() is None
