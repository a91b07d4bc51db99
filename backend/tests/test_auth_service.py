# tests/test_auth_service.py
from datetime import datetime, timedelta, timezone

import pytest

from church_admin.models.user import User, UserRole
from church_admin.services import auth


def test_hash_verifies_plaintext_and_rejects_others():
    hashed = auth.hash_password("correct horse battery")
    assert hashed != "correct horse battery"
    assert hashed.startswith("$argon2")
    assert auth.verify_password("correct horse battery", hashed)
    assert not auth.verify_password("correct horse battery!", hashed)
    assert not auth.verify_password("", hashed)


def test_unreadable_hash_is_a_mismatch():
    assert auth.verify_password("anything", "not-a-hash") is False


def test_hasher_faults_are_not_reported_as_mismatch(monkeypatch):
    def _broken(*args, **kwargs):
        raise RuntimeError("hasher unavailable")

    monkeypatch.setattr(auth.password_hash, "verify", _broken)
    with pytest.raises(RuntimeError):
        auth.verify_password("anything", "$argon2id$whatever")


def test_authenticate(db):
    db.add(User(email="a@b.c", password=auth.hash_password("pass-word-1"), role=UserRole.worker))
    db.commit()

    assert auth.authenticate(db, "A@B.C ", "pass-word-1").email == "a@b.c"
    assert auth.authenticate(db, "a@b.c", "nope") is None
    assert auth.authenticate(db, "x@b.c", "pass-word-1") is None


def test_token_round_trip_and_expiry():
    user = User(id=7, email="w@x.y", firstname="Wen", lastname="Dee", role=UserRole.worker)
    token, expires = auth.create_session_token(user)

    claims = auth.decode_session_token(token)
    assert claims["sub"] == "7"
    assert claims["role"] == "worker"
    assert claims["name"] == "Wen Dee"

    session = auth.session_from_claims(claims)
    assert session["user"]["id"] == "7"
    assert abs((session["expires"] - expires).total_seconds()) < 1

    stale, _ = auth.create_session_token(user, now=datetime.now(timezone.utc) - timedelta(days=31))
    assert auth.decode_session_token(stale) is None


def test_token_signed_with_other_secret_is_rejected(monkeypatch):
    user = User(id=1, email="a@b.c", role=UserRole.admin)
    token, _ = auth.create_session_token(user)
    monkeypatch.setenv("AUTH_SECRET", "another-secret")
    assert auth.decode_session_token(token) is None
