"""Tests for Firebase ID token verification."""

import pytest
from firebase_admin import auth

from core.exceptions import AuthenticationError, ConfigurationError
from services import identity
from services.identity import FirebaseIdentityVerifier, bearer_token, init_firebase_app


def test_valid_token_returns_uid(monkeypatch):
    seen = {}

    def fake_verify(token, app=None, check_revoked=False):
        seen.update(token=token, check_revoked=check_revoked)
        return {"uid": "firebase-uid-1", "email": "cook@example.com"}

    monkeypatch.setattr(identity.auth, "verify_id_token", fake_verify)

    uid = FirebaseIdentityVerifier(app=None, check_revoked=True).verify("id-token")

    assert uid == "firebase-uid-1"
    assert seen == {"token": "id-token", "check_revoked": True}


@pytest.mark.parametrize(
    "error",
    [
        auth.InvalidIdTokenError("Token signed by untrusted issuer"),
        auth.ExpiredIdTokenError("Token expired", None),
        auth.RevokedIdTokenError("Token revoked"),
        ValueError("Illegal ID token provided"),
    ],
)
def test_rejected_tokens_raise_authentication_error(monkeypatch, error):
    def fake_verify(token, app=None, check_revoked=False):
        raise error

    monkeypatch.setattr(identity.auth, "verify_id_token", fake_verify)

    with pytest.raises(AuthenticationError) as exc_info:
        FirebaseIdentityVerifier(app=None).verify("bad-token")
    assert exc_info.value.status_code == 401
    assert exc_info.value.message == "Please sign in again."


@pytest.mark.parametrize("token", ["", "   "])
def test_blank_token_fails_without_calling_firebase(monkeypatch, token):
    def fake_verify(*args, **kwargs):
        raise AssertionError("verify_id_token must not be called")

    monkeypatch.setattr(identity.auth, "verify_id_token", fake_verify)

    with pytest.raises(AuthenticationError):
        FirebaseIdentityVerifier(app=None).verify(token)


def test_bearer_token_parsing():
    assert bearer_token("Bearer abc.def") == "abc.def"
    assert bearer_token("bearer  abc") == "abc"
    for header in (None, "", "Basic abc", "Bearer "):
        with pytest.raises(AuthenticationError):
            bearer_token(header)


def test_init_firebase_app_with_missing_credentials_file_raises_configuration_error(tmp_path):
    with pytest.raises(ConfigurationError) as exc_info:
        init_firebase_app(str(tmp_path / "missing-service-account.json"))
    assert exc_info.value.details == {"config_key": "FIREBASE_CREDENTIALS"}
