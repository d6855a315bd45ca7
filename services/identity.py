"""Caller identity verification.

`IdentityVerifier.verify` turns a bearer credential into a stable user id or
raises `AuthenticationError`. The production implementation delegates to
Firebase Authentication ID tokens. Verification failures are never retried.
"""

from abc import ABC, abstractmethod
from typing import Optional

import firebase_admin
from firebase_admin import auth, credentials
from firebase_admin import exceptions as firebase_exceptions

from core.exceptions import AuthenticationError, ConfigurationError
from core.logger import get_logger

logger = get_logger("services.identity")


class IdentityVerifier(ABC):
    """Common interface for credential verifiers."""

    @abstractmethod
    def verify(self, token: str) -> str:
        """Return the user id the token was issued to.

        Raises:
            AuthenticationError: If the token is missing, malformed, expired
                or signed by an untrusted issuer.
        """


class FirebaseIdentityVerifier(IdentityVerifier):
    """Verifies Firebase Authentication ID tokens with the Admin SDK."""

    def __init__(self, app: firebase_admin.App, check_revoked: bool = False):
        self.app = app
        self.check_revoked = check_revoked

    def verify(self, token: str) -> str:
        if not token or not token.strip():
            raise AuthenticationError("missing credential")

        try:
            decoded = auth.verify_id_token(token, app=self.app, check_revoked=self.check_revoked)
        except (ValueError, firebase_exceptions.FirebaseError) as exc:
            logger.warning("ID token rejected: %s: %s", type(exc).__name__, exc)
            raise AuthenticationError(type(exc).__name__) from exc

        uid = decoded.get("uid")
        if not uid:
            raise AuthenticationError("token has no uid")
        return uid


def bearer_token(authorization: Optional[str]) -> str:
    """Extract the token from an `Authorization: Bearer <token>` header value.

    Raises:
        AuthenticationError: If the header is missing or not a bearer credential.
    """
    if not authorization:
        raise AuthenticationError("missing Authorization header")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError("Authorization header is not a bearer token")
    return token.strip()


def init_firebase_app(credentials_path: Optional[str] = None, project_id: Optional[str] = None) -> firebase_admin.App:
    """Initialize the default Firebase app once, or return it if it already exists.

    Without `credentials_path` the Admin SDK falls back to Application
    Default Credentials.

    Raises:
        ConfigurationError: If the SDK cannot be initialized.
    """
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass

    options = {"projectId": project_id} if project_id else None
    try:
        cred = credentials.Certificate(credentials_path) if credentials_path else None
        app = firebase_admin.initialize_app(cred, options)
    except (ValueError, OSError) as exc:
        logger.error("Firebase Admin SDK initialization failed: %s", exc)
        raise ConfigurationError(
            f"Firebase Admin SDK failed to initialize: {exc}",
            config_key="FIREBASE_CREDENTIALS"
        ) from exc

    logger.info("Firebase Admin SDK initialized (project=%s)", project_id or "default")
    return app
