"""Password hashing and bearer-token handling.

``CredentialService`` is built from :class:`~rookie_guide.config.Settings` and
passed to whatever needs it; ``get_current_user_id`` is the FastAPI dependency
every protected route declares.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

import bcrypt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt

from .config import Settings, get_settings
from .errors import AuthError

# bcrypt only looks at the first 72 bytes of a password
_BCRYPT_MAX_BYTES = 72

bearer_scheme = HTTPBearer(auto_error=False)


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


class CredentialService:
    def __init__(self, settings: Settings):
        self.secret_key = settings.secret_key
        self.algorithm = settings.algorithm
        self.expiration = timedelta(seconds=settings.access_token_expire_seconds)

    def hash_password(self, password: str) -> str:
        return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt()).decode("utf-8")

    def verify_password(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))
        except ValueError as exc:
            raise AuthError("Stored password hash is invalid") from exc

    def create_access_token(self, user_id: UUID, *, now: Optional[datetime] = None) -> str:
        issued = now or datetime.now(timezone.utc)
        claims = {
            "sub": str(user_id),
            "iat": int(issued.timestamp()),
            "exp": int((issued + self.expiration).timestamp()),
        }
        return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

    def decode_token(self, token: str) -> UUID:
        """Validate signature and expiry and return the user id in ``sub``."""

        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError as exc:
            raise AuthError("Token has expired") from exc
        except JWTError as exc:
            raise AuthError("Invalid token") from exc
        subject = payload.get("sub")
        if not subject:
            raise AuthError("Token is missing a subject")
        try:
            return UUID(str(subject))
        except ValueError as exc:
            raise AuthError("Token subject is not a valid user id") from exc


def get_credential_service(settings: Settings = Depends(get_settings)) -> CredentialService:
    return CredentialService(settings)


def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    credential_service: CredentialService = Depends(get_credential_service),
) -> UUID:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthError("Missing bearer token")
    return credential_service.decode_token(credentials.credentials)
