"""
fintrack/utils/auth.py

JWT helpers and the bearer-token dependency.

Token payload layout:

    {"user": {"id": 1, "role": "user"}, "iat": ..., "exp": ...}

'role' is only present in tokens issued at login.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import ValidationError

from fintrack.config import Settings
from fintrack.errors import AuthError
from fintrack.schemas.user import AuthenticatedUser

logger = logging.getLogger(__name__)

_bearer_scheme = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


# --- JWT Helper Functions ---

def create_access_token(data: dict, settings: Settings, expires_in: int) -> str:
    """
    Generate a new JWT access token.

    Args:
        data (dict): Payload data to encode in the token.
        settings (Settings): Supplies the signing secret and algorithm.
        expires_in (int): Lifetime in seconds.

    Returns:
        str: Encoded JWT token.

    Raises:
        JWTError: If the token cannot be signed.
    """
    now = datetime.now(timezone.utc)
    to_encode = data.copy()
    to_encode.update({"iat": now, "exp": now + timedelta(seconds=expires_in)})
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> AuthenticatedUser:
    """
    Verify and decode a JWT access token.

    Raises:
        JWTError: If the signature is bad, the token expired, or the payload
        has no usable 'user' claim.
    """
    payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    try:
        return AuthenticatedUser.model_validate(payload.get("user"))
    except ValidationError as exc:
        raise JWTError(f"Malformed user claim: {exc}")


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    settings: Settings = Depends(get_app_settings),
) -> AuthenticatedUser:
    """
    Extract and verify the Bearer token, returning the authenticated caller.
    Raises AuthError(401) when the header is missing or the token is invalid.
    """
    if credentials is None:
        raise AuthError(
            "No token, authorization denied",
            status_code=401,
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return decode_access_token(credentials.credentials, settings)
    except JWTError as exc:
        logger.warning(f"Rejected bearer token: {exc}")
        raise AuthError(
            "Token is not valid",
            status_code=401,
            headers={"WWW-Authenticate": "Bearer"},
        )
