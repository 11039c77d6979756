# FILE: fintrack/routers/user.py

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from jose import JWTError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from fintrack.config import (
    Settings,
    LOGIN_TOKEN_EXPIRE_SECONDS,
    REGISTER_TOKEN_EXPIRE_SECONDS,
)
from fintrack.database import get_db
from fintrack.errors import AuthError, ConflictError, server_error
from fintrack.schemas.user import (
    AuthenticatedUser,
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    UserRead,
)
from fintrack.services.user import create_user, get_user_by_id, get_user_by_username
from fintrack.utils.auth import create_access_token, get_app_settings, get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(tags=["users"])

INVALID_CREDENTIALS = "Invalid Credentials"


@router.get("", response_model=Optional[UserRead])
def read_current_user(
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Return the authenticated caller's profile: GET /users

    - Requires a bearer token.
    - Returns null if the user in the token no longer exists.
    """
    try:
        return get_user_by_id(current_user.id, db)
    except SQLAlchemyError:
        logger.exception(f"Profile lookup failed for user id={current_user.id}")
        return server_error()


@router.post("/login", response_model=TokenResponse)
def login(
    login_req: LoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    """
    Exchange username + password for a 24-hour token: POST /users/login

    Unknown usernames and wrong passwords get the same answer so the
    response doesn't reveal which check failed.
    """
    try:
        user = get_user_by_username(login_req.username, db)
        if not user or not user.verify_password(login_req.password):
            logger.warning(f"Failed login for username '{login_req.username}'")
            raise AuthError(INVALID_CREDENTIALS)

        payload = {"user": {"id": user.id, "role": user.role}}
        token = create_access_token(payload, settings, LOGIN_TOKEN_EXPIRE_SECONDS)
    except (SQLAlchemyError, JWTError):
        logger.exception("Login failed with a server error")
        return server_error()

    logger.info(f"Login: {user.username} (id={user.id})")
    return {"token": token}


@router.post("", response_model=TokenResponse)
def register_user(
    user: RegisterRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    """
    Register a new user and return a 100-hour token: POST /users

    1. Field validation happens before this runs (400 with per-field errors).
    2. A taken username is rejected with 400 "User already exists".
    3. The password is hashed with a fresh salt and the user is stored.
    """
    try:
        new_user = create_user(user, db)
        if new_user is None:
            raise ConflictError("User already exists")

        payload = {"user": {"id": new_user.id}}
        token = create_access_token(payload, settings, REGISTER_TOKEN_EXPIRE_SECONDS)
    except (SQLAlchemyError, JWTError):
        logger.exception(f"Registration failed for username '{user.username}'")
        return server_error()

    logger.info(f"Registered user {new_user.username} (id={new_user.id})")
    return {"token": token}
