"""
fintrack/schemas/user.py

Pydantic schemas for registration, login, the issued token, and the
current-user response (which never includes the password hash).

Registration fields are declared Optional with validate_default=True so a
missing field reaches the same validator as an empty one and reports the
same message.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fintrack.models.user import BCRYPT_MAX_PASSWORD_BYTES

MIN_PASSWORD_LENGTH = 6


def _required(value: Optional[str], message: str) -> str:
    if value is None or value == "":
        raise ValueError(message)
    return value


class RegisterRequest(BaseModel):
    """
    Body of POST /users.
    """
    username: Optional[str] = Field(default=None, validate_default=True)
    password: Optional[str] = Field(default=None, validate_default=True)
    firstname: Optional[str] = Field(default=None, validate_default=True)
    lastname: Optional[str] = Field(default=None, validate_default=True)

    @field_validator("username")
    @classmethod
    def username_required(cls, v: Optional[str]) -> str:
        return _required(v, "Username is required")

    @field_validator("password")
    @classmethod
    def password_length(cls, v: Optional[str]) -> str:
        if v is None or len(v) < MIN_PASSWORD_LENGTH:
            raise ValueError(
                f"Please enter a password with {MIN_PASSWORD_LENGTH} or more characters"
            )
        if len(v.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
            raise ValueError(f"Password cannot exceed {BCRYPT_MAX_PASSWORD_BYTES} bytes")
        return v

    @field_validator("firstname")
    @classmethod
    def firstname_required(cls, v: Optional[str]) -> str:
        return _required(v, "First name is required")

    @field_validator("lastname")
    @classmethod
    def lastname_required(cls, v: Optional[str]) -> str:
        return _required(v, "Last name is required")


class LoginRequest(BaseModel):
    """
    Body of POST /users/login. Only the password's presence is checked;
    an unknown or missing username simply fails the credential check.
    """
    username: Optional[str] = None
    password: Optional[str] = Field(default=None, validate_default=True)

    @field_validator("password")
    @classmethod
    def password_required(cls, v: Optional[str]) -> str:
        return _required(v, "Password is required")


class TokenResponse(BaseModel):
    token: str


class UserRead(BaseModel):
    """
    Schema for returning user data to clients.
    Includes the DB 'id' but excludes the hashed password.
    """
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    firstname: str
    lastname: str
    role: str


class AuthenticatedUser(BaseModel):
    """
    The caller identity carried inside a verified token.
    Registration tokens carry no role, so it is optional.
    """
    id: int
    role: Optional[str] = None
