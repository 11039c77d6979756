"""
fintrack/models/user.py

Represents a registered user. Users are created on registration and read back
by id (profile lookup) or by username (login); nothing updates or deletes them.
"""

from __future__ import annotations

import bcrypt
from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from fintrack.database import Base

# Work factor for bcrypt.gensalt()
BCRYPT_ROUNDS = 10

# bcrypt only looks at the first 72 bytes of its input
BCRYPT_MAX_PASSWORD_BYTES = 72


class User(Base):
    """
    The users table. Each user has:
      - An ID (PK)
      - A unique username
      - A bcrypt-hashed password
      - First and last name
      - A role (defaults to 'user')
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    username: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)

    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    firstname: Mapped[str] = mapped_column(String(255), nullable=False)
    lastname: Mapped[str] = mapped_column(String(255), nullable=False)

    role: Mapped[str] = mapped_column(String(50), nullable=False, default="user")

    def set_password(self, password: str) -> None:
        """
        Hash and store the user's password with a fresh random salt.
        Raises ValueError for passwords longer than 72 bytes instead of
        letting bcrypt silently truncate them.
        """
        encoded = password.encode("utf-8")
        if len(encoded) > BCRYPT_MAX_PASSWORD_BYTES:
            raise ValueError(f"Password cannot exceed {BCRYPT_MAX_PASSWORD_BYTES} bytes")
        salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
        self.password_hash = bcrypt.hashpw(encoded, salt).decode("utf-8")

    def verify_password(self, password: str) -> bool:
        """
        Verify a plain-text password against the stored hash.
        """
        encoded = password.encode("utf-8")
        if len(encoded) > BCRYPT_MAX_PASSWORD_BYTES:
            return False
        try:
            return bcrypt.checkpw(encoded, self.password_hash.encode("utf-8"))
        except (ValueError, TypeError):
            return False

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username}, role={self.role})>"
