"""
fintrack/services/user.py

User lookups and creation. Users are never updated or deleted here.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from fintrack.models.user import User
from fintrack.schemas.user import RegisterRequest

logger = logging.getLogger(__name__)


def get_user_by_id(user_id: int, db: Session) -> User | None:
    """
    Return a User by primary key, or None if not found.
    """
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_username(username: str | None, db: Session) -> User | None:
    """
    Return a User by username, or None if not found.
    """
    if not username:
        return None
    return db.query(User).filter(User.username == username).first()


def create_user(user_data: RegisterRequest, db: Session) -> User | None:
    """
    Create a new User with a bcrypt-hashed password.
    Returns None if the username is already taken, including when a
    concurrent registration wins the unique constraint.
    """
    if get_user_by_username(user_data.username, db):
        return None

    new_user = User(
        username=user_data.username,
        firstname=user_data.firstname,
        lastname=user_data.lastname,
    )
    new_user.set_password(user_data.password)
    db.add(new_user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info(f"Username '{user_data.username}' was taken concurrently")
        return None
    db.refresh(new_user)
    return new_user
