# fintrack/models/__init__.py

"""
Central import point for the ORM models so every table is registered
with Base.metadata before create_all() runs.
"""

from fintrack.database import Base

from .user import User
from .transaction import Transaction
