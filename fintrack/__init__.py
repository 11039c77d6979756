"""
FinTrack: a small personal-finance tracking API (users + income/expense records).
"""

__version__ = "1.0.0"
