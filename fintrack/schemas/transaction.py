"""
fintrack/schemas/transaction.py

Pydantic (v2) schemas for transaction records and for the query string of
GET /transactions.

- TransactionCreate: body of POST; every field optional, unknown keys ignored
- TransactionUpdate: body of PUT; only the keys the client sent are applied
- TransactionRead: output, exposes the owning user id as 'user'
- TransactionQuery: parsed ?type=&date1=&date2=
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def parse_datetime(value) -> Optional[datetime]:
    """
    Accepts 'YYYY-MM-DD' or a full ISO-8601 datetime (a trailing 'Z' included)
    and returns an offset-aware UTC datetime. Empty strings mean "not given".
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise ValueError(f"Invalid date: {value!r}")

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


class TransactionFields(BaseModel):
    """
    Fields shared by create and update. Values are coerced to their types
    but otherwise accepted as sent.
    """
    user: Optional[int] = None
    amount: Optional[float] = None
    type: Optional[str] = None
    remark: Optional[str] = None
    date: Optional[datetime] = None

    @field_validator("date", mode="before")
    @classmethod
    def force_utc_date(cls, v):
        return parse_datetime(v)


class TransactionCreate(TransactionFields):
    pass


class TransactionUpdate(TransactionFields):
    pass


class TransactionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user: Optional[int] = Field(default=None, validation_alias=AliasChoices("user_id", "user"))
    amount: Optional[float] = None
    type: Optional[str] = None
    remark: Optional[str] = None
    date: Optional[datetime] = None


class TransactionQuery(BaseModel):
    """
    Query string of GET /transactions. Blank values are treated as absent.
    """
    type: Optional[str] = None
    date1: Optional[datetime] = None
    date2: Optional[datetime] = None

    @field_validator("type", mode="before")
    @classmethod
    def blank_type(cls, v):
        return v or None

    @field_validator("date1", "date2", mode="before")
    @classmethod
    def parse_dates(cls, v):
        return parse_datetime(v)
