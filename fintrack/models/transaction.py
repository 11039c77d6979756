"""
fintrack/models/transaction.py

A single income/expense record. 'type' is free text (the clients use
"income" and "expense"), and nothing ties the sign of 'amount' to it.
"""

from sqlalchemy import Column, Integer, Float, Text

from fintrack.database import Base, UTCDateTime


class Transaction(Base):
    """
    One financial event. 'user_id' is exposed to clients as 'user'; it is
    write-only metadata that no handler populates or checks against the
    users table, so it carries no foreign-key constraint.
    """

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, index=True)

    user_id = Column(Integer, nullable=True, index=True, doc="Owning user id (not enforced).")

    amount = Column(Float, nullable=True)

    # Free text of any length
    type = Column(Text, nullable=True, doc="e.g. 'income' or 'expense'")

    remark = Column(Text, nullable=False, default="-")

    date = Column(
        UTCDateTime,
        nullable=True,
        index=True,
        doc="When the transaction occurred (UTC)."
    )

    def __repr__(self) -> str:
        return (
            f"<Transaction(id={self.id}, type={self.type}, amount={self.amount}, "
            f"date={self.date})>"
        )
