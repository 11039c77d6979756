"""
fintrack/services/transaction.py

Query and CRUD logic for Transaction records.

Implementation Notes:
 - build_transaction_filter() composes an optional type clause with an
   optional date clause. The two are always combined; an earlier version
   of this service dropped the date bounds whenever a type was given with
   two different dates.
 - None of these functions check ownership; the ledger is shared.
 - update_transaction_record() returns the record after the update.
"""

import logging

from sqlalchemy.orm import Session

from fintrack.models.transaction import Transaction
from fintrack.schemas.transaction import TransactionQuery, TransactionRead

logger = logging.getLogger(__name__)

DEFAULT_REMARK = "-"


def build_transaction_filter(query: TransactionQuery) -> list:
    """
    Translate a TransactionQuery into SQLAlchemy filter clauses.

      - type given           -> type == query.type
      - date1 == date2       -> date == date1
      - otherwise            -> date1 <= date < date2 (either bound may be open)
      - no dates at all      -> no date clause
    """
    clauses = []
    if query.type:
        clauses.append(Transaction.type == query.type)

    if query.date1 is not None and query.date1 == query.date2:
        clauses.append(Transaction.date == query.date1)
    else:
        if query.date1 is not None:
            clauses.append(Transaction.date >= query.date1)
        if query.date2 is not None:
            clauses.append(Transaction.date < query.date2)
    return clauses


def find_transactions(query: TransactionQuery, db: Session) -> list[Transaction]:
    """
    Return all Transactions matching the query, oldest first.
    """
    clauses = build_transaction_filter(query)
    return (
        db.query(Transaction)
        .filter(*clauses)
        .order_by(Transaction.date.asc(), Transaction.id.asc())
        .all()
    )


def get_transaction_by_id(transaction_id: int, db: Session) -> Transaction | None:
    return db.query(Transaction).filter(Transaction.id == transaction_id).first()


def _apply_fields(tx: Transaction, tx_data: dict) -> None:
    for key, value in tx_data.items():
        if key == "user":
            tx.user_id = value
        elif key == "remark":
            tx.remark = DEFAULT_REMARK if value is None else value
        else:
            setattr(tx, key, value)


def create_transaction_record(tx_data: dict, db: Session) -> Transaction:
    """
    Insert a new Transaction from the client's fields as given.
    """
    new_tx = Transaction(remark=DEFAULT_REMARK)
    _apply_fields(new_tx, tx_data)
    db.add(new_tx)
    db.commit()
    db.refresh(new_tx)
    logger.debug(f"Created {new_tx!r}")
    return new_tx


def update_transaction_record(transaction_id: int, tx_data: dict, db: Session) -> Transaction | None:
    """
    Apply a partial update. Only keys present in tx_data are touched.
    Returns the post-update record, or None if the id does not exist.
    """
    tx = get_transaction_by_id(transaction_id, db)
    if tx is None:
        return None

    _apply_fields(tx, tx_data)
    db.commit()
    db.refresh(tx)
    logger.debug(f"Updated {tx!r} with {sorted(tx_data)}")
    return tx


def delete_transaction_record(transaction_id: int, db: Session) -> TransactionRead | None:
    """
    Remove a Transaction and return a snapshot of what was removed,
    or None if there was nothing to remove.
    """
    tx = get_transaction_by_id(transaction_id, db)
    if tx is None:
        return None

    removed = TransactionRead.model_validate(tx)
    db.delete(tx)
    db.commit()
    logger.debug(f"Deleted transaction id={transaction_id}")
    return removed
