"""
fintrack/routers/transaction.py

Router for Transaction endpoints. These are deliberately thin: no
authentication, no ownership checks, and no error handling, so store
failures surface as the framework's default 500.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.orm import Session

from fintrack.database import get_db
from fintrack.schemas.transaction import (
    TransactionCreate,
    TransactionQuery,
    TransactionRead,
    TransactionUpdate,
)
from fintrack.services import transaction as tx_service

router = APIRouter(tags=["transactions"])


def transaction_query(
    type: Optional[str] = None,
    date1: Optional[str] = None,
    date2: Optional[str] = None,
) -> TransactionQuery:
    """
    Parse the query string into a TransactionQuery, reporting bad dates
    the same way as any other request validation error.
    """
    try:
        return TransactionQuery(type=type, date1=date1, date2=date2)
    except ValidationError as exc:
        errors = []
        for error in exc.errors():
            error = dict(error)
            error["loc"] = ("query",) + tuple(error.get("loc", ()))
            errors.append(error)
        raise RequestValidationError(errors)


@router.get("", response_model=List[TransactionRead])
def list_transactions(
    query: TransactionQuery = Depends(transaction_query),
    db: Session = Depends(get_db),
):
    """
    List transactions filtered by ?type= and the date bounds ?date1= / ?date2=.

    - date1 == date2 matches that exact date.
    - Different dates match the half-open range [date1, date2).
    - The type filter, when given, applies together with the date filter.
    """
    return tx_service.find_transactions(query, db)


@router.post("", response_model=TransactionRead)
def create_transaction(tx: TransactionCreate, db: Session = Depends(get_db)):
    """
    Store the posted transaction fields as a new record and return it.
    """
    tx_data = tx.model_dump(exclude_unset=True)
    return tx_service.create_transaction_record(tx_data, db)


@router.put("/{transaction_id}", response_model=Optional[TransactionRead])
def update_transaction(transaction_id: int, tx: TransactionUpdate, db: Session = Depends(get_db)):
    """
    Partially update a transaction and return it as it is after the update.
    Returns null when no transaction has that id.
    """
    tx_data = tx.model_dump(exclude_unset=True)
    return tx_service.update_transaction_record(transaction_id, tx_data, db)


@router.delete("/{transaction_id}", response_model=Optional[TransactionRead])
def delete_transaction(transaction_id: int, db: Session = Depends(get_db)):
    """
    Delete a transaction and return the removed record, or null if it
    didn't exist.
    """
    return tx_service.delete_transaction_record(transaction_id, db)
