# blomsterlan/api/transactions.py

from typing import Any, List

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.engine import Engine

from blomsterlan.db import store
from blomsterlan.db.engine import get_engine
from blomsterlan.models.transactions import TransactionOut
from blomsterlan.validation import validate_transaction_create

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.get("", response_model=List[TransactionOut])
def list_transactions(engine: Engine = Depends(get_engine)) -> List[TransactionOut]:
    """
    Full log, newest first.
    """
    with engine.connect() as conn:
        return store.list_transactions(conn)


@router.get("/customer/{customer_id}", response_model=List[TransactionOut])
def list_customer_transactions(
    customer_id: int,
    engine: Engine = Depends(get_engine),
) -> List[TransactionOut]:
    """
    One customer's log, newest first. Unknown customers give an empty list.
    """
    with engine.connect() as conn:
        return store.list_transactions_by_customer(conn, customer_id)


@router.post("", response_model=TransactionOut, status_code=status.HTTP_201_CREATED)
def create_transaction(
    payload: Any = Body(...),
    engine: Engine = Depends(get_engine),
) -> TransactionOut:
    """
    Append a delivery or return. There is no update or delete for transactions.
    """
    data = validate_transaction_create(payload).unwrap()

    with engine.begin() as conn:
        return store.create_transaction(conn, data)
