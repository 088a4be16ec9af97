# blomsterlan/api/balances.py

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.engine import Engine

from blomsterlan.db.balances import all_balances, balances_for_customer
from blomsterlan.db.engine import get_engine
from blomsterlan.models.balances import CustomerBalance

router = APIRouter(prefix="/balances", tags=["balances"])


@router.get("", response_model=List[CustomerBalance])
def list_balances(engine: Engine = Depends(get_engine)) -> List[CustomerBalance]:
    """
    Every (customer, item) pair with a non-zero balance.
    """
    with engine.connect() as conn:
        return all_balances(conn)


@router.get("/{customer_id}", response_model=List[CustomerBalance])
def get_customer_balances(
    customer_id: int,
    engine: Engine = Depends(get_engine),
) -> List[CustomerBalance]:
    """
    All of one customer's balances, including those that have returned to zero.
    """
    with engine.connect() as conn:
        return balances_for_customer(conn, customer_id)
