# blomsterlan/api/customers.py

from typing import Any, List

from fastapi import APIRouter, Body, Depends, Response, status
from sqlalchemy.engine import Engine

from blomsterlan.db import store
from blomsterlan.db.engine import get_engine
from blomsterlan.errors import NotFoundError
from blomsterlan.models.customers import CustomerOut
from blomsterlan.validation import validate_customer_create, validate_customer_update

router = APIRouter(prefix="/customers", tags=["customers"])

NOT_FOUND = "Kund hittades inte"


@router.get("", response_model=List[CustomerOut])
def list_customers(engine: Engine = Depends(get_engine)) -> List[CustomerOut]:
    """
    Return all customers.
    """
    with engine.connect() as conn:
        return store.list_customers(conn)


@router.get("/{customer_id}", response_model=CustomerOut)
def get_customer(customer_id: int, engine: Engine = Depends(get_engine)) -> CustomerOut:
    with engine.connect() as conn:
        customer = store.get_customer(conn, customer_id)

    if customer is None:
        raise NotFoundError(NOT_FOUND)

    return customer


@router.post("", response_model=CustomerOut, status_code=status.HTTP_201_CREATED)
def create_customer(
    payload: Any = Body(...),
    engine: Engine = Depends(get_engine),
) -> CustomerOut:
    data = validate_customer_create(payload).unwrap()

    with engine.begin() as conn:
        return store.create_customer(conn, data)


@router.patch("/{customer_id}", response_model=CustomerOut)
def update_customer(
    customer_id: int,
    payload: Any = Body(...),
    engine: Engine = Depends(get_engine),
) -> CustomerOut:
    """
    Partial update: fields missing from the body are left untouched.
    """
    data = validate_customer_update(payload).unwrap()

    with engine.begin() as conn:
        customer = store.update_customer(conn, customer_id, data)

    if customer is None:
        raise NotFoundError(NOT_FOUND)

    return customer


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_customer(customer_id: int, engine: Engine = Depends(get_engine)) -> Response:
    """
    Idempotent: 204 whether or not the customer existed. Its transactions stay in the log.
    """
    with engine.begin() as conn:
        store.delete_customer(conn, customer_id)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
