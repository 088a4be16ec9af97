# blomsterlan/api/items.py

from typing import Any, List

from fastapi import APIRouter, Body, Depends, Response, status
from sqlalchemy.engine import Engine

from blomsterlan.db import store
from blomsterlan.db.engine import get_engine
from blomsterlan.errors import NotFoundError
from blomsterlan.models.items import ItemOut
from blomsterlan.validation import validate_item_create, validate_item_update

router = APIRouter(prefix="/items", tags=["items"])

NOT_FOUND = "Artikel hittades inte"


@router.get("", response_model=List[ItemOut])
def list_items(engine: Engine = Depends(get_engine)) -> List[ItemOut]:
    with engine.connect() as conn:
        return store.list_items(conn)


@router.get("/{item_id}", response_model=ItemOut)
def get_item(item_id: int, engine: Engine = Depends(get_engine)) -> ItemOut:
    with engine.connect() as conn:
        item = store.get_item(conn, item_id)

    if item is None:
        raise NotFoundError(NOT_FOUND)

    return item


@router.post("", response_model=ItemOut, status_code=status.HTTP_201_CREATED)
def create_item(
    payload: Any = Body(...),
    engine: Engine = Depends(get_engine),
) -> ItemOut:
    data = validate_item_create(payload).unwrap()

    with engine.begin() as conn:
        return store.create_item(conn, data)


@router.patch("/{item_id}", response_model=ItemOut)
def update_item(
    item_id: int,
    payload: Any = Body(...),
    engine: Engine = Depends(get_engine),
) -> ItemOut:
    data = validate_item_update(payload).unwrap()

    with engine.begin() as conn:
        item = store.update_item(conn, item_id, data)

    if item is None:
        raise NotFoundError(NOT_FOUND)

    return item


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_item(item_id: int, engine: Engine = Depends(get_engine)) -> Response:
    with engine.begin() as conn:
        store.delete_item(conn, item_id)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
