# blomsterlan/db/store.py
"""
Entity store: customers, items and the append-only transaction log.

Every function takes an open connection; callers own the transaction scope
(the API uses ``engine.begin()`` per request). Inputs are validated models
from blomsterlan.models, so only storage concerns are handled here.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel
from sqlalchemy import Table, select
from sqlalchemy.engine import Connection

from blomsterlan.db.schema import customers, items, transactions
from blomsterlan.errors import FieldError, ReferentialIntegrityError
from blomsterlan.models.customers import CustomerCreate, CustomerOut, CustomerUpdate
from blomsterlan.models.items import ItemCreate, ItemOut, ItemUpdate
from blomsterlan.models.base import fits_db_int
from blomsterlan.models.transactions import TransactionCreate, TransactionOut

logger = logging.getLogger(__name__)


# ---- Helpers shared by customers and items ----

def _list(conn: Connection, table: Table) -> list:
    stmt = select(table).order_by(table.c.id)
    return conn.execute(stmt).mappings().all()


def _get(conn: Connection, table: Table, record_id: int):
    # Ids outside SQLite's INTEGER range cannot exist.
    if not fits_db_int(record_id):
        return None
    stmt = select(table).where(table.c.id == record_id)
    return conn.execute(stmt).mappings().first()


def _create(conn: Connection, table: Table, data: BaseModel):
    values = data.model_dump()
    stmt = table.insert().values(**values).returning(*table.c)
    row = conn.execute(stmt).mappings().one()
    logger.info("Created %s id=%s", table.name, row["id"])
    return row


def _update(conn: Connection, table: Table, record_id: int, data: BaseModel):
    # Only the fields present in the request body are written.
    values = data.model_dump(exclude_unset=True)
    if not values or not fits_db_int(record_id):
        return _get(conn, table, record_id)

    stmt = (
        table.update()
        .where(table.c.id == record_id)
        .values(**values)
        .returning(*table.c)
    )
    row = conn.execute(stmt).mappings().first()
    if row is not None:
        logger.info("Updated %s id=%s fields=%s", table.name, record_id, sorted(values))
    return row


def _delete(conn: Connection, table: Table, record_id: int) -> bool:
    if not fits_db_int(record_id):
        logger.info("Delete of missing %s id=%s ignored", table.name, record_id)
        return True

    result = conn.execute(table.delete().where(table.c.id == record_id))
    if result.rowcount:
        logger.info("Deleted %s id=%s", table.name, record_id)
    else:
        logger.info("Delete of missing %s id=%s ignored", table.name, record_id)
    return True


# ---- Customers ----

def list_customers(conn: Connection) -> List[CustomerOut]:
    return [CustomerOut.model_validate(dict(row)) for row in _list(conn, customers)]


def get_customer(conn: Connection, customer_id: int) -> Optional[CustomerOut]:
    row = _get(conn, customers, customer_id)
    return CustomerOut.model_validate(dict(row)) if row is not None else None


def create_customer(conn: Connection, data: CustomerCreate) -> CustomerOut:
    return CustomerOut.model_validate(dict(_create(conn, customers, data)))


def update_customer(
    conn: Connection, customer_id: int, data: CustomerUpdate
) -> Optional[CustomerOut]:
    row = _update(conn, customers, customer_id, data)
    return CustomerOut.model_validate(dict(row)) if row is not None else None


def delete_customer(conn: Connection, customer_id: int) -> bool:
    """
    Always succeeds. Transactions referring to the customer are kept.
    """
    return _delete(conn, customers, customer_id)


# ---- Items ----

def list_items(conn: Connection) -> List[ItemOut]:
    return [ItemOut.model_validate(dict(row)) for row in _list(conn, items)]


def get_item(conn: Connection, item_id: int) -> Optional[ItemOut]:
    row = _get(conn, items, item_id)
    return ItemOut.model_validate(dict(row)) if row is not None else None


def create_item(conn: Connection, data: ItemCreate) -> ItemOut:
    return ItemOut.model_validate(dict(_create(conn, items, data)))


def update_item(conn: Connection, item_id: int, data: ItemUpdate) -> Optional[ItemOut]:
    row = _update(conn, items, item_id, data)
    return ItemOut.model_validate(dict(row)) if row is not None else None


def delete_item(conn: Connection, item_id: int) -> bool:
    return _delete(conn, items, item_id)


# ---- Transactions (append-only) ----

def _transactions_newest_first():
    return select(transactions).order_by(
        transactions.c.created_at.desc(),
        transactions.c.id.desc(),
    )


def list_transactions(conn: Connection) -> List[TransactionOut]:
    rows = conn.execute(_transactions_newest_first()).mappings().all()
    return [TransactionOut.model_validate(dict(row)) for row in rows]


def list_transactions_by_customer(conn: Connection, customer_id: int) -> List[TransactionOut]:
    if not fits_db_int(customer_id):
        return []
    stmt = _transactions_newest_first().where(transactions.c.customer_id == customer_id)
    rows = conn.execute(stmt).mappings().all()
    return [TransactionOut.model_validate(dict(row)) for row in rows]


def _check_references(conn: Connection, data: TransactionCreate) -> None:
    problems: List[FieldError] = []

    if _get(conn, customers, data.customer_id) is None:
        problems.append(
            FieldError("customerId", f"Kund {data.customer_id} finns inte")
        )
    if _get(conn, items, data.item_id) is None:
        problems.append(
            FieldError("itemId", f"Artikel {data.item_id} finns inte")
        )

    if problems:
        logger.warning(
            "Rejected transaction for customer_id=%s item_id=%s: unknown reference",
            data.customer_id,
            data.item_id,
        )
        raise ReferentialIntegrityError(problems)


def create_transaction(
    conn: Connection,
    data: TransactionCreate,
    now: Optional[datetime] = None,
) -> TransactionOut:
    """
    Append one delivery or return to the log.

    created_at is stamped here (UTC) and never taken from the caller; ``now``
    exists so tests can pin the clock.
    """
    _check_references(conn, data)

    values = data.model_dump()
    values["type"] = data.type.value
    values["created_at"] = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)

    stmt = transactions.insert().values(**values).returning(*transactions.c)
    row = conn.execute(stmt).mappings().one()

    logger.info(
        "Recorded %s of %s x item_id=%s for customer_id=%s (transaction id=%s)",
        values["type"],
        data.quantity,
        data.item_id,
        data.customer_id,
        row["id"],
    )
    return TransactionOut.model_validate(dict(row))
