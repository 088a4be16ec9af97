# blomsterlan/db/balances.py
"""
Balances derived from the transaction log.

balance(customer, item) = sum(delivery quantities) - sum(return quantities)

Nothing is stored: every call aggregates the full log again. Transactions
whose customer or item has been deleted fall out through the inner joins.
"""

from typing import List

from sqlalchemy import case, func, select
from sqlalchemy.engine import Connection

from blomsterlan.db.schema import customers, items, transactions
from blomsterlan.models.balances import CustomerBalance
from blomsterlan.models.base import fits_db_int
from blomsterlan.models.transactions import TransactionType

# +quantity for deliveries, -quantity for returns
signed_quantity = case(
    (transactions.c.type == TransactionType.DELIVERY.value, transactions.c.quantity),
    else_=-transactions.c.quantity,
)

balance_expr = func.sum(signed_quantity)


def _balances_query():
    return (
        select(
            transactions.c.customer_id,
            customers.c.name.label("customer_name"),
            transactions.c.item_id,
            items.c.name.label("item_name"),
            balance_expr.label("balance"),
        )
        .select_from(
            transactions
            .join(customers, transactions.c.customer_id == customers.c.id)
            .join(items, transactions.c.item_id == items.c.id)
        )
        .group_by(
            transactions.c.customer_id,
            customers.c.name,
            transactions.c.item_id,
            items.c.name,
        )
    )


def all_balances(conn: Connection) -> List[CustomerBalance]:
    """
    Non-zero balances for every customer, ordered by customer name then item name.
    """
    stmt = (
        _balances_query()
        .having(balance_expr != 0)
        .order_by(customers.c.name, items.c.name)
    )
    rows = conn.execute(stmt).mappings().all()
    return [CustomerBalance.model_validate(dict(row)) for row in rows]


def balances_for_customer(conn: Connection, customer_id: int) -> List[CustomerBalance]:
    """
    Every item the customer has a transaction for, zero balances included,
    ordered by item name.
    """
    if not fits_db_int(customer_id):
        return []
    stmt = (
        _balances_query()
        .where(transactions.c.customer_id == customer_id)
        .order_by(items.c.name)
    )
    rows = conn.execute(stmt).mappings().all()
    return [CustomerBalance.model_validate(dict(row)) for row in rows]
