# blomsterlan/db/schema.py

from sqlalchemy import (
    MetaData, Table, Column, Integer, String,
    DateTime, ForeignKey, CheckConstraint, Text, func
)

metadata = MetaData()

# Present in the schema but not read or written by any route.
users = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("username", String, nullable=False, unique=True),
    Column("password", String, nullable=False),
)

customers = Table(
    "customers",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String, nullable=False),
    Column("company", String, nullable=True),
    Column("phone", String, nullable=True),
    Column("email", String, nullable=True),
    Column("address", Text, nullable=True),
)

items = Table(
    "items",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String, nullable=False),
    Column("description", Text, nullable=True),
    Column("category", String, nullable=True),
)

# Append-only log. The foreign keys are not enforced on delete (SQLite
# default), so deleting a customer or item leaves its transactions in place.
transactions = Table(
    "transactions",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("customer_id", Integer, ForeignKey("customers.id"), nullable=False),
    Column("item_id", Integer, ForeignKey("items.id"), nullable=False),
    Column("quantity", Integer, nullable=False),
    Column("type", String(16), nullable=False),
    Column("note", Text),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    CheckConstraint("quantity > 0", name="ck_transactions_quantity_pos"),
    CheckConstraint("type IN ('delivery', 'return')", name="ck_transactions_type"),
)
