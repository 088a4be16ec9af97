# blomsterlan/models/transactions.py

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import Field, StrictInt, field_validator

from blomsterlan.models.base import MAX_DB_INT, MIN_DB_INT, ApiModel, InputModel


class TransactionType(str, Enum):
    DELIVERY = "delivery"
    RETURN = "return"


class TransactionOut(ApiModel):
    id: int
    customer_id: int
    item_id: int
    quantity: int
    type: TransactionType
    note: Optional[str] = None
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # SQLite hands back naive datetimes; they were written as UTC.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class TransactionCreate(InputModel):
    customer_id: StrictInt = Field(..., ge=MIN_DB_INT, le=MAX_DB_INT)
    item_id: StrictInt = Field(..., ge=MIN_DB_INT, le=MAX_DB_INT)
    quantity: StrictInt = Field(..., gt=0, le=MAX_DB_INT)
    type: TransactionType
    note: Optional[str] = None
