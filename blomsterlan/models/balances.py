# blomsterlan/models/balances.py

from blomsterlan.models.base import ApiModel


class CustomerBalance(ApiModel):
    """Derived row: deliveries minus returns for one (customer, item) pair."""

    customer_id: int
    customer_name: str
    item_id: int
    item_name: str
    balance: int
