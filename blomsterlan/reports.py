# blomsterlan/reports.py
"""
Summaries built from API data: dashboard figures, balance search and
grouping, and the balance e-mail sent to a customer.

All functions are pure; they take lists fetched with blomsterlan.client.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence
from urllib.parse import quote

from blomsterlan.models.balances import CustomerBalance
from blomsterlan.models.customers import CustomerOut
from blomsterlan.models.items import ItemOut
from blomsterlan.models.transactions import TransactionOut, TransactionType

UNKNOWN_NAME = "Okänd"
EMAIL_SUBJECT = "Aktuellt saldo - BlomsterLån"
RECENT_LIMIT = 5


@dataclass
class DashboardSummary:
    customer_count: int
    item_count: int
    delivery_count: int
    return_count: int
    total_out: int
    recent_transactions: List[TransactionOut]
    top_balances: List[CustomerBalance]


@dataclass
class CustomerGroup:
    customer_id: int
    customer_name: str
    balances: List[CustomerBalance] = field(default_factory=list)


@dataclass
class ItemGroup:
    item_id: int
    item_name: str
    balances: List[CustomerBalance] = field(default_factory=list)


@dataclass
class BalanceTotals:
    total_out: int
    total_credit: int
    active_customers: int


def balance_totals(balances: Sequence[CustomerBalance]) -> BalanceTotals:
    """
    Units out (positive balances), units owed back to customers (negative
    balances, as a positive number), and how many customers appear.
    """
    return BalanceTotals(
        total_out=sum(b.balance for b in balances if b.balance > 0),
        total_credit=sum(-b.balance for b in balances if b.balance < 0),
        active_customers=len({b.customer_id for b in balances}),
    )


def dashboard_summary(
    customers: Sequence[CustomerOut],
    items: Sequence[ItemOut],
    transactions: Sequence[TransactionOut],
    balances: Sequence[CustomerBalance],
) -> DashboardSummary:
    # transactions arrive newest first from the API
    return DashboardSummary(
        customer_count=len(customers),
        item_count=len(items),
        delivery_count=sum(1 for t in transactions if t.type == TransactionType.DELIVERY),
        return_count=sum(1 for t in transactions if t.type == TransactionType.RETURN),
        total_out=balance_totals(balances).total_out,
        recent_transactions=list(transactions[:RECENT_LIMIT]),
        top_balances=list(balances[:RECENT_LIMIT]),
    )


def filter_balances(balances: Sequence[CustomerBalance], search: str) -> List[CustomerBalance]:
    """Case-insensitive substring match on customer or item name."""
    needle = search.lower()
    return [
        b for b in balances
        if needle in b.customer_name.lower() or needle in b.item_name.lower()
    ]


def filter_transactions(
    transactions: Sequence[TransactionOut],
    customers: Sequence[CustomerOut],
    items: Sequence[ItemOut],
    search: str,
) -> List[TransactionOut]:
    """
    Same search as filter_balances, resolving names from the id lists.
    Deleted customers and items match as "Okänd".
    """
    customer_names = {c.id: c.name for c in customers}
    item_names = {i.id: i.name for i in items}
    needle = search.lower()

    result = []
    for t in transactions:
        customer_name = customer_names.get(t.customer_id, UNKNOWN_NAME).lower()
        item_name = item_names.get(t.item_id, UNKNOWN_NAME).lower()
        if needle in customer_name or needle in item_name:
            result.append(t)
    return result


def group_by_customer(balances: Sequence[CustomerBalance]) -> Dict[int, CustomerGroup]:
    groups: Dict[int, CustomerGroup] = {}
    for b in balances:
        if b.customer_id not in groups:
            groups[b.customer_id] = CustomerGroup(b.customer_id, b.customer_name)
        groups[b.customer_id].balances.append(b)
    return groups


def group_by_item(balances: Sequence[CustomerBalance]) -> Dict[int, ItemGroup]:
    groups: Dict[int, ItemGroup] = {}
    for b in balances:
        if b.item_id not in groups:
            groups[b.item_id] = ItemGroup(b.item_id, b.item_name)
        groups[b.item_id].balances.append(b)
    return groups


def describe_balance(balance: int) -> str:
    if balance > 0:
        return f"{balance} ute"
    return f"{abs(balance)} tillgodo"


def compose_balance_email(
    customer: CustomerOut,
    balances: Sequence[CustomerBalance],
) -> Optional[str]:
    """
    Build a mailto: link listing the customer's balances.

    Only non-zero rows belonging to ``customer`` are used; returns None when
    there are none.
    """
    rows = [b for b in balances if b.customer_id == customer.id and b.balance != 0]
    if not rows:
        return None

    lines = [f"Hej {customer.name},", "", "Här kommer ditt aktuella saldo för lånade artiklar:", ""]
    lines.extend(f"{b.item_name}: {b.balance} st" for b in rows)
    lines.extend(["", "Vänliga hälsningar,", "BlomsterLån"])
    body = "\n".join(lines)

    return (
        f"mailto:{customer.email or ''}"
        f"?subject={quote(EMAIL_SUBJECT, safe='')}"
        f"&body={quote(body, safe='')}"
    )
