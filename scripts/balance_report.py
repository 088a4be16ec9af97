# scripts/balance_report.py
"""
Print outstanding balances from a running API, grouped by customer or item.

    python -m scripts.balance_report --url http://localhost:8000
    python -m scripts.balance_report --by item --search hink
    python -m scripts.balance_report --mailto 3
"""

import argparse
import logging
import sys

from blomsterlan.client import ApiError, BlomsterLanClient
from blomsterlan.config import get_settings
from blomsterlan.logging_config import setup_logging
from blomsterlan.reports import (
    balance_totals,
    compose_balance_email,
    describe_balance,
    filter_balances,
    group_by_customer,
    group_by_item,
)

logger = logging.getLogger(__name__)


def print_report(client: BlomsterLanClient, by: str = "customer", search: str = "") -> None:
    balances = filter_balances(client.balances.list(), search)
    totals = balance_totals(balances)

    print(f"Totalt ute:      {totals.total_out} st")
    print(f"Totalt tillgodo: {totals.total_credit} st")
    print(f"Aktiva kunder:   {totals.active_customers}")
    print()

    if by == "item":
        for group in group_by_item(balances).values():
            print(group.item_name)
            for b in group.balances:
                print(f"  {b.customer_name}: {describe_balance(b.balance)}")
    elif by == "customer":
        for group in group_by_customer(balances).values():
            print(group.customer_name)
            for b in group.balances:
                print(f"  {b.item_name}: {describe_balance(b.balance)}")
    else:
        for b in balances:
            print(f"{b.customer_name}\t{b.item_name}\t{b.balance}")


def print_mailto(client: BlomsterLanClient, customer_id: int) -> int:
    customer = client.customers.get(customer_id)
    link = compose_balance_email(customer, client.balances.for_customer(customer_id))
    if link is None:
        logger.warning("Customer %s has no outstanding balances", customer_id)
        return 1
    print(link)
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Print BlomsterLån balances")
    parser.add_argument("--url", default="http://localhost:8000", help="API server root")
    parser.add_argument("--by", choices=["customer", "item", "all"], default="customer")
    parser.add_argument("--search", default="", help="filter on customer or item name")
    parser.add_argument("--mailto", type=int, metavar="CUSTOMER_ID", help="print a mailto: link instead")
    args = parser.parse_args(argv)

    setup_logging(get_settings().log_level)

    client = BlomsterLanClient(args.url)
    try:
        if args.mailto is not None:
            return print_mailto(client, args.mailto)
        print_report(client, by=args.by, search=args.search)
        return 0
    except ApiError as exc:
        logger.error("API request failed: %s", exc)
        return 1
    finally:
        client.close()


if __name__ == "__main__":
    sys.exit(main())
