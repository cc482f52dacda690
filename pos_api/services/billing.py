"""
Bill Read Helpers

Bills are read with a single LEFT JOIN of ``bill`` onto ``bill_items``,
which yields one flat row per item (or a single row with NULL item columns
for a bill without items). ``group_bill_rows`` folds those rows back into
nested bills; it touches no database and can be tested on plain dicts.
"""

from typing import Any, Iterable, Mapping

from sqlalchemy import Select, select

from pos_api.models import Bill, BillItem

BILL_FIELDS = ("bill_id", "table_name", "order_number", "bill_time", "bill_date", "total_amount")
ITEM_FIELDS = ("menu_name", "price", "quantity", "amount")


def bill_rows_query() -> Select:
    """
    Build the bill/item join, ordered by bill then item.

    Callers add their own ``where`` clause to narrow it down.
    """
    return (
        select(
            Bill.bill_id,
            Bill.table_name,
            Bill.order_number,
            Bill.bill_time,
            Bill.bill_date,
            Bill.total_amount,
            BillItem.menu_name,
            BillItem.price,
            BillItem.quantity,
            BillItem.amount,
        )
        .outerjoin(BillItem, Bill.bill_id == BillItem.bill_id)
        .order_by(Bill.bill_id, BillItem.item_id)
    )


def group_bill_rows(rows: Iterable[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """
    Group flat bill/item rows into nested bills.

    Args:
        rows: Mappings carrying the bill columns plus the item columns,
            where the item columns are ``None`` for a bill with no items.

    Returns:
        One dict per bill, in the order each bill_id was first seen, each
        with an ``items`` list (empty when the bill has no items).
    """
    bills: dict[Any, dict[str, Any]] = {}

    for row in rows:
        bill_id = row["bill_id"]

        bill = bills.get(bill_id)
        if bill is None:
            bill = {field: row[field] for field in BILL_FIELDS}
            bill["items"] = []
            bills[bill_id] = bill

        if row["menu_name"] is not None:
            bill["items"].append({field: row[field] for field in ITEM_FIELDS})

    return list(bills.values())
