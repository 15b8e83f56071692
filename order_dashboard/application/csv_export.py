"""Serializes selected orders to CSV for the dashboard's export action."""

import csv
import io
from collections.abc import Iterable

from order_dashboard.application.order_mapper import order_to_csv_row
from order_dashboard.domain.order import Order

CSV_FILENAME = "orders.csv"
CSV_MEDIA_TYPE = "text/csv"


def build_orders_csv(orders: list[Order], selected_ids: Iterable[str]) -> str:
    """Return CSV text for the orders whose id is in ``selected_ids``.

    Rows keep the order of ``orders``. The header is the exported field names
    in model order. Fields containing a comma, quote or newline are quoted.
    An empty selection gives an empty string.
    """
    selected = set(selected_ids)
    rows = [order_to_csv_row(order) for order in orders if order.id in selected]
    if not rows:
        return ""

    buffer = io.StringIO()
    writer = csv.DictWriter(
        buffer,
        fieldnames=list(rows[0].keys()),
        quoting=csv.QUOTE_MINIMAL,
        lineterminator="\n",
    )
    writer.writeheader()
    writer.writerows(rows)
    return buffer.getvalue()
