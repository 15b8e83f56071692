"""Tests for build_orders_csv."""

import csv
import io

from order_dashboard.application.csv_export import build_orders_csv
from order_dashboard.application.order_mapper import order_to_csv_row
from order_dashboard.domain.order import Order, OrderLineItem

HEADER = "id,number,date,totalPrice,totalQuantity,lineItems,paymentStatus,fulfillmentStatus"


def _make_order(i: int, **kwargs) -> Order:
    defaults = dict(
        id=f"gid://shopify/Order/{i}",
        number=f"#{1000 + i}",
        date="2025-02-01T10:00:00Z",
        total_price="99.99",
        total_quantity=3,
        line_items=[
            OrderLineItem(title="A", current_quantity=2),
            OrderLineItem(title="B", current_quantity=1),
        ],
        payment_status="PAID",
        fulfillment_status="UNFULFILLED",
    )
    return Order(**{**defaults, **kwargs})


def test_export_has_header_plus_one_line_per_selected_order() -> None:
    orders = [_make_order(i) for i in range(1, 6)]
    selected = [orders[1].id, orders[3].id, orders[4].id]

    content = build_orders_csv(orders, selected)

    lines = content.splitlines()
    assert len(lines) == 4
    assert lines[0] == HEADER
    assert lines[1].startswith("gid://shopify/Order/2,#1002,")


def test_export_keeps_accumulation_order() -> None:
    orders = [_make_order(i) for i in range(1, 4)]

    content = build_orders_csv(orders, [orders[2].id, orders[0].id])

    ids = [row["id"] for row in csv.DictReader(io.StringIO(content))]
    assert ids == [orders[0].id, orders[2].id]


def test_empty_selection_gives_empty_csv() -> None:
    assert build_orders_csv([_make_order(1)], []) == ""
    assert build_orders_csv([], ["gid://shopify/Order/1"]) == ""


def test_line_items_are_always_pipe_joined() -> None:
    order = _make_order(
        1,
        line_items=[
            OrderLineItem(title="A", current_quantity=2),
            OrderLineItem(title="B", current_quantity=1),
            OrderLineItem(title="C", current_quantity=4),
        ],
    )

    assert order_to_csv_row(order)["lineItems"] == "(2x) A|(1x) B|(4x) C"


def test_fields_with_commas_and_quotes_are_quoted() -> None:
    order = _make_order(
        1, line_items=[OrderLineItem(title='Shirt, "Blue"', current_quantity=1)]
    )

    content = build_orders_csv([order], [order.id])

    row = next(csv.DictReader(io.StringIO(content)))
    assert row["lineItems"] == '(1x) Shirt, "Blue"'
    assert content.splitlines()[1].count('"') == 6


def test_missing_values_export_as_blank() -> None:
    order = Order(id="gid://shopify/Order/7")

    content = build_orders_csv([order], [order.id])

    assert content.splitlines()[1] == "gid://shopify/Order/7,,,,,,,"


def test_line_items_with_missing_fields_export_blank() -> None:
    order = _make_order(1, line_items=[OrderLineItem(title="A"), OrderLineItem(current_quantity=2)])

    content = build_orders_csv([order], [order.id])

    row = next(csv.DictReader(io.StringIO(content)))
    assert row["lineItems"] == "A|(2x)"
    assert "None" not in content


def test_record_count_with_multiline_titles() -> None:
    """k selected orders give a header plus k records, even across physical lines."""
    orders = [
        _make_order(1, line_items=[OrderLineItem(title="Gift\nwrap", current_quantity=1)]),
        _make_order(2),
        _make_order(3),
    ]

    content = build_orders_csv(orders, [orders[0].id, orders[2].id])

    records = list(csv.reader(io.StringIO(content)))
    assert len(records) == 3
    assert records[0] == HEADER.split(",")
    assert records[1][5] == "(1x) Gift\nwrap"
    assert [record[0] for record in records[1:]] == [orders[0].id, orders[2].id]
