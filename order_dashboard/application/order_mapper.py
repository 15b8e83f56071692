from order_dashboard.domain.order import Order, OrderLineItem

LINE_ITEM_SEPARATOR = ", "
CSV_LINE_ITEM_SEPARATOR = "|"


def _get_path(node: dict, *keys: str):
    """Walk nested dicts, returning None as soon as a key is missing."""
    value = node
    for key in keys:
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value


def _map_line_items(node: dict) -> list[OrderLineItem]:
    edges = _get_path(node, "lineItems", "edges") or []
    return [
        OrderLineItem(
            title=edge["node"].get("title"),
            current_quantity=edge["node"].get("currentQuantity"),
        )
        for edge in edges
        if isinstance(edge, dict) and isinstance(edge.get("node"), dict)
    ]


def normalize_order(node: dict) -> Order:
    """Map a raw GraphQL order node to the flat ``Order`` record.

    Missing monetary and status fields come through as ``None``; missing
    ``lineItems.edges`` becomes an empty list.
    """
    return Order(
        id=node["id"],
        number=node.get("name"),
        date=node.get("createdAt"),
        total_price=_get_path(node, "currentTotalPriceSet", "shopMoney", "amount"),
        total_quantity=node.get("currentSubtotalLineItemsQuantity"),
        line_items=_map_line_items(node),
        payment_status=node.get("displayFinancialStatus"),
        fulfillment_status=node.get("displayFulfillmentStatus"),
    )


def line_items_to_string(
    line_items: list[OrderLineItem], separator: str = LINE_ITEM_SEPARATOR
) -> str:
    """Flatten line items to ``"(2x) A, (1x) B"``.

    A missing quantity drops the ``(Nx)`` prefix; a missing title is blank.
    """
    return separator.join(_line_item_label(item) for item in line_items)


def _line_item_label(item: OrderLineItem) -> str:
    title = item.title or ""
    if item.current_quantity is None:
        return title
    return f"({item.current_quantity}x) {title}".rstrip()


def order_to_csv_row(order: Order) -> dict:
    """Return the order as a flat dict keyed by its exported field names.

    Line items are always pipe-joined so they stay one column.
    """
    row = order.model_dump(by_alias=True)
    row["lineItems"] = line_items_to_string(
        order.line_items, separator=CSV_LINE_ITEM_SEPARATOR
    )
    return row
