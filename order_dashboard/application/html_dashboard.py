"""Renders the orders dashboard page: selectable table, load more and export."""

import html

from order_dashboard.application.dashboard_session import DashboardSession
from order_dashboard.application.order_mapper import line_items_to_string
from order_dashboard.domain.order import Order

HEADINGS = (
    "Order",
    "Date",
    "Total",
    "Items count",
    "Items",
    "Payment status",
    "Fulfillment status",
)

_CSS = """
  * { box-sizing: border-box; margin: 0; padding: 0; }
  body { font-family: system-ui, sans-serif; background: #f4f6f9; color: #1a1a2e; padding: 2rem; }
  .title-bar { display: flex; align-items: center; justify-content: space-between;
               margin-bottom: 1.5rem; }
  h1 { font-size: 1.6rem; }
  .meta { color: #666; font-size: 0.85rem; margin-bottom: 0.75rem; }

  .card { background: #fff; border-radius: 8px; padding: 1rem;
          box-shadow: 0 1px 4px rgba(0,0,0,.08); }

  table { width: 100%; border-collapse: collapse; }
  th { background: #4f46e5; color: #fff; text-align: left;
       padding: 0.65rem 1rem; font-size: 0.8rem; text-transform: uppercase;
       letter-spacing: .04em; }
  td { padding: 0.6rem 1rem; font-size: 0.88rem; border-bottom: 1px solid #f0f0f0; }
  tr:last-child td { border-bottom: none; }
  tr:hover td { background: #f9f9ff; }
  tr.selected td { background: #eef2ff; }

  .badge { display: inline-block; padding: 2px 8px; border-radius: 99px;
           font-size: 0.75rem; font-weight: 600; background: #e5e7eb; color: #374151; }
  .badge-paid   { background: #d1fae5; color: #065f46; }
  .badge-fulfilled { background: #d1fae5; color: #065f46; }
  .badge-unfulfilled { background: #fee2e2; color: #991b1b; }
  .badge-partially_fulfilled { background: #fef3c7; color: #92400e; }
  .badge-pending { background: #fef3c7; color: #92400e; }
  .badge-refunded { background: #e0e7ff; color: #3730a3; }

  .empty { text-align: center; padding: 3rem 1rem; color: #666; }
  .empty h2 { font-size: 1.1rem; color: #1a1a2e; margin-bottom: 0.5rem; }

  .actions { display: flex; justify-content: center; margin-top: 1rem; }
  button { cursor: pointer; border: none; border-radius: 6px; padding: 0.55rem 1.1rem;
           font-size: 0.88rem; font-weight: 600; background: #4f46e5; color: #fff; }
  button:hover { background: #4338ca; }
  button[hidden] { display: none; }
"""

_BADGE_CLASSES = {
    "paid",
    "fulfilled",
    "unfulfilled",
    "partially_fulfilled",
    "pending",
    "refunded",
}

# Keeps the export button and "select all" box in step with the row checkboxes
_SCRIPT = """
  (function () {
    const form = document.getElementById("orders-form");
    const exportButton = document.getElementById("export-button");
    const selectAll = form.querySelector("input[name=select_all]");
    const rows = Array.from(form.querySelectorAll("input[name=selected]"));
    function refresh() {
      const any = selectAll && selectAll.checked || rows.some((box) => box.checked);
      exportButton.hidden = !any;
    }
    if (selectAll) {
      selectAll.addEventListener("change", () => {
        rows.forEach((box) => { box.checked = selectAll.checked; });
        refresh();
      });
    }
    rows.forEach((box) => box.addEventListener("change", () => {
      if (!box.checked && selectAll) { selectAll.checked = false; }
      refresh();
    }));
  })();
"""


def _text(value: object) -> str:
    return "" if value is None else html.escape(str(value))


def _badge(text: str | None) -> str:
    if not text:
        return ""
    kind = text.lower()
    cls = f"badge badge-{kind}" if kind in _BADGE_CLASSES else "badge"
    return f'<span class="{cls}">{html.escape(text)}</span>'


def _order_row(order: Order, selected: bool) -> str:
    checked = " checked" if selected else ""
    row_class = ' class="selected"' if selected else ""
    return f"""<tr{row_class}>
          <td><input type="checkbox" name="selected" value="{html.escape(order.id)}"{checked}></td>
          <td><strong>{_text(order.number)}</strong></td>
          <td>{_text(order.date)}</td>
          <td>{_text(order.total_price)}</td>
          <td>{_text(order.total_quantity)}</td>
          <td>{html.escape(line_items_to_string(order.line_items))}</td>
          <td>{_badge(order.payment_status)}</td>
          <td>{_badge(order.fulfillment_status)}</td>
        </tr>"""


def _empty_state() -> str:
    return """
    <div class="empty">
      <h2>No order found</h2>
      <p>Looks like there are no orders yet</p>
    </div>"""


def _orders_table(session: DashboardSession) -> str:
    orders = session.accumulator.orders
    if not orders:
        return _empty_state()

    tracker = session.selection
    rows = "".join(_order_row(o, tracker.is_selected(o.id)) for o in orders)
    all_checked = " checked" if tracker.all_selected else ""
    headings = "".join(f"<th>{html.escape(h)}</th>" for h in HEADINGS)
    return f"""
    <table>
      <thead><tr>
        <th><input type="checkbox" name="select_all" value="true"{all_checked}></th>
        {headings}
      </tr></thead>
      <tbody>{rows}</tbody>
    </table>"""


def _selection_meta(session: DashboardSession) -> str:
    loaded = len(session.accumulator)
    noun = "order" if loaded == 1 else "orders"
    label = session.selection.selected_count_label
    selected = "All selected" if label == "All" else f"{label} selected"
    return f"{loaded} {noun} loaded · {selected}"


def build_dashboard_html(session: DashboardSession) -> str:
    """Return the complete dashboard page for ``session`` as a string.

    "Load more" is only rendered while the accumulator can load more, and the
    export button starts hidden unless something is already selected.
    """
    base = f"/app/sessions/{html.escape(session.id)}"
    export_hidden = "" if session.selection.selected_ids() else " hidden"
    load_more = (
        f"""
      <div class="actions">
        <button type="submit" formaction="{base}/load-more">Load more</button>
      </div>"""
        if session.accumulator.can_load_more
        else ""
    )
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Orders</title>
  <style>{_CSS}</style>
</head>
<body>
  <form id="orders-form" method="post" action="{base}/selection">
    <div class="title-bar">
      <h1>Orders</h1>
      <button type="submit" id="export-button" formaction="{base}/export"{export_hidden}>Export</button>
    </div>
    <p class="meta">{_selection_meta(session)}</p>
    <div class="card">
      {_orders_table(session)}
      {load_more}
    </div>
  </form>
  <script>{_SCRIPT}</script>
</body>
</html>"""
