"""Tests for OrderAccumulator and SelectionTracker."""

import pytest

from order_dashboard.application.accumulator import OrderAccumulator
from order_dashboard.application.selection_tracker import SelectionTracker
from order_dashboard.domain.order import Order, OrdersPage
from order_dashboard.domain.selection import (
    AllSelected,
    ExplicitSelection,
    UnknownOrderError,
)


def _page(*ids: int, has_next_page: bool | None = True, cursor: str | None = "c") -> OrdersPage:
    return OrdersPage(
        orders=[Order(id=f"gid://shopify/Order/{i}", number=f"#{1000 + i}") for i in ids],
        cursor=cursor,
        has_next_page=has_next_page,
    )


def _accumulator(*ids: int, has_next_page: bool | None = True) -> OrderAccumulator:
    accumulator = OrderAccumulator()
    accumulator.initialize(_page(*ids, has_next_page=has_next_page))
    return accumulator


# ---------------------------------------------------------------------------
# Accumulator
# ---------------------------------------------------------------------------


def test_initialize_sets_state_from_first_page() -> None:
    accumulator = OrderAccumulator()
    accumulator.initialize(_page(1, 2, cursor="cursor-1"))

    assert len(accumulator) == 2
    assert accumulator.cursor == "cursor-1"
    assert accumulator.is_last_page is False
    assert accumulator.can_load_more is True


def test_append_page_keeps_fetch_order() -> None:
    """Count after N pages is the sum of page counts, in fetch order."""
    accumulator = _accumulator(1, 2)
    accumulator.append_page(_page(3, 4, 5, cursor="cursor-2"))
    accumulator.append_page(_page(6, cursor="cursor-3"))

    assert len(accumulator) == 6
    assert accumulator.ids() == [f"gid://shopify/Order/{i}" for i in range(1, 7)]
    assert accumulator.cursor == "cursor-3"


def test_append_page_does_not_deduplicate() -> None:
    accumulator = _accumulator(1)
    accumulator.append_page(_page(1))

    assert accumulator.ids() == ["gid://shopify/Order/1", "gid://shopify/Order/1"]


def test_last_page_stops_load_more() -> None:
    accumulator = _accumulator(1)
    accumulator.append_page(_page(2, has_next_page=False, cursor=None))

    assert accumulator.is_last_page is True
    assert accumulator.can_load_more is False


def test_missing_has_next_page_counts_as_last_page() -> None:
    accumulator = _accumulator(1, has_next_page=None)

    assert accumulator.can_load_more is False


def test_empty_accumulator_cannot_load_more() -> None:
    accumulator = OrderAccumulator()
    accumulator.initialize(_page(has_next_page=True))

    assert accumulator.can_load_more is False


def test_orders_returns_a_copy() -> None:
    accumulator = _accumulator(1)
    accumulator.orders.clear()

    assert len(accumulator) == 1


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------


def test_select_and_deselect_individual_orders() -> None:
    tracker = SelectionTracker(_accumulator(1, 2, 3))

    tracker.select("gid://shopify/Order/3")
    tracker.select("gid://shopify/Order/1")
    tracker.deselect("gid://shopify/Order/3")

    assert tracker.selected_ids() == ["gid://shopify/Order/1"]
    assert tracker.selected_count_label == "1"


def test_toggle() -> None:
    tracker = SelectionTracker(_accumulator(1))

    tracker.toggle("gid://shopify/Order/1")
    assert tracker.is_selected("gid://shopify/Order/1")
    tracker.toggle("gid://shopify/Order/1")
    assert not tracker.is_selected("gid://shopify/Order/1")


def test_selecting_unloaded_order_raises() -> None:
    tracker = SelectionTracker(_accumulator(1))

    with pytest.raises(UnknownOrderError):
        tracker.select("gid://shopify/Order/99")

    assert tracker.selection == ExplicitSelection()


def test_select_all_covers_orders_loaded_later() -> None:
    accumulator = _accumulator(1, 2)
    tracker = SelectionTracker(accumulator)

    tracker.select_all()
    accumulator.append_page(_page(3))

    assert tracker.selection == AllSelected()
    assert tracker.selected_ids() == accumulator.ids()
    assert tracker.is_selected("gid://shopify/Order/3")
    assert tracker.selected_count_label == "All"


def test_deselect_from_all_becomes_explicit() -> None:
    tracker = SelectionTracker(_accumulator(1, 2, 3))
    tracker.select_all()

    tracker.deselect("gid://shopify/Order/2")

    assert tracker.selection == ExplicitSelection(
        ids=frozenset({"gid://shopify/Order/1", "gid://shopify/Order/3"})
    )


def test_replace_drops_unloaded_ids() -> None:
    """Selection stays a subset of the accumulated ids."""
    accumulator = _accumulator(1, 2)
    tracker = SelectionTracker(accumulator)

    tracker.replace(["gid://shopify/Order/2", "gid://shopify/Order/42"])

    assert tracker.selected_ids() == ["gid://shopify/Order/2"]
    assert set(tracker.selected_ids()) <= set(accumulator.ids())


def test_replace_with_select_all() -> None:
    tracker = SelectionTracker(_accumulator(1, 2))

    tracker.replace([], all_selected=True)

    assert tracker.all_selected


def test_clear() -> None:
    tracker = SelectionTracker(_accumulator(1, 2))
    tracker.select_all()

    tracker.clear()

    assert tracker.selected_ids() == []
    assert tracker.selected_count_label == "0"
