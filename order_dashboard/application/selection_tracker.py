from collections.abc import Iterable

from loguru import logger

from order_dashboard.application.accumulator import OrderAccumulator
from order_dashboard.domain.selection import (
    AllSelected,
    ExplicitSelection,
    Selection,
    UnknownOrderError,
)


class SelectionTracker:
    """Tracks which accumulated orders are selected.

    ``AllSelected`` is resolved against the accumulator at query time, so
    orders loaded after "select all" count as selected too.
    """

    def __init__(self, accumulator: OrderAccumulator) -> None:
        self._accumulator = accumulator
        self._selection: Selection = ExplicitSelection()

    @property
    def selection(self) -> Selection:
        return self._selection

    @property
    def all_selected(self) -> bool:
        return isinstance(self._selection, AllSelected)

    def selected_ids(self) -> list[str]:
        """Return selected ids in accumulation order."""
        ids = self._accumulator.ids()
        if isinstance(self._selection, AllSelected):
            return ids
        return [order_id for order_id in ids if order_id in self._selection.ids]

    def is_selected(self, order_id: str) -> bool:
        if isinstance(self._selection, AllSelected):
            return order_id in self._accumulator.ids()
        return order_id in self._selection.ids

    @property
    def selected_count_label(self) -> str:
        if self.all_selected:
            return "All"
        return str(len(self.selected_ids()))

    def select(self, order_id: str) -> None:
        self._require_loaded(order_id)
        if isinstance(self._selection, AllSelected):
            return
        self._selection = ExplicitSelection(ids=self._selection.ids | {order_id})

    def deselect(self, order_id: str) -> None:
        self._require_loaded(order_id)
        if isinstance(self._selection, AllSelected):
            remaining = set(self._accumulator.ids()) - {order_id}
            self._selection = ExplicitSelection(ids=frozenset(remaining))
            return
        self._selection = ExplicitSelection(ids=self._selection.ids - {order_id})

    def toggle(self, order_id: str) -> None:
        if self.is_selected(order_id):
            self.deselect(order_id)
        else:
            self.select(order_id)

    def select_all(self) -> None:
        self._selection = AllSelected()

    def clear(self) -> None:
        self._selection = ExplicitSelection()

    def replace(self, order_ids: Iterable[str], all_selected: bool = False) -> None:
        """Replace the selection with what a submitted form reports.

        Ids that are not loaded in this session are dropped.
        """
        if all_selected:
            self.select_all()
            return

        loaded = set(self._accumulator.ids())
        requested = set(order_ids)
        if unknown := requested - loaded:
            logger.warning(f"Ignoring selection of {len(unknown)} order(s) not loaded")
        self._selection = ExplicitSelection(ids=frozenset(requested & loaded))

    def _require_loaded(self, order_id: str) -> None:
        if order_id not in self._accumulator.ids():
            raise UnknownOrderError(f"Order {order_id} is not loaded")
