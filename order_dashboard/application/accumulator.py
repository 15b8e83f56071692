from loguru import logger

from order_dashboard.domain.order import Order, OrdersPage


class OrderAccumulator:
    """Append-only store of every page loaded in one dashboard session.

    Orders keep pagination order. Nothing is ever removed; duplicates only
    appear if the API reorders orders between requests.
    """

    def __init__(self) -> None:
        self._orders: list[Order] = []
        self._cursor: str | None = None
        self._is_last_page = True

    @property
    def orders(self) -> list[Order]:
        return list(self._orders)

    @property
    def cursor(self) -> str | None:
        return self._cursor

    @property
    def is_last_page(self) -> bool:
        return self._is_last_page

    @property
    def can_load_more(self) -> bool:
        return bool(self._orders) and not self._is_last_page

    def ids(self) -> list[str]:
        return [order.id for order in self._orders]

    def __len__(self) -> int:
        return len(self._orders)

    def initialize(self, first_page: OrdersPage) -> None:
        self._orders = list(first_page.orders)
        self._cursor = first_page.cursor
        self._is_last_page = not first_page.has_next_page

    def append_page(self, page: OrdersPage) -> None:
        self._orders.extend(page.orders)
        self._cursor = page.cursor
        self._is_last_page = not page.has_next_page
        logger.debug(
            f"Appended {len(page.orders)} order(s), {len(self._orders)} loaded, "
            f"last page: {self._is_last_page}"
        )
