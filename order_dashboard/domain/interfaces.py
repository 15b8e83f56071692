from typing import Protocol

from .order import OrdersPage


class IOrderRepository(Protocol):
    def fetch_page(self, page_size: int, after: str | None = None) -> OrdersPage: ...


class IOrderService(Protocol):
    def get_orders_page(self, after: str | None = None) -> OrdersPage:
        """Return the page of orders following ``after`` (first page when None)."""
        ...
