from order_dashboard.domain.interfaces import IOrderRepository
from order_dashboard.domain.order import OrdersPage


class OrderService:
    """Application service for order-related operations."""

    def __init__(self, repository: IOrderRepository, page_size: int = 5) -> None:
        self._repository = repository
        self._page_size = page_size

    @property
    def page_size(self) -> int:
        return self._page_size

    def get_orders_page(self, after: str | None = None) -> OrdersPage:
        """Return the page of orders following ``after`` (first page when None)."""
        return self._repository.fetch_page(self._page_size, after)
