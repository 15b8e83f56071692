import httpx
from loguru import logger

from order_dashboard.application.order_mapper import normalize_order
from order_dashboard.domain.order import OrdersPage
from order_dashboard.infrastructure.shopify_client import (
    ShopifyGraphQLClient,
    ShopifyGraphQLError,
)
from order_dashboard.shared.decorators import fallback_on_error

ORDERS_QUERY = """
  query getOrders($pageSize: Int, $after: String) {
    orders(first: $pageSize, after: $after) {
      edges {
        node {
          id
          name
          createdAt
          currentTotalPriceSet {
            shopMoney {
              amount
            }
          }
          currentSubtotalLineItemsQuantity
          lineItems(first: 30) {
            edges {
              node {
                title
                currentQuantity
              }
            }
          }
          displayFinancialStatus
          displayFulfillmentStatus
        }
      }
      pageInfo {
        endCursor
        hasNextPage
      }
    }
  }
"""


def _get_dict(value: dict, key: str) -> dict:
    """Return ``value[key]`` when it is a dict, else an empty dict."""
    child = value.get(key)
    return child if isinstance(child, dict) else {}


class OrderRepository:
    """Fetches pages of orders from the Shopify Admin GraphQL API."""

    def __init__(self, client: ShopifyGraphQLClient) -> None:
        self._client = client

    def fetch_page(self, page_size: int, after: str | None = None) -> OrdersPage:
        """Return one page of orders starting after ``after``.

        ``after`` is the opaque ``endCursor`` of the previous page, or None for
        the first page. Transport errors, GraphQL errors, a non-JSON body and a
        missing or malformed ``data.orders`` all yield an empty page with no
        cursor.

        Raises:
            ValueError: if ``page_size`` is not positive.
        """
        if page_size < 1:
            raise ValueError(f"page_size must be positive, got {page_size}")
        return self._fetch_page(page_size, after)

    # Failed or malformed fetches yield an empty page.
    # ValueError covers JSONDecodeError and pydantic ValidationError.
    @fallback_on_error(
        OrdersPage,
        httpx.HTTPError,
        ShopifyGraphQLError,
        ValueError,
        KeyError,
        TypeError,
        AttributeError,
    )
    def _fetch_page(self, page_size: int, after: str | None) -> OrdersPage:
        variables: dict = {"pageSize": page_size, "after": after}
        body = self._client.execute(ORDERS_QUERY, variables)
        if not isinstance(body, dict):
            logger.warning(f"Response body is not an object (after={after!r})")
            return OrdersPage()

        cost = _get_dict(_get_dict(body, "extensions"), "cost")
        if cost:
            throttle = _get_dict(cost, "throttleStatus")
            logger.debug(
                f"Query cost: {cost.get('actualQueryCost')} | "
                f"Available: {throttle.get('currentlyAvailable')} / "
                f"{throttle.get('maximumAvailable')}"
            )

        data = _get_dict(body, "data").get("orders")
        if not isinstance(data, dict):
            logger.warning(f"Response has no data.orders (after={after!r})")
            return OrdersPage()

        edges = data.get("edges") or []
        orders = [
            normalize_order(edge["node"])
            for edge in edges
            if isinstance(edge, dict) and isinstance(edge.get("node"), dict)
        ]
        if len(orders) != len(edges):
            logger.warning(f"Skipped {len(edges) - len(orders)} malformed order edge(s)")
        page_info = _get_dict(data, "pageInfo")

        logger.info(
            f"Fetched {len(orders)} order(s) after={after!r} "
            f"hasNextPage={page_info.get('hasNextPage')}"
        )
        return OrdersPage(
            orders=orders,
            cursor=page_info.get("endCursor"),
            has_next_page=page_info.get("hasNextPage"),
        )
