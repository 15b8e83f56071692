from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    # Serialized names are camelCase, for both JSON and CSV headers
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class OrderLineItem(_CamelModel):
    title: str | None = None
    current_quantity: int | None = None


class Order(_CamelModel):
    """Flat order record shown in the dashboard table."""

    id: str  # Shopify GID, e.g. "gid://shopify/Order/123"
    number: str | None = None  # Human-readable order name, e.g. "#1001"
    date: str | None = None  # createdAt, kept as the API timestamp string
    total_price: str | None = None  # shop currency amount, e.g. "99.99"
    total_quantity: int | None = None
    line_items: list[OrderLineItem] = Field(default_factory=list)
    payment_status: str | None = None  # e.g. "PAID"
    fulfillment_status: str | None = None  # e.g. "UNFULFILLED"


class OrdersPage(_CamelModel):
    """One page of orders plus the cursor needed to request the next one."""

    orders: list[Order] = Field(default_factory=list)
    cursor: str | None = None
    has_next_page: bool | None = None
