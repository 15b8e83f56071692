"""FastAPI application entry point.

Run with: orders-dashboard  (or: uvicorn order_dashboard.entrypoints.main:create_app --factory)
"""

import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import httpx
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from order_dashboard.application.dashboard_session import (
    DashboardSessionStore,
    SessionNotFoundError,
)
from order_dashboard.application.order_service import OrderService
from order_dashboard.domain.interfaces import IOrderService
from order_dashboard.entrypoints.middleware import RequestLogMiddleware
from order_dashboard.entrypoints.routes import router as orders_router
from order_dashboard.entrypoints.settings import Config, get_config
from order_dashboard.infrastructure.order_repository import OrderRepository
from order_dashboard.infrastructure.shopify_client import ShopifyGraphQLClient


def configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


def build_order_service(config: Config) -> tuple[IOrderService, ShopifyGraphQLClient]:
    shopify_client = ShopifyGraphQLClient(
        shop_name=config.SHOPIFY_SHOP_NAME,
        access_token=config.SHOPIFY_ACCESS_TOKEN,
        api_version=config.SHOPIFY_API_VERSION,
        client=httpx.Client(timeout=config.SHOPIFY_TIMEOUT_SECONDS),
    )
    service = OrderService(
        OrderRepository(shopify_client), page_size=config.ORDERS_PAGE_SIZE
    )
    return service, shopify_client


def create_app(
    config: Config | None = None, order_service: IOrderService | None = None
) -> FastAPI:
    """Build the dashboard app.

    ``order_service`` replaces the Shopify-backed service, which is otherwise
    built from ``config`` and closed on shutdown.
    """
    config = config or get_config()
    shopify_client: ShopifyGraphQLClient | None = None
    if order_service is None:
        order_service, shopify_client = build_order_service(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info(
            f"Orders dashboard for {config.SHOPIFY_SHOP_NAME} "
            f"(page size {config.ORDERS_PAGE_SIZE})"
        )
        yield
        if shopify_client is not None:
            shopify_client.close()

    app = FastAPI(title="Orders Dashboard", version="0.1.0", lifespan=lifespan)
    app.state.order_service = order_service
    app.state.sessions = DashboardSessionStore(max_sessions=config.MAX_SESSIONS)

    app.add_middleware(RequestLogMiddleware)

    @app.exception_handler(SessionNotFoundError)
    async def session_not_found_handler(
        request: Request, exc: SessionNotFoundError
    ) -> JSONResponse:
        logger.warning(f"Unknown dashboard session {exc}")
        return JSONResponse(
            status_code=404,
            content={"detail": "Dashboard session not found, reload the page"},
        )

    app.include_router(orders_router)

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


def main() -> None:
    config = get_config()
    configure_logging(config.LOG_LEVEL)
    uvicorn.run(create_app(config), host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    main()
