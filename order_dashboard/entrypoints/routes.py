from typing import Annotated

from fastapi import APIRouter, Depends, Form, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from loguru import logger

from order_dashboard.application.csv_export import (
    CSV_FILENAME,
    CSV_MEDIA_TYPE,
    build_orders_csv,
)
from order_dashboard.application.dashboard_session import (
    DashboardSession,
    DashboardSessionStore,
)
from order_dashboard.application.html_dashboard import build_dashboard_html
from order_dashboard.domain.interfaces import IOrderService
from order_dashboard.domain.order import OrdersPage

router = APIRouter(prefix="/app", tags=["orders"])


def get_order_service(request: Request) -> IOrderService:
    """Return the service bound to the configured, authorized Shopify client."""
    return request.app.state.order_service


def get_session_store(request: Request) -> DashboardSessionStore:
    return request.app.state.sessions


OrderServiceDep = Annotated[IOrderService, Depends(get_order_service)]
SessionStoreDep = Annotated[DashboardSessionStore, Depends(get_session_store)]
SelectedIds = Annotated[list[str], Form()]
SelectAll = Annotated[bool, Form()]


def _session_view(session: DashboardSession) -> RedirectResponse:
    return RedirectResponse(f"/app/sessions/{session.id}", status_code=303)


@router.get("/orders", response_model=OrdersPage)
def list_orders(
    order_service: OrderServiceDep,
    after: str | None = Query(None, description="Cursor of the previous page"),
) -> OrdersPage:
    return order_service.get_orders_page(after=after)


@router.get("", response_class=HTMLResponse)
def open_dashboard(
    order_service: OrderServiceDep, sessions: SessionStoreDep
) -> HTMLResponse:
    # Every full page load starts from the first page with a fresh session
    session = sessions.create(order_service.get_orders_page())
    logger.info(
        f"Opened dashboard session {session.id} with {len(session.accumulator)} order(s)"
    )
    return HTMLResponse(build_dashboard_html(session))


@router.get("/sessions/{session_id}", response_class=HTMLResponse)
def show_dashboard(session_id: str, sessions: SessionStoreDep) -> HTMLResponse:
    return HTMLResponse(build_dashboard_html(sessions.get(session_id)))


@router.post("/sessions/{session_id}/load-more")
def load_more(
    session_id: str,
    order_service: OrderServiceDep,
    sessions: SessionStoreDep,
    selected: SelectedIds = [],
    select_all: SelectAll = False,
) -> RedirectResponse:
    session = sessions.get(session_id)
    session.selection.replace(selected, all_selected=select_all)
    session.load_more(order_service)
    return _session_view(session)


@router.post("/sessions/{session_id}/selection")
def update_selection(
    session_id: str,
    sessions: SessionStoreDep,
    selected: SelectedIds = [],
    select_all: SelectAll = False,
) -> RedirectResponse:
    session = sessions.get(session_id)
    session.selection.replace(selected, all_selected=select_all)
    return _session_view(session)


@router.post("/sessions/{session_id}/export")
def export_orders(
    session_id: str,
    sessions: SessionStoreDep,
    selected: SelectedIds = [],
    select_all: SelectAll = False,
) -> Response:
    session = sessions.get(session_id)
    session.selection.replace(selected, all_selected=select_all)
    selected_ids = session.selection.selected_ids()

    logger.info(f"Exporting {len(selected_ids)} order(s) from session {session.id}")
    content = build_orders_csv(session.accumulator.orders, selected_ids)
    return Response(
        content=content,
        media_type=CSV_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{CSV_FILENAME}"'},
    )
