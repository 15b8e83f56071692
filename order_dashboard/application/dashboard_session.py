import threading
import uuid
from collections import OrderedDict

from loguru import logger

from order_dashboard.application.accumulator import OrderAccumulator
from order_dashboard.application.selection_tracker import SelectionTracker
from order_dashboard.domain.interfaces import IOrderService
from order_dashboard.domain.order import OrdersPage


class SessionNotFoundError(Exception):
    """Raised when a dashboard session id is unknown or was evicted."""


class DashboardSession:
    """State owned by one opened dashboard view."""

    def __init__(self, session_id: str, first_page: OrdersPage) -> None:
        self.id = session_id
        self.accumulator = OrderAccumulator()
        self.accumulator.initialize(first_page)
        self.selection = SelectionTracker(self.accumulator)
        self._loading = threading.Lock()

    def load_more(self, order_service: IOrderService) -> bool:
        """Fetch the page after the current cursor and append it.

        Returns False without fetching when there is nothing more to load or
        another load for this session is still running.
        """
        if not self.accumulator.can_load_more:
            logger.debug(f"Session {self.id}: nothing more to load")
            return False

        if not self._loading.acquire(blocking=False):
            logger.info(f"Session {self.id}: load already in flight, skipping")
            return False
        try:
            page = order_service.get_orders_page(after=self.accumulator.cursor)
            self.accumulator.append_page(page)
        finally:
            self._loading.release()
        return True


class DashboardSessionStore:
    """In-memory dashboard sessions, oldest evicted once ``max_sessions`` is hit."""

    def __init__(self, max_sessions: int = 100) -> None:
        self._max_sessions = max_sessions
        self._sessions: OrderedDict[str, DashboardSession] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self, first_page: OrdersPage) -> DashboardSession:
        session = DashboardSession(uuid.uuid4().hex, first_page)
        with self._lock:
            self._sessions[session.id] = session
            while len(self._sessions) > self._max_sessions:
                evicted, _ = self._sessions.popitem(last=False)
                logger.debug(f"Evicted dashboard session {evicted}")
        return session

    def get(self, session_id: str) -> DashboardSession:
        with self._lock:
            try:
                session = self._sessions[session_id]
            except KeyError:
                raise SessionNotFoundError(session_id) from None
            self._sessions.move_to_end(session_id)
        return session
