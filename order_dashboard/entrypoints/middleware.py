"""Request logging middleware.

Logs every HTTP request with method, path, status code, latency and a short
request id, e.g. ``[POST] /app/sessions/ab12/load-more → 303 (41ms) req_1a2b3c4d5e6f``.
"""

import time
import uuid

from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request.state.request_id = f"req_{uuid.uuid4().hex[:12]}"

        start = time.perf_counter()
        response: Response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000

        logger.info(
            f"[{request.method}] {request.url.path} → {response.status_code} "
            f"({elapsed_ms:.0f}ms) {request.state.request_id}"
        )
        return response
