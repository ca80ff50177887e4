"""Request logging middleware.

Logs every HTTP request with method, path, status code, latency and a short
request ID. The ID is stored on request.state for the ApiResponse envelope
and echoed back in the X-Request-ID header. Server errors log at WARNING.

Log format:
    INFO [POST] /api/v1/orders/12/status → 200 (140ms) req_a1b2c3d4e5f6
"""

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("ta.request")

REQUEST_ID_HEADER = "X-Request-ID"


def get_request_id(request: Request) -> str:
    """request_id set by RequestLogMiddleware, or a marker when absent."""
    return getattr(request.state, "request_id", "req_unknown")


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request.state.request_id = f"req_{uuid.uuid4().hex[:12]}"

        start = time.perf_counter()
        response: Response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000

        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        logger.log(
            level,
            "[%s] %s → %d (%.0fms) %s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            request.state.request_id,
        )
        response.headers[REQUEST_ID_HEADER] = request.state.request_id
        return response
