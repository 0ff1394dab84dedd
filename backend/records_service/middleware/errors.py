"""
Records Service - Unhandled Exception Middleware
=================================================

What:  Turns any exception no handler claimed into an empty 500 response.
How:   Innermost middleware; the request id and access log middlewares wrap
       it, so the 500 still gets its X-Request-ID header and its log line.
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from records_service.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)


class UnhandledExceptionMiddleware(BaseHTTPMiddleware):
    """Logs the traceback once and answers 500 with no body."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            rid = request_id_var.get("")
            logger.error("[%s] Unexpected error: %s", rid, exc, exc_info=exc)
            return Response(status_code=500)
