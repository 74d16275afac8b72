"""
Request tracing middleware.

Every request gets a trace ID (taken from X-Trace-Id or freshly generated)
that is bound, together with the method and path, to the structlog context
and echoed back on the response.
"""

import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

TRACE_HEADER = "X-Trace-Id"


class TraceMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        trace_id = request.headers.get(TRACE_HEADER) or str(uuid.uuid4())

        with structlog.contextvars.bound_contextvars(
            trace_id=trace_id,
            method=request.method,
            path=request.url.path,
        ):
            response = await call_next(request)

        response.headers[TRACE_HEADER] = trace_id
        return response
