"""Request context middleware using Loguru's contextualize.

Assigns every request an id (taken from the X-Request-ID header when the
client sends one). The id, method and path are bound to the Loguru context,
so every downstream log line carries them without explicit parameter
passing.
"""

import time
import uuid

from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Log request start/end with timing and echo the request id.

    Unhandled exceptions are logged once here and turned into a generic
    500 body; internal details never reach the client.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        start = time.perf_counter()

        with logger.contextualize(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        ):
            logger.debug("request.start")
            try:
                response = await call_next(request)
            except Exception as exc:
                logger.bind(
                    status_code=500,
                    duration_ms=round((time.perf_counter() - start) * 1000, 1),
                    error_type=type(exc).__name__,
                ).exception("request.error")
                response = JSONResponse(
                    status_code=500, content={"error": "Internal server error"}
                )
            else:
                logger.bind(
                    status_code=response.status_code,
                    duration_ms=round((time.perf_counter() - start) * 1000, 1),
                ).info("request.end")

            response.headers.setdefault(REQUEST_ID_HEADER, request_id)
            return response
