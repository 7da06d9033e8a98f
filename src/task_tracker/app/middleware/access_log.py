import time
import uuid
import logging
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("tasks.access")

REQUEST_ID_HEADER = "X-Request-ID"


def get_request_id(request: Request) -> Optional[str]:
    """Request id assigned by AccessLogMiddleware, if the request went through it."""
    return getattr(request.state, "request_id", None)


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


class AccessLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        start = time.perf_counter()

        # read back by the error handlers
        request.state.request_id = request_id

        logger.info(
            "request.start",
            extra={
                "category": "http",
                "event": "request.start",
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "query": str(request.url.query),
                "client": request.client.host if request.client else None,
            },
        )

        try:
            response: Response = await call_next(request)
        except Exception:
            logger.exception(
                "request.error",
                extra={
                    "category": "http",
                    "event": "request.error",
                    "request_id": request_id,
                    "method": request.method,
                    "path": request.url.path,
                    "duration_ms": _elapsed_ms(start),
                },
            )
            raise

        response.headers[REQUEST_ID_HEADER] = request_id

        # server faults stand out from routine 4xx rejections
        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        logger.log(
            level,
            "request.end",
            extra={
                "category": "http",
                "event": "request.end",
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": _elapsed_ms(start),
            },
        )
        return response
