from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, List, Union

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from task_tracker.app.middleware.access_log import get_request_id

logger = logging.getLogger("tasks.errors")

Details = Union[str, List[str]]

AVAILABLE_ENDPOINTS = {
    "GET /api/v1/tasks": "Get all tasks (completed, sortBy, order query parameters)",
    "GET /api/v1/tasks/priority/{level}": "Get tasks by priority level",
    "GET /api/v1/tasks/{id}": "Get task by ID",
    "POST /api/v1/tasks": "Create new task",
    "PUT /api/v1/tasks/{id}": "Update task by ID",
    "DELETE /api/v1/tasks/{id}": "Delete task by ID",
}


class ApiError(Exception):
    """Client-facing error rendered as `{error, details, timestamp, path}`."""

    def __init__(self, status_code: int, error: str, details: Details, **extra: Any):
        super().__init__(error)
        self.status_code = status_code
        self.error = error
        self.details = details
        self.extra = extra


def error_body(request: Request, error: str, details: Details, **extra: Any) -> dict[str, Any]:
    return {
        "error": error,
        "details": details,
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "path": request.url.path,
        "requestId": get_request_id(request),
        **extra,
    }


def register_error_handlers(app: FastAPI, debug: bool = False) -> None:
    @app.exception_handler(ApiError)
    async def _api_error(request: Request, exc: ApiError):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(request, exc.error, exc.details, **exc.extra),
        )

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            body = error_body(
                request,
                "Route not found",
                f"The requested endpoint {request.method} {request.url.path} does not exist",
                availableEndpoints=AVAILABLE_ENDPOINTS,
            )
        else:
            body = error_body(request, str(exc.detail), str(exc.detail))
        return JSONResponse(status_code=exc.status_code, content=body, headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def _request_validation_error(request: Request, exc: RequestValidationError):
        details = [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()]
        return JSONResponse(status_code=400, content=error_body(request, "Validation failed", details))

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception):
        logger.error(
            "request.unhandled",
            exc_info=exc,
            extra={
                "category": "http",
                "event": "request.unhandled",
                "request_id": get_request_id(request),
                "method": request.method,
                "path": request.url.path,
            },
        )
        extra = {"exception": f"{type(exc).__name__}: {exc}"} if debug else {}
        return JSONResponse(
            status_code=500,
            content=error_body(request, "Internal Server Error", "An unexpected error occurred", **extra),
        )
