"""CORS, request-id, and access logging middleware."""

import logging
import time
import uuid

from fastapi import FastAPI, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from portal.core.config import Settings

logger = logging.getLogger("portal.access")


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Add a unique request ID to every request/response and log the outcome."""

    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        start_time = time.perf_counter()

        try:
            response: Response = await call_next(request)
        except Exception:
            logger.exception(
                "Unhandled error: request_id=%s %s %s",
                request_id,
                request.method,
                request.url.path,
            )
            response = JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"detail": "Internal server error"},
            )

        duration = round((time.perf_counter() - start_time) * 1000, 2)
        response.headers["X-Request-Id"] = request_id
        # Set by get_current_user once a session resolves.
        user_id = getattr(request.state, "user_id", None)
        logger.info(
            "%s %s %s %sms request_id=%s user_id=%s",
            request.method,
            request.url.path,
            response.status_code,
            duration,
            request_id,
            user_id if user_id is not None else "-",
        )
        return response


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure all middleware for the application."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        # Session cookies must travel on cross-origin calls from the site frontend
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIdMiddleware)
