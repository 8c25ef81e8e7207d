# clipshare/shared/middleware/logging_middleware.py

"""
Middleware for HTTP request logging.

Clip passwords travel in a request header; only their presence is
ever logged.
"""

import time
import logging
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from clipshare.adapters.configuration.config import settings

# Configure logger
logger = logging.getLogger(__name__)

PASSWORD_HEADER = "x-clip-password"
QUIET_PATHS = frozenset({"/health"})


class AsyncRequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs one line per request and one per response.

    Client errors (wrong password, unknown clip) are logged at INFO,
    server errors at ERROR.
    """

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if path in QUIET_PATHS:
            return await call_next(request)

        if settings.ENVIRONMENT == "production":
            logger.info(f"Request: {request.method} {path}")
        else:
            logger.info(
                f"Request: {request.method} {path} | "
                f"Password header: {'yes' if PASSWORD_HEADER in request.headers else 'no'} | "
                f"Client: {request.client.host if request.client else 'N/A'}"
            )

        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time

        level = logging.ERROR if response.status_code >= 500 else logging.INFO
        logger.log(
            level,
            f"Response: {response.status_code} for {request.method} {path} | "
            f"Time: {process_time:.4f}s"
        )

        return response
