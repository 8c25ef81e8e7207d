# clipshare/shared/middleware/exception_middleware.py

"""
Middleware for centralized exception handling.

Every error leaves the API with the same JSON body::

    {"detail": "...", "code": "RESOURCE_NOT_FOUND", "errors": {...}}

where ``errors`` lists per-field reasons for invalid input and is empty
otherwise. Database and unexpected errors never carry their exception
text to the client; domain details of server-side failures are hidden
in production.
"""

import time
import logging
from typing import Callable, Dict, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import BaseHTTPMiddleware

from clipshare.domain.exceptions import DomainException
from clipshare.adapters.configuration.config import settings

# Configure logger
logger = logging.getLogger(__name__)

STATUS_BY_CODE = {
    "RESOURCE_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "RESOURCE_ALREADY_EXISTS": status.HTTP_409_CONFLICT,
    "PERMISSION_DENIED": status.HTTP_401_UNAUTHORIZED,
    "INVALID_INPUT": status.HTTP_400_BAD_REQUEST,
    "DATABASE_OPERATION_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_response(
        status_code: int,
        detail: str,
        code: str,
        errors: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    if status_code >= 500 and settings.ENVIRONMENT == "production":
        detail = "Internal server error"
    return JSONResponse(
        status_code=status_code,
        content={"detail": detail, "code": code, "errors": errors or {}},
    )


class AsyncExceptionMiddleware(BaseHTTPMiddleware):
    """
    Turns exceptions escaping the endpoints into JSON error responses.

    Domain exceptions are mapped through STATUS_BY_CODE; database and
    unexpected errors become a 500.
    """

    async def dispatch(self, request: Request, call_next: Callable):
        start_time = time.time()
        path = request.url.path
        try:
            response = await call_next(request)

        except DomainException as exc:
            status_code = STATUS_BY_CODE.get(exc.internal_code, status.HTTP_400_BAD_REQUEST)
            message = f"{exc.detail} | Code: {exc.internal_code} | Path: {path}"
            if status_code >= 500:
                logger.error(f"Internal error: {message}")
            else:
                logger.info(f"Domain exception: {message}")
            response = error_response(status_code, exc.detail, exc.internal_code, exc.details)

        except SQLAlchemyError as exc:
            logger.error(f"Database error: Type={type(exc).__name__} | Path: {path} | {exc}")
            response = error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal database error", "DATABASE_ERROR"
            )

        except Exception as exc:
            logger.exception(f"Unhandled exception: Type={type(exc).__name__} | Path: {path} | {exc}")
            response = error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", "INTERNAL_ERROR"
            )

        response.headers["X-Process-Time"] = f"{time.time() - start_time:.4f}"
        return response
