# clipshare/shared/middleware/__init__.py

from clipshare.shared.middleware.exception_middleware import AsyncExceptionMiddleware
from clipshare.shared.middleware.logging_middleware import AsyncRequestLoggingMiddleware

__all__ = [
    "AsyncExceptionMiddleware",
    "AsyncRequestLoggingMiddleware",
]
