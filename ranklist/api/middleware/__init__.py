"""
ranklist API Middleware.
"""

from ranklist.api.middleware.logging import RequestLoggingMiddleware

__all__ = [
    "RequestLoggingMiddleware",
]
