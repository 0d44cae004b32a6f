"""
Middleware modules for the Legal Aid server.

This package contains custom middleware for request/response logging and
request tracing.
"""

from .logfire_middleware import LogfireMiddleware

__all__ = ["LogfireMiddleware"]
