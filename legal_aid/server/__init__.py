"""
Legal Aid Server Package.

This package contains the web server implementation for the Legal Aid platform.

Subpackages:
    api: FastAPI route definitions and endpoint logic.
    core: Configuration and constants.
    exception_handlers: Translation of errors into JSON responses.
    middleware: Request tracing middleware.
    services: Business logic and service layer.
"""
