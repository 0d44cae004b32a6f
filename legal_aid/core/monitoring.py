"""
Monitoring and Tracing Configuration Module.

This module provides integration with Pydantic Logfire for tracing of the
Legal Aid service, including:
- API endpoint tracing
- Database operation monitoring
- Outbound HTTP calls to the payment gateway
- Case and payment lifecycle events
- Error tracking

The integration is optional. When ``LOGFIRE_ENABLED`` is not set every helper
in this module degrades to a debug log line.
"""

import logging
import os
from typing import Any, Optional

from fastapi import FastAPI

logger = logging.getLogger(__name__)

# Logfire configuration from environment
LOGFIRE_ENABLED = os.getenv("LOGFIRE_ENABLED", "false").lower() in ("true", "1", "yes")
LOGFIRE_TOKEN = os.getenv("LOGFIRE_TOKEN", "")
LOGFIRE_PROJECT_NAME = os.getenv("LOGFIRE_PROJECT_NAME", "legal-aid")
LOGFIRE_ENVIRONMENT = os.getenv("LOGFIRE_ENVIRONMENT", "development")
LOGFIRE_SERVICE_NAME = os.getenv("LOGFIRE_SERVICE_NAME", "legal-aid-server")
LOGFIRE_SERVICE_VERSION = os.getenv("LOGFIRE_SERVICE_VERSION", "1.0.0")

# Feature flags
LOGFIRE_TRACE_SQLALCHEMY = os.getenv("LOGFIRE_TRACE_SQLALCHEMY", "true").lower() in ("true", "1", "yes")
LOGFIRE_TRACE_HTTPX = os.getenv("LOGFIRE_TRACE_HTTPX", "true").lower() in ("true", "1", "yes")
LOGFIRE_TRACE_FASTAPI = os.getenv("LOGFIRE_TRACE_FASTAPI", "true").lower() in ("true", "1", "yes")


def initialize_logfire(app: FastAPI | None = None) -> None:
    """
    Initialize Pydantic Logfire for monitoring and tracing.

    This function sets up Logfire with automatic instrumentation for:
    - SQLAlchemy database operations
    - HTTPX HTTP requests
    - FastAPI endpoints

    Args:
        app: FastAPI application instance for FastAPI instrumentation (optional).

    The initialization is conditional based on LOGFIRE_ENABLED environment variable.
    """
    if not LOGFIRE_ENABLED:
        logger.info("Logfire monitoring is disabled. Set LOGFIRE_ENABLED=true to enable.")
        return

    if not LOGFIRE_TOKEN:
        logger.warning(
            "Logfire is enabled but LOGFIRE_TOKEN is not set. "
            "Monitoring will not work. Set LOGFIRE_TOKEN to enable Logfire."
        )
        return

    try:
        import logfire

        logfire.configure(
            token=LOGFIRE_TOKEN,
            service_name=LOGFIRE_SERVICE_NAME,
            service_version=LOGFIRE_SERVICE_VERSION,
            environment=LOGFIRE_ENVIRONMENT,
        )

        if LOGFIRE_TRACE_SQLALCHEMY:
            try:
                logfire.instrument_sqlalchemy()
                logger.info("Logfire: SQLAlchemy instrumentation enabled")
            except Exception as e:
                logger.warning(f"Failed to instrument SQLAlchemy: {e}")

        if LOGFIRE_TRACE_HTTPX:
            try:
                logfire.instrument_httpx()
                logger.info("Logfire: HTTPX instrumentation enabled")
            except Exception as e:
                logger.warning(f"Failed to instrument HTTPX: {e}")

        if LOGFIRE_TRACE_FASTAPI:
            try:
                if app is not None:
                    logfire.instrument_fastapi(app=app)
                    logger.info("Logfire: FastAPI instrumentation enabled")
                else:
                    logger.debug("FastAPI app instance not provided, skipping FastAPI instrumentation")
            except Exception as e:
                logger.warning(f"Failed to instrument FastAPI: {e}")

        logger.info(
            f"Logfire monitoring initialized: "
            f"project={LOGFIRE_PROJECT_NAME}, "
            f"environment={LOGFIRE_ENVIRONMENT}, "
            f"service={LOGFIRE_SERVICE_NAME}"
        )

    except Exception as e:
        logger.error(f"Failed to initialize Logfire: {e}", exc_info=True)


def log_api_request(method: str, path: str, status_code: int, duration_ms: float) -> None:
    """
    Log an API request with performance metrics.

    Args:
        method: HTTP method
        path: Request path
        status_code: Response status code
        duration_ms: Request duration in milliseconds
    """
    if not LOGFIRE_ENABLED:
        logger.debug(f"API request: {method} {path} -> {status_code} ({duration_ms:.2f}ms)")
        return
    try:
        import logfire

        logfire.info(
            "API request",
            method=method,
            path=path,
            status_code=status_code,
            duration_ms=duration_ms,
        )
    except Exception:
        logger.debug(f"Could not log API request to Logfire: {method} {path}")


def log_case_event(case_id: int, event: str, **attributes: Any) -> None:
    """
    Log a case lifecycle event (created, assigned, status changed, ...).

    Args:
        case_id: The case identifier
        event: Short event name
        **attributes: Extra attributes attached to the event
    """
    logger.info(f"Case {case_id}: {event}", extra={"case_id": case_id, "case_event": event})
    if not LOGFIRE_ENABLED:
        return
    try:
        import logfire

        logfire.info("Case event", case_id=case_id, event=event, **attributes)
    except Exception:
        logger.debug(f"Could not log case event to Logfire: case_id={case_id}")


def log_payment_event(tx_ref: str, status: str, amount: float) -> None:
    """
    Log a payment status change.

    Args:
        tx_ref: Transaction reference sent to the payment gateway
        status: New payment status
        amount: Payment amount
    """
    logger.info(f"Payment {tx_ref}: {status}", extra={"tx_ref": tx_ref, "payment_status": status})
    if not LOGFIRE_ENABLED:
        return
    try:
        import logfire

        logfire.info("Payment event", tx_ref=tx_ref, status=status, amount=amount)
    except Exception:
        logger.debug(f"Could not log payment event to Logfire: tx_ref={tx_ref}")


def log_error(error_type: str, error_message: str, context: Optional[dict] = None) -> None:
    """
    Log an error with context.

    Args:
        error_type: The type of error
        error_message: The error message
        context: Additional context information
    """
    if not LOGFIRE_ENABLED:
        logger.debug(f"Error: {error_type}: {error_message}")
        return
    try:
        import logfire

        logfire.error(
            "Error occurred",
            error_type=error_type,
            error_message=error_message,
            **(context or {}),
        )
    except Exception:
        logger.debug(f"Could not log error to Logfire: {error_type}")
