"""
Core utilities and configuration for the Legal Aid service.

This package provides core functionality including logging configuration,
database setup, security helpers and other shared utilities.
"""

from legal_aid.core.logging_config import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
