"""
I/O models for API requests and responses.

This package contains Pydantic-based I/O schemas that define the contract
between API endpoints and clients. These models are separate from database
entities to allow independent evolution of API contracts.
"""

from .common import ApiResponse, ErrorResponse, Page, ok

__all__ = ["ApiResponse", "ErrorResponse", "Page", "ok"]
