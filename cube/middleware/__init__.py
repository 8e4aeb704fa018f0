"""Middleware for the aiohttp gateway."""

from cube.middleware.error_handler import error_middleware
from cube.middleware.logging import logging_middleware

__all__ = ["error_middleware", "logging_middleware"]
