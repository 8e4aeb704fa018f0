"""HTTP handlers for the gateway."""

from cube.handlers.router import create_app

__all__ = ["create_app"]
