"""Middleware package."""
from volunteerhub.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware"]
