"""
FastAPI integration module.

Provides helpers for looking up beans from FastAPI endpoints and for tying
an application context to a FastAPI application's lifespan.
"""

from .integration import (
    ApplicationContextMiddleware,
    context_lifespan,
    create_bean_dependency,
    create_request_bean_dependency,
)

__all__ = [
    "create_bean_dependency",
    "create_request_bean_dependency",
    "context_lifespan",
    "ApplicationContextMiddleware",
]
