"""
Infrastructure layer - External integrations.

This layer contains the resource loaders, definition readers, the
location-driven application contexts, and integrations with external
frameworks and tools. It depends on both Application and Domain layers.
"""

from . import fastapi_integration, io, readers, testing
from .context import ClassPathXmlApplicationContext, ConfigApplicationContext

__all__ = [
    "ClassPathXmlApplicationContext",
    "ConfigApplicationContext",
    "fastapi_integration",
    "io",
    "readers",
    "testing",
]
