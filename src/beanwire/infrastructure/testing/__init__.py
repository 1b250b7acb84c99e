"""
Testing utilities module.

Provides helpers for testing applications assembled with beanwire.
"""

from .utilities import TestApplicationContext, create_mock_context

__all__ = [
    "TestApplicationContext",
    "create_mock_context",
]
