"""
Resource loading module.

Resolves classpath, filesystem and URL locations to readable resources.
"""

from .resources import (
    CLASSPATH_URL_PREFIX,
    ClassPathResource,
    DefaultResourceLoader,
    FileSystemResource,
    UrlResource,
)

__all__ = [
    "CLASSPATH_URL_PREFIX",
    "ClassPathResource",
    "DefaultResourceLoader",
    "FileSystemResource",
    "UrlResource",
]
