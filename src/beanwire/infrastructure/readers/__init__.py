"""
Definition readers module.

Parses XML and YAML documents into bean definitions.
"""

from .base import AbstractBeanDefinitionReader, default_bean_name, resolve_class
from .xml_reader import XmlBeanDefinitionReader
from .yaml_reader import YamlBeanDefinitionReader

__all__ = [
    "AbstractBeanDefinitionReader",
    "XmlBeanDefinitionReader",
    "YamlBeanDefinitionReader",
    "default_bean_name",
    "resolve_class",
]
