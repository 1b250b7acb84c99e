"""
Application layer - Container runtime and orchestration.

This layer contains the bean factory, its creation pipeline and the
application contexts that sequence it. It depends on the Domain layer and
on the package-level config and logging modules.
"""

from .application_context import (
    AbstractApplicationContext,
    ApplicationContextAwareProcessor,
    GenericApplicationContext,
)
from .bean_factory import DefaultListableBeanFactory
from .definition_registry import BeanDefinitionRegistry
from .disposable_adapter import DisposableBeanAdapter
from .instantiation import SimpleInstantiationStrategy, SubclassingInstantiationStrategy
from .lifecycle import LifecycleManager
from .property_resolver import PropertyResolver
from .singleton_registry import DefaultSingletonRegistry

__all__ = [
    "AbstractApplicationContext",
    "ApplicationContextAwareProcessor",
    "GenericApplicationContext",
    "DefaultListableBeanFactory",
    "BeanDefinitionRegistry",
    "DefaultSingletonRegistry",
    "DisposableBeanAdapter",
    "SimpleInstantiationStrategy",
    "SubclassingInstantiationStrategy",
    "PropertyResolver",
    "LifecycleManager",
]
