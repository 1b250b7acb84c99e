"""
beanwire: Minimal inversion-of-control container with bean definitions,
post-processors and lifecycle callbacks.

Public API exports for the beanwire package.
"""

# Application exports
from beanwire.application import (
    AbstractApplicationContext,
    DefaultListableBeanFactory,
    GenericApplicationContext,
    SimpleInstantiationStrategy,
    SubclassingInstantiationStrategy,
)
from beanwire.config import ContainerSettings

# Domain exports
from beanwire.domain import (
    ApplicationContextAware,
    BeanCreationError,
    BeanDefinition,
    BeanFactoryAware,
    BeanFactoryPostProcessor,
    BeanPostProcessor,
    BeanReference,
    BeansError,
    CircularReferenceError,
    ContextStateError,
    DefinitionLoadError,
    DefinitionNotFoundError,
    DestructionError,
    DisposableBean,
    DuplicateDefinitionError,
    InitializationError,
    InitializingBean,
    InstantiationError,
    MethodNotFoundError,
    PropertyBindingError,
    PropertyValue,
    PropertyValues,
    ResourceNotFoundError,
    Scope,
    TypeMismatchError,
)

# Infrastructure exports
from beanwire.infrastructure import ClassPathXmlApplicationContext, ConfigApplicationContext
from beanwire.logging import configure_logging

__version__ = "0.1.0"

__all__ = [
    # Contexts and factory
    "AbstractApplicationContext",
    "ClassPathXmlApplicationContext",
    "ConfigApplicationContext",
    "DefaultListableBeanFactory",
    "GenericApplicationContext",
    "SimpleInstantiationStrategy",
    "SubclassingInstantiationStrategy",
    # Configuration
    "ContainerSettings",
    "configure_logging",
    # Models
    "BeanDefinition",
    "BeanReference",
    "PropertyValue",
    "PropertyValues",
    "Scope",
    # Capabilities
    "ApplicationContextAware",
    "BeanFactoryAware",
    "BeanFactoryPostProcessor",
    "BeanPostProcessor",
    "DisposableBean",
    "InitializingBean",
    # Exceptions
    "BeansError",
    "BeanCreationError",
    "CircularReferenceError",
    "ContextStateError",
    "DefinitionLoadError",
    "DefinitionNotFoundError",
    "DestructionError",
    "DuplicateDefinitionError",
    "InitializationError",
    "InstantiationError",
    "MethodNotFoundError",
    "PropertyBindingError",
    "ResourceNotFoundError",
    "TypeMismatchError",
]
