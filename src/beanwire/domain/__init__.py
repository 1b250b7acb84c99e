"""
Domain layer - Core models, capabilities and errors.

This layer contains the bean definition model, the structural capabilities a
hosted bean may implement, and the container's exception hierarchy.
It has no dependencies on other layers.
"""

from .capabilities import (
    ApplicationContextAware,
    BeanFactoryAware,
    BeanFactoryPostProcessor,
    BeanPostProcessor,
    DisposableBean,
    InitializingBean,
)
from .enums import Scope
from .exceptions import (
    BeanCreationError,
    BeansError,
    CircularReferenceError,
    ContextStateError,
    DefinitionLoadError,
    DefinitionNotFoundError,
    DestructionError,
    DuplicateDefinitionError,
    InitializationError,
    InstantiationError,
    MethodNotFoundError,
    PropertyBindingError,
    ResourceNotFoundError,
    TypeMismatchError,
)
from .interfaces import (
    IApplicationContext,
    IBeanDefinitionReader,
    IBeanDefinitionRegistry,
    IBeanFactory,
    IConfigurableBeanFactory,
    IInstantiationStrategy,
    IResource,
    IResourceLoader,
    ISingletonRegistry,
)
from .models import BeanDefinition, BeanReference, PropertyValue, PropertyValues

__all__ = [
    # Enums
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
    # Interfaces
    "IApplicationContext",
    "IBeanDefinitionReader",
    "IBeanDefinitionRegistry",
    "IBeanFactory",
    "IConfigurableBeanFactory",
    "IInstantiationStrategy",
    "IResource",
    "IResourceLoader",
    "ISingletonRegistry",
    # Models
    "BeanDefinition",
    "BeanReference",
    "PropertyValue",
    "PropertyValues",
]
