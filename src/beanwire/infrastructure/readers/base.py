import importlib
from abc import abstractmethod
from typing import Any, BinaryIO, Optional, Type

from pydantic import ValidationError

from beanwire.domain import (
    BeanDefinition,
    DefinitionLoadError,
    DuplicateDefinitionError,
    IBeanDefinitionReader,
    IBeanDefinitionRegistry,
    IResource,
    IResourceLoader,
)
from beanwire.infrastructure.io import DefaultResourceLoader
from beanwire.logging import get_logger

logger = get_logger(__name__)


def resolve_class(class_name: str) -> Type:
    """Import a class from a dotted path.

    Both ``package.module.ClassName`` and ``package.module:ClassName`` are
    accepted; nested classes are reached with further dots after the colon.

    Raises:
        DefinitionLoadError: If the module or attribute cannot be found or is not a class.
    """
    if not class_name or not class_name.strip():
        raise DefinitionLoadError("Bean class must not be empty")
    class_name = class_name.strip()

    if ":" in class_name:
        module_name, _, qualname = class_name.partition(":")
    else:
        module_name, _, qualname = class_name.rpartition(".")
    if not module_name or not qualname:
        raise DefinitionLoadError(f"Cannot find class named [{class_name}]")

    try:
        target: Any = importlib.import_module(module_name)
        for part in qualname.split("."):
            target = getattr(target, part)
    except (ImportError, AttributeError) as e:
        raise DefinitionLoadError(f"Cannot find class named [{class_name}]") from e

    if not isinstance(target, type):
        raise DefinitionLoadError(f"[{class_name}] is not a class")
    return target


def default_bean_name(bean_class: Type) -> str:
    """Derive a bean name from a class: ``UserDao`` becomes ``userDao``."""
    name = bean_class.__name__
    return name[:1].lower() + name[1:]


class AbstractBeanDefinitionReader(IBeanDefinitionReader):
    """Base class for readers that parse definition documents from resources.

    Attributes:
        registry: Registry definitions are registered into.
        resource_loader: Resolves location strings to resources.
    """

    def __init__(self, registry: IBeanDefinitionRegistry, resource_loader: Optional[IResourceLoader] = None) -> None:
        self.registry = registry
        self.resource_loader = resource_loader or DefaultResourceLoader()

    def load_bean_definitions(self, *locations: str) -> int:
        """Load definitions from each location in order.

        Returns:
            Total number of definitions registered.

        Raises:
            ResourceNotFoundError: If a location cannot be opened.
            DefinitionLoadError: If a document is malformed.
            DuplicateDefinitionError: If a bean name is already registered.
        """
        count = 0
        for location in locations:
            count += self.load_bean_definitions_from_resource(self.resource_loader.get_resource(location))
        return count

    def load_bean_definitions_from_resource(self, resource: IResource) -> int:
        with resource.get_input_stream() as stream:
            count = self._do_load_bean_definitions(stream, resource.description)
        logger.debug("bean_definitions_read", resource=resource.description, count=count)
        return count

    @abstractmethod
    def _do_load_bean_definitions(self, stream: BinaryIO, description: str) -> int:
        """Parse one document and register its definitions."""

    def _build_definition(self, description: str, bean_name: str, **fields: Any) -> BeanDefinition:
        try:
            return BeanDefinition(**fields)
        except ValidationError as e:
            raise DefinitionLoadError(f"Invalid definition for bean [{bean_name}] in {description}: {e}") from e

    def _register(self, bean_name: str, bean_definition: BeanDefinition) -> None:
        if self.registry.contains_bean_definition(bean_name):
            raise DuplicateDefinitionError(bean_name)
        self.registry.register_bean_definition(bean_name, bean_definition)
