from abc import ABC, abstractmethod
from typing import Any, BinaryIO, Callable, Dict, List, Optional, Type, TypeVar

from beanwire.domain.models import BeanDefinition

T = TypeVar("T")


class IBeanDefinitionRegistry(ABC):
    """Abstract interface for a name-keyed store of bean definitions."""

    @abstractmethod
    def register_bean_definition(self, bean_name: str, bean_definition: BeanDefinition) -> None:
        """Register a definition, replacing any existing one under the same name.

        Args:
            bean_name: Name of the bean.
            bean_definition: The construction recipe.
        """

    @abstractmethod
    def get_bean_definition(self, bean_name: str) -> BeanDefinition:
        """Return the definition registered under a name.

        Raises:
            DefinitionNotFoundError: If no definition is registered.
        """

    @abstractmethod
    def contains_bean_definition(self, bean_name: str) -> bool:
        """Check whether a definition is registered under a name."""

    @abstractmethod
    def get_bean_definition_names(self) -> List[str]:
        """Return every registered name in registration order."""


class ISingletonRegistry(ABC):
    """Abstract interface for the singleton cache and its disposal handles."""

    @abstractmethod
    def get_singleton(self, bean_name: str) -> Optional[Any]:
        """Return the cached singleton, or None if not created yet."""

    @abstractmethod
    def add_singleton(self, bean_name: str, singleton: Any) -> None:
        """Cache a fully initialized singleton."""

    @abstractmethod
    def register_disposable_bean(self, bean_name: str, destroy_callback: Callable[[], None]) -> None:
        """Register a callback to run when singletons are destroyed."""

    @abstractmethod
    def destroy_singletons(self) -> None:
        """Run every registered destroy callback and clear the cache."""


class IInstantiationStrategy(ABC):
    """Abstract interface for turning a definition into a raw instance."""

    @abstractmethod
    def instantiate(self, bean_definition: BeanDefinition, bean_name: str, args: Optional[tuple] = None) -> Any:
        """Create an unpopulated instance of the definition's class.

        Args:
            bean_definition: The construction recipe.
            bean_name: Name of the bean, used in error messages.
            args: Positional constructor arguments.

        Raises:
            InstantiationError: If no constructor accepts ``args`` or construction fails.
        """


class IBeanFactory(ABC):
    """Abstract interface for looking up beans by name."""

    @abstractmethod
    def get_bean(self, bean_name: str, *args: Any, required_type: Optional[Type[T]] = None) -> Any:
        """Return the bean registered under a name, creating it if needed.

        Args:
            bean_name: Name of the bean.
            *args: Constructor arguments used if the bean must be created.
            required_type: Optional type the bean must be an instance of.

        Raises:
            BeanCreationError: If the bean cannot be realized.
            TypeMismatchError: If the bean is not an instance of ``required_type``.
        """

    @abstractmethod
    def contains_bean(self, bean_name: str) -> bool:
        """Check whether a bean definition or singleton exists under a name."""

    @abstractmethod
    def is_singleton(self, bean_name: str) -> bool:
        """Check whether the named bean is singleton-scoped."""

    @abstractmethod
    def is_prototype(self, bean_name: str) -> bool:
        """Check whether the named bean is prototype-scoped."""


class IConfigurableBeanFactory(IBeanFactory, IBeanDefinitionRegistry):
    """Bean factory that can be configured and inspected during refresh."""

    @abstractmethod
    def add_bean_post_processor(self, bean_post_processor: Any) -> None:
        """Append an instance-level post-processor to the pipeline."""

    @abstractmethod
    def get_beans_of_type(self, bean_type: Type[T]) -> Dict[str, T]:
        """Realize and return every bean whose class is a subtype of ``bean_type``."""

    @abstractmethod
    def register_singleton(self, bean_name: str, singleton: Any) -> None:
        """Register an already built object as a singleton."""

    @abstractmethod
    def pre_instantiate_singletons(self) -> None:
        """Eagerly realize every singleton-scoped definition."""

    @abstractmethod
    def destroy_singletons(self) -> None:
        """Destroy every cached singleton."""


class IApplicationContext(ABC):
    """Abstract interface for the top-level container façade."""

    @abstractmethod
    def refresh(self) -> None:
        """Load definitions, run post-processors and pre-instantiate singletons."""

    @abstractmethod
    def close(self) -> None:
        """Destroy all singletons."""

    @abstractmethod
    def get_bean(self, bean_name: str, *args: Any, required_type: Optional[Type[T]] = None) -> Any:
        """Return a bean from the underlying factory."""

    @abstractmethod
    def get_beans_of_type(self, bean_type: Type[T]) -> Dict[str, T]:
        """Return every bean whose class is a subtype of ``bean_type``."""

    @abstractmethod
    def get_bean_definition_names(self) -> List[str]:
        """Return every registered bean name."""


class IResource(ABC):
    """Abstract interface for a readable resource."""

    @abstractmethod
    def get_input_stream(self) -> BinaryIO:
        """Open the resource for binary reading.

        Raises:
            ResourceNotFoundError: If the resource does not exist.
        """

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description, used in logs and errors."""


class IResourceLoader(ABC):
    """Abstract interface for resolving location strings to resources."""

    @abstractmethod
    def get_resource(self, location: str) -> IResource:
        """Return the resource for a location string."""


class IBeanDefinitionReader(ABC):
    """Abstract interface for populating a registry from definition documents."""

    @abstractmethod
    def load_bean_definitions(self, *locations: str) -> int:
        """Load definitions from one or more locations.

        Returns:
            Number of definitions registered.
        """

    @abstractmethod
    def load_bean_definitions_from_resource(self, resource: IResource) -> int:
        """Load definitions from an already resolved resource."""
