import threading
from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar

from beanwire.application.definition_registry import BeanDefinitionRegistry
from beanwire.application.instantiation import SimpleInstantiationStrategy
from beanwire.application.lifecycle import LifecycleManager
from beanwire.application.property_resolver import PropertyResolver
from beanwire.application.singleton_registry import DefaultSingletonRegistry
from beanwire.domain import (
    BeanCreationError,
    BeanDefinition,
    BeansError,
    CircularReferenceError,
    DefinitionNotFoundError,
    IConfigurableBeanFactory,
    IInstantiationStrategy,
    TypeMismatchError,
)
from beanwire.logging import get_logger

T = TypeVar("T")

logger = get_logger(__name__)


class DefaultListableBeanFactory(IConfigurableBeanFactory):
    """Bean factory backed by a definition registry and a singleton cache.

    Orchestrates instantiation, property population and initialization of
    beans. Singletons are cached only after they are fully initialized, so a
    bean is never observable through lookup while it is half built.

    Attributes:
        _registry: Store of bean definitions.
        _singleton_registry: Cache of singletons and their destroy callbacks.
        _instantiation_strategy: Turns a definition into a raw instance.
        _property_resolver: Applies property values and resolves references.
        _lifecycle_manager: Runs aware callbacks, post-processors and init methods.
        _creation_state: Thread-local names of beans currently in creation.
        _bean_post_processors: Instance-level post-processors in registration order.
    """

    def __init__(
        self,
        instantiation_strategy: Optional[IInstantiationStrategy] = None,
        destroy_in_reverse_order: bool = True,
    ) -> None:
        """Initialize an empty factory.

        Args:
            instantiation_strategy: Strategy for raw instantiation. Defaults to
                ``SimpleInstantiationStrategy``.
            destroy_in_reverse_order: Passed to the singleton registry.
        """
        self._registry = BeanDefinitionRegistry()
        self._singleton_registry = DefaultSingletonRegistry(destroy_in_reverse_order=destroy_in_reverse_order)
        self._instantiation_strategy: IInstantiationStrategy = instantiation_strategy or SimpleInstantiationStrategy()
        self._property_resolver = PropertyResolver()
        self._lifecycle_manager = LifecycleManager()
        self._creation_state = threading.local()
        self._bean_post_processors: List[Any] = []

    # Definition registry

    def register_bean_definition(self, bean_name: str, bean_definition: BeanDefinition) -> None:
        self._registry.register_bean_definition(bean_name, bean_definition)

    def get_bean_definition(self, bean_name: str) -> BeanDefinition:
        return self._registry.get_bean_definition(bean_name)

    def contains_bean_definition(self, bean_name: str) -> bool:
        return self._registry.contains_bean_definition(bean_name)

    def get_bean_definition_names(self) -> List[str]:
        return self._registry.get_bean_definition_names()

    def remove_bean_definition(self, bean_name: str) -> None:
        self._registry.remove_bean_definition(bean_name)

    def get_bean_definition_count(self) -> int:
        return self._registry.get_bean_definition_count()

    # Configuration

    def get_instantiation_strategy(self) -> IInstantiationStrategy:
        return self._instantiation_strategy

    def set_instantiation_strategy(self, instantiation_strategy: IInstantiationStrategy) -> None:
        self._instantiation_strategy = instantiation_strategy

    def add_bean_post_processor(self, bean_post_processor: Any) -> None:
        """Append an instance-level post-processor.

        A processor added twice moves to the end of the pipeline instead of
        running twice.
        """
        if bean_post_processor in self._bean_post_processors:
            self._bean_post_processors.remove(bean_post_processor)
        self._bean_post_processors.append(bean_post_processor)

    def get_bean_post_processors(self) -> List[Any]:
        return list(self._bean_post_processors)

    def register_singleton(self, bean_name: str, singleton: Any) -> None:
        """Register an already built object as a singleton.

        The object does not go through the creation pipeline and gets no
        destroy callback.

        Raises:
            BeansError: If a singleton is already cached under the name.
        """
        if self._singleton_registry.contains_singleton(bean_name):
            raise BeansError(f"Could not register object under bean name '{bean_name}': one is already bound")
        self._singleton_registry.add_singleton(bean_name, singleton)

    def replace_singleton(self, bean_name: str, singleton: Any) -> None:
        """Bind an object under a name, replacing any cached singleton.

        Unlike ``register_singleton`` this overwrites an existing entry. Destroy
        callbacks registered for the replaced instance still run at shutdown.
        """
        self._singleton_registry.add_singleton(bean_name, singleton)

    # Lookup

    def get_bean(self, bean_name: str, *args: Any, required_type: Optional[Type[T]] = None) -> Any:
        """Return the bean registered under a name, creating it if needed.

        Args:
            bean_name: Name of the bean.
            *args: Constructor arguments, used only if the bean must be created.
            required_type: Optional type the bean must be an instance of.

        Returns:
            The cached singleton, or a newly created bean.

        Raises:
            DefinitionNotFoundError: If nothing is registered under the name.
            BeanCreationError: If the bean cannot be realized.
            TypeMismatchError: If the bean is not an instance of ``required_type``.

        Example:
            >>> factory.register_bean_definition("car", BeanDefinition(bean_class=Car))
            >>> car = factory.get_bean("car", required_type=Car)
        """
        bean = self._do_get_bean(bean_name, args)
        if required_type is not None and not isinstance(bean, required_type):
            raise TypeMismatchError(bean_name, required_type, type(bean))
        return bean

    def _do_get_bean(self, bean_name: str, args: Tuple[Any, ...]) -> Any:
        if self._singleton_registry.contains_singleton(bean_name):
            return self._singleton_registry.get_singleton(bean_name)

        bean_definition = self._registry.get_bean_definition(bean_name)
        return self._create_bean(bean_name, bean_definition, args)

    def _get_beans_in_creation(self) -> List[str]:
        if not hasattr(self._creation_state, "names"):
            self._creation_state.names = []
        return self._creation_state.names

    def is_currently_in_creation(self, bean_name: str) -> bool:
        """Return True if the bean is being created on the calling thread."""
        return bean_name in self._get_beans_in_creation()

    def _before_creation(self, bean_name: str) -> None:
        # Singletons are cached only once initialized, so a repeat request can never be satisfied.
        in_creation = self._get_beans_in_creation()
        if bean_name in in_creation:
            cycle = in_creation[in_creation.index(bean_name):] + [bean_name]
            raise CircularReferenceError(cycle)
        in_creation.append(bean_name)

    def _after_creation(self, bean_name: str) -> None:
        self._get_beans_in_creation().remove(bean_name)

    def _create_bean(self, bean_name: str, bean_definition: BeanDefinition, args: Tuple[Any, ...]) -> Any:
        self._before_creation(bean_name)
        try:
            logger.debug("creating_bean", bean_name=bean_name, scope=str(bean_definition.scope))
            bean = self._instantiation_strategy.instantiate(bean_definition, bean_name, args)
            self._property_resolver.apply_property_values(bean_name, bean, bean_definition, self)
            exposed_bean = self._lifecycle_manager.initialize_bean(
                bean_name,
                bean,
                bean_definition,
                self,
                self._bean_post_processors,
            )
            self._lifecycle_manager.register_disposable_bean_if_necessary(
                bean_name,
                bean,
                bean_definition,
                self._singleton_registry,
            )
        except Exception as e:
            raise BeanCreationError(bean_name, str(e)) from e
        finally:
            self._after_creation(bean_name)

        if bean_definition.is_singleton():
            self._singleton_registry.add_singleton(bean_name, exposed_bean)
        return exposed_bean

    def contains_bean(self, bean_name: str) -> bool:
        return self._registry.contains_bean_definition(bean_name) or self._singleton_registry.contains_singleton(
            bean_name
        )

    def is_singleton(self, bean_name: str) -> bool:
        if self._registry.contains_bean_definition(bean_name):
            return self._registry.get_bean_definition(bean_name).is_singleton()
        if self._singleton_registry.contains_singleton(bean_name):
            return True
        raise DefinitionNotFoundError(bean_name)

    def is_prototype(self, bean_name: str) -> bool:
        if self._registry.contains_bean_definition(bean_name):
            return self._registry.get_bean_definition(bean_name).is_prototype()
        if self._singleton_registry.contains_singleton(bean_name):
            return False
        raise DefinitionNotFoundError(bean_name)

    def get_beans_of_type(self, bean_type: Type[T]) -> Dict[str, T]:
        """Realize and return every bean whose class is a subtype of ``bean_type``.

        Defined beans come first in registration order, followed by singletons
        registered directly with ``register_singleton``.

        Args:
            bean_type: A class or a runtime-checkable protocol.

        Returns:
            Mapping of bean name to bean.
        """
        beans: Dict[str, T] = {}
        for bean_name in self._registry.get_bean_definition_names():
            bean_class = self._registry.get_bean_definition(bean_name).bean_class
            if issubclass(bean_class, bean_type):
                beans[bean_name] = self.get_bean(bean_name)

        for bean_name in self._singleton_registry.get_singleton_names():
            if bean_name in beans or self._registry.contains_bean_definition(bean_name):
                continue
            singleton = self._singleton_registry.get_singleton(bean_name)
            if isinstance(singleton, bean_type):
                beans[bean_name] = singleton
        return beans

    # Lifecycle

    def pre_instantiate_singletons(self) -> None:
        """Eagerly realize every singleton-scoped definition.

        Raises:
            BeanCreationError: On the first bean that cannot be realized.
        """
        for bean_name in self._registry.get_bean_definition_names():
            if self._registry.get_bean_definition(bean_name).is_singleton():
                self.get_bean(bean_name)

    def destroy_singletons(self, raise_on_failure: bool = False) -> List[Tuple[str, BaseException]]:
        return self._singleton_registry.destroy_singletons(raise_on_failure=raise_on_failure)
