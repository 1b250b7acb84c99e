import atexit
import threading
from abc import abstractmethod
from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar

from beanwire.application.bean_factory import DefaultListableBeanFactory
from beanwire.config import ContainerSettings
from beanwire.domain import (
    ApplicationContextAware,
    BeanDefinition,
    BeanFactoryPostProcessor,
    BeanPostProcessor,
    ContextStateError,
    IApplicationContext,
    IInstantiationStrategy,
)
from beanwire.logging import configure_logging, get_logger

T = TypeVar("T")

logger = get_logger(__name__)


class ApplicationContextAwareProcessor:
    """Post-processor that hands the owning context to ``ApplicationContextAware`` beans.

    Registered ahead of every user post-processor during refresh.

    Attributes:
        application_context: The context injected into aware beans.
    """

    def __init__(self, application_context: IApplicationContext) -> None:
        self.application_context = application_context

    def post_process_before_initialization(self, bean: Any, bean_name: str) -> Any:
        if isinstance(bean, ApplicationContextAware):
            bean.set_application_context(self.application_context)
        return bean

    def post_process_after_initialization(self, bean: Any, bean_name: str) -> Any:
        return bean


class AbstractApplicationContext(IApplicationContext):
    """Application context that owns a bean factory and sequences its refresh.

    ``refresh()`` runs, in order:

    1. Build a fresh bean factory and load definitions into it.
    2. Run every factory-level post-processor once.
    3. Register the context-aware processor, then every instance-level
       post-processor bean.
    4. Pre-instantiate all singletons.

    Subclasses supply the definitions by implementing ``_load_bean_definitions``.

    Attributes:
        _settings: Container settings.
        _bean_factory: The current bean factory, None before the first refresh.
        _bean_factory_post_processors: Factory-level processors added in code.
        _active: True between a successful refresh and close.
        _refreshing: True while refresh() is running, so beans created during
            refresh can look up other beans through the context.
    """

    def __init__(
        self,
        settings: Optional[ContainerSettings] = None,
        instantiation_strategy: Optional[IInstantiationStrategy] = None,
    ) -> None:
        """Initialize an inactive context.

        Args:
            settings: Container settings. Loaded from the environment if omitted.
            instantiation_strategy: Strategy handed to every bean factory this
                context builds.
        """
        self._settings = settings or ContainerSettings()
        self._instantiation_strategy = instantiation_strategy
        self._bean_factory: Optional[DefaultListableBeanFactory] = None
        self._bean_factory_post_processors: List[Any] = []
        self._active = False
        self._refreshing = False
        self._shutdown_hook_registered = False
        self._lock = threading.RLock()

    @property
    def settings(self) -> ContainerSettings:
        return self._settings

    def add_bean_factory_post_processor(self, processor: Any) -> None:
        """Add a factory-level processor that runs before those declared as beans."""
        self._bean_factory_post_processors.append(processor)

    def refresh(self) -> None:
        """Load definitions, run post-processors and pre-instantiate singletons.

        Refreshing an already refreshed context destroys its singletons and
        starts over with a new bean factory. Not safe to call concurrently.

        Raises:
            BeansError: If definitions cannot be loaded, a factory-level
                post-processor fails, or a singleton cannot be created. Any
                singletons created so far are destroyed and the context stays
                inactive.
        """
        if self._settings.configure_logging:
            configure_logging(self._settings.log_level, self._settings.log_json)

        with self._lock:
            logger.info("context_refresh_started", context=type(self).__name__)
            self._refreshing = True
            try:
                self._refresh_bean_factory()
                bean_factory = self.get_bean_factory()
                self._invoke_bean_factory_post_processors(bean_factory)
                self._register_bean_post_processors(bean_factory)
                bean_factory.pre_instantiate_singletons()
            except Exception:
                self._active = False
                if self._bean_factory is not None:
                    self._bean_factory.destroy_singletons()
                logger.error("context_refresh_failed", context=type(self).__name__, exc_info=True)
                raise
            finally:
                self._refreshing = False
            self._active = True
            logger.info(
                "context_refresh_completed",
                context=type(self).__name__,
                bean_count=self._bean_factory.get_bean_definition_count(),
            )

        if self._settings.register_shutdown_hook:
            self.register_shutdown_hook()

    def _refresh_bean_factory(self) -> None:
        if self._bean_factory is not None:
            self._bean_factory.destroy_singletons()
        bean_factory = self._create_bean_factory()
        self._load_bean_definitions(bean_factory)
        self._bean_factory = bean_factory
        logger.debug("bean_definitions_loaded", names=bean_factory.get_bean_definition_names())

    def _create_bean_factory(self) -> DefaultListableBeanFactory:
        return DefaultListableBeanFactory(
            instantiation_strategy=self._instantiation_strategy,
            destroy_in_reverse_order=self._settings.destroy_in_reverse_order,
        )

    @abstractmethod
    def _load_bean_definitions(self, bean_factory: DefaultListableBeanFactory) -> None:
        """Populate a fresh bean factory with definitions."""

    def _invoke_bean_factory_post_processors(self, bean_factory: DefaultListableBeanFactory) -> None:
        processors = list(self._bean_factory_post_processors)
        processors.extend(bean_factory.get_beans_of_type(BeanFactoryPostProcessor).values())
        for processor in processors:
            logger.debug("invoking_bean_factory_post_processor", processor=type(processor).__name__)
            processor.post_process_bean_factory(bean_factory)

    def _register_bean_post_processors(self, bean_factory: DefaultListableBeanFactory) -> None:
        bean_factory.add_bean_post_processor(ApplicationContextAwareProcessor(self))
        for bean_name, processor in bean_factory.get_beans_of_type(BeanPostProcessor).items():
            logger.debug("registering_bean_post_processor", bean_name=bean_name)
            bean_factory.add_bean_post_processor(processor)

    def get_bean_factory(self) -> DefaultListableBeanFactory:
        """Return the current bean factory.

        Raises:
            ContextStateError: If the context has never been refreshed.
        """
        if self._bean_factory is None:
            raise ContextStateError(f"{type(self).__name__} has not been refreshed yet")
        return self._bean_factory

    def _get_active_bean_factory(self) -> DefaultListableBeanFactory:
        if not (self._active or self._refreshing):
            raise ContextStateError(f"{type(self).__name__} is not active; call refresh() first")
        return self.get_bean_factory()

    def is_active(self) -> bool:
        return self._active

    def get_bean(self, bean_name: str, *args: Any, required_type: Optional[Type[T]] = None) -> Any:
        return self._get_active_bean_factory().get_bean(bean_name, *args, required_type=required_type)

    def get_beans_of_type(self, bean_type: Type[T]) -> Dict[str, T]:
        return self._get_active_bean_factory().get_beans_of_type(bean_type)

    def get_bean_definition_names(self) -> List[str]:
        return self.get_bean_factory().get_bean_definition_names()

    def contains_bean(self, bean_name: str) -> bool:
        return self.get_bean_factory().contains_bean(bean_name)

    def close(self) -> List[Tuple[str, BaseException]]:
        """Destroy all singletons and deactivate the context.

        Safe to call more than once; later calls do nothing.

        Returns:
            Pairs of (bean name, exception) for destroy callbacks that failed.
        """
        with self._lock:
            if self._bean_factory is None or not self._active:
                return []
            logger.info("context_closing", context=type(self).__name__)
            self._active = False
            failures = self._bean_factory.destroy_singletons()
        if self._shutdown_hook_registered:
            atexit.unregister(self.close)
            self._shutdown_hook_registered = False
        return failures

    def register_shutdown_hook(self) -> None:
        """Close this context automatically when the interpreter exits."""
        if not self._shutdown_hook_registered:
            atexit.register(self.close)
            self._shutdown_hook_registered = True

    def __enter__(self) -> "AbstractApplicationContext":
        if not self._active:
            self.refresh()
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        self.close()
        return False


class GenericApplicationContext(AbstractApplicationContext):
    """Application context whose definitions are registered in code.

    Example:
        >>> context = GenericApplicationContext({
        ...     "userDao": BeanDefinition(bean_class=UserDao),
        ...     "userService": BeanDefinition(
        ...         bean_class=UserService,
        ...         property_values=PropertyValues().add("userDao", BeanReference(bean_name="userDao")),
        ...     ),
        ... })
        >>> context.refresh()
        >>> service = context.get_bean("userService", required_type=UserService)
    """

    def __init__(
        self,
        bean_definitions: Optional[Dict[str, BeanDefinition]] = None,
        settings: Optional[ContainerSettings] = None,
        instantiation_strategy: Optional[IInstantiationStrategy] = None,
    ) -> None:
        super().__init__(settings=settings, instantiation_strategy=instantiation_strategy)
        self._bean_definitions: Dict[str, BeanDefinition] = dict(bean_definitions or {})

    def register_bean_definition(self, bean_name: str, bean_definition: BeanDefinition) -> None:
        """Register a definition, picked up by the next refresh.

        Also registers it with the current bean factory, if there is one.
        """
        self._bean_definitions[bean_name] = bean_definition
        if self._bean_factory is not None:
            self._bean_factory.register_bean_definition(bean_name, bean_definition)

    def _load_bean_definitions(self, bean_factory: DefaultListableBeanFactory) -> None:
        for bean_name, bean_definition in self._bean_definitions.items():
            bean_factory.register_bean_definition(bean_name, bean_definition)
