from typing import Any, Dict, Optional, Tuple

from beanwire.application import DefaultListableBeanFactory, GenericApplicationContext
from beanwire.config import ContainerSettings
from beanwire.domain import BeanDefinition


class TestApplicationContext(GenericApplicationContext):
    """Application context for tests, with bean mocking and definition overrides.

    Inherits the definitions of an optional parent context. Mocked beans are
    registered as ready-made singletons, so they win over any definition with
    the same name and skip the creation pipeline entirely.

    This is useful for:
    - Replacing collaborators (databases, HTTP clients) with test doubles.
    - Swapping a definition for a lighter one without touching the parent.

    Attributes:
        _parent_context: Context whose definitions are inherited.
        _mocks: Mock instances by bean name.

    Example:
        >>> context = GenericApplicationContext({
        ...     "userDao": BeanDefinition(bean_class=DatabaseUserDao),
        ...     "userService": BeanDefinition(
        ...         bean_class=UserService,
        ...         property_values=PropertyValues().add("userDao", BeanReference(bean_name="userDao")),
        ...     ),
        ... })
        >>>
        >>> def test_user_service():
        ...     with TestApplicationContext(parent_context=context) as test_context:
        ...         test_context.mock_bean("userDao", FakeUserDao())
        ...         service = test_context.get_bean("userService")
        ...         assert isinstance(service.userDao, FakeUserDao)
    """

    __test__ = False  # Tell pytest not to collect this class as a test

    def __init__(
        self,
        bean_definitions: Optional[Dict[str, BeanDefinition]] = None,
        parent_context: Optional[GenericApplicationContext] = None,
        settings: Optional[ContainerSettings] = None,
    ) -> None:
        """Initialize the test context.

        Args:
            bean_definitions: Definitions registered in addition to the parent's.
            parent_context: Optional context to inherit definitions from.
            settings: Container settings; defaults never register a shutdown hook.
        """
        super().__init__(settings=settings or ContainerSettings(register_shutdown_hook=False))
        self._parent_context = parent_context
        self._own_definitions: Dict[str, BeanDefinition] = dict(bean_definitions or {})
        self._mocks: Dict[str, Any] = {}
        self._restore_definitions()

    def _restore_definitions(self) -> None:
        definitions: Dict[str, BeanDefinition] = {}
        if self._parent_context is not None:
            definitions.update(self._parent_context._bean_definitions)
        definitions.update(self._own_definitions)
        self._bean_definitions = definitions

    def mock_bean(self, bean_name: str, mock_instance: Any) -> None:
        """Replace a bean with a mock instance.

        Takes effect immediately on an active context and survives refreshes.
        Beans that were already wired with the original keep it; refresh the
        context to rewire them.

        Args:
            bean_name: Name of the bean to replace.
            mock_instance: The object returned for that name from now on.
        """
        self._mocks[bean_name] = mock_instance
        if self._bean_factory is not None:
            self._bean_factory.replace_singleton(bean_name, mock_instance)

    def override_definition(self, bean_name: str, bean_definition: BeanDefinition) -> None:
        """Replace a definition; takes effect on the next refresh."""
        self._bean_definitions[bean_name] = bean_definition

    def reset_overrides(self) -> None:
        """Remove all mocks and overrides and restore the inherited definitions."""
        self._mocks.clear()
        self._restore_definitions()

    def _load_bean_definitions(self, bean_factory: DefaultListableBeanFactory) -> None:
        super()._load_bean_definitions(bean_factory)
        for bean_name, mock_instance in self._mocks.items():
            bean_factory.register_singleton(bean_name, mock_instance)

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        """Close the context and clean up overrides."""
        self.close()
        self.reset_overrides()
        return False


def create_mock_context(*mocks: Tuple[str, Any]) -> TestApplicationContext:
    """Create a refreshed test context holding only the given mock beans.

    Args:
        *mocks: Tuples of (bean name, mock instance).

    Returns:
        An active TestApplicationContext.

    Example:
        >>> context = create_mock_context(("userDao", FakeUserDao()), ("clock", FixedClock()))
        >>> assert context.get_bean("clock").now() == FIXED_TIME
    """
    context = TestApplicationContext()
    for bean_name, mock_instance in mocks:
        context.mock_bean(bean_name, mock_instance)
    context.refresh()
    return context
