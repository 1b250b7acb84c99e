from typing import Any, Sequence

from beanwire.application.disposable_adapter import DisposableBeanAdapter
from beanwire.domain import (
    BeanDefinition,
    BeanFactoryAware,
    IConfigurableBeanFactory,
    InitializationError,
    InitializingBean,
    ISingletonRegistry,
    MethodNotFoundError,
)
from beanwire.logging import get_logger

logger = get_logger(__name__)


class LifecycleManager:
    """Drives the initialization of a populated bean.

    The order is fixed:

    1. ``set_bean_factory`` on ``BeanFactoryAware`` beans.
    2. Every post-processor's ``post_process_before_initialization``.
    3. ``after_properties_set`` on ``InitializingBean`` beans.
    4. The definition's init-method, unless it is the ``after_properties_set``
       already called.
    5. Every post-processor's ``post_process_after_initialization``.

    Registering destroy callbacks for singletons is a separate step,
    ``register_disposable_bean_if_necessary``.
    """

    def initialize_bean(
        self,
        bean_name: str,
        bean: Any,
        bean_definition: BeanDefinition,
        bean_factory: IConfigurableBeanFactory,
        bean_post_processors: Sequence[Any],
    ) -> Any:
        """Run the initialization sequence and return the exposed bean.

        Args:
            bean_name: Name of the bean.
            bean: The populated instance.
            bean_definition: The bean's definition.
            bean_factory: The owning factory, injected into aware beans.
            bean_post_processors: Instance-level post-processors in registration order.

        Returns:
            The bean, or whatever the post-processors replaced it with.

        Raises:
            InitializationError: If ``after_properties_set`` or the init-method raises.
            MethodNotFoundError: If the configured init-method does not exist.
        """
        if isinstance(bean, BeanFactoryAware):
            bean.set_bean_factory(bean_factory)

        wrapped_bean = self.apply_before_initialization(bean_name, bean, bean_post_processors)
        self.invoke_init_methods(bean_name, wrapped_bean, bean_definition)
        return self.apply_after_initialization(bean_name, wrapped_bean, bean_post_processors)

    @staticmethod
    def apply_before_initialization(bean_name: str, bean: Any, bean_post_processors: Sequence[Any]) -> Any:
        """Chain ``post_process_before_initialization`` across the processors.

        A processor returning None leaves the current bean unchanged.
        """
        result = bean
        for processor in bean_post_processors:
            current = processor.post_process_before_initialization(result, bean_name)
            if current is not None:
                result = current
        return result

    @staticmethod
    def apply_after_initialization(bean_name: str, bean: Any, bean_post_processors: Sequence[Any]) -> Any:
        """Chain ``post_process_after_initialization`` across the processors.

        A processor returning None leaves the current bean unchanged.
        """
        result = bean
        for processor in bean_post_processors:
            current = processor.post_process_after_initialization(result, bean_name)
            if current is not None:
                result = current
        return result

    @staticmethod
    def invoke_init_methods(bean_name: str, bean: Any, bean_definition: BeanDefinition) -> None:
        is_initializing_bean = isinstance(bean, InitializingBean)
        if is_initializing_bean:
            try:
                bean.after_properties_set()
            except Exception as e:
                raise InitializationError(bean_name, f"after_properties_set raised {type(e).__name__}: {e}") from e

        init_method_name = bean_definition.init_method_name
        if not init_method_name:
            return
        if is_initializing_bean and init_method_name == "after_properties_set":
            return

        init_method = getattr(bean, init_method_name, None)
        if not callable(init_method):
            raise MethodNotFoundError(bean_name, init_method_name)

        logger.debug("invoking_init_method", bean_name=bean_name, method=init_method_name)
        try:
            init_method()
        except Exception as e:
            raise InitializationError(bean_name, f"{init_method_name} raised {type(e).__name__}: {e}") from e

    @staticmethod
    def register_disposable_bean_if_necessary(
        bean_name: str,
        bean: Any,
        bean_definition: BeanDefinition,
        singleton_registry: ISingletonRegistry,
    ) -> bool:
        """Register a destroy callback for singleton beans that need one.

        Prototype beans are never tracked; their lifetime belongs to the caller.

        Returns:
            True if a callback was registered.
        """
        if not bean_definition.is_singleton():
            return False
        if not DisposableBeanAdapter.has_destroy_method(bean, bean_definition):
            return False
        singleton_registry.register_disposable_bean(bean_name, DisposableBeanAdapter(bean, bean_name, bean_definition))
        return True
