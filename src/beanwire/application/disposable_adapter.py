from typing import Any, Optional

from beanwire.domain import BeanDefinition, DisposableBean, MethodNotFoundError


class DisposableBeanAdapter:
    """Destroy callback for one singleton.

    Calls ``destroy()`` on beans that implement ``DisposableBean``, then the
    definition's destroy-method, unless that method is the same ``destroy``
    already called.

    Attributes:
        bean: The singleton to destroy.
        bean_name: Name of the singleton.
        destroy_method_name: Configured destroy-method name, if any.
    """

    def __init__(self, bean: Any, bean_name: str, bean_definition: BeanDefinition) -> None:
        self.bean = bean
        self.bean_name = bean_name
        self.destroy_method_name: Optional[str] = bean_definition.destroy_method_name

    @staticmethod
    def has_destroy_method(bean: Any, bean_definition: BeanDefinition) -> bool:
        """Check whether a bean needs a destroy callback at all."""
        return isinstance(bean, DisposableBean) or bool(bean_definition.destroy_method_name)

    def destroy(self) -> None:
        """Run the bean's destroy logic.

        Raises:
            MethodNotFoundError: If the configured destroy-method does not exist.
        """
        is_disposable = isinstance(self.bean, DisposableBean)
        if is_disposable:
            self.bean.destroy()

        if self.destroy_method_name and not (is_disposable and self.destroy_method_name == "destroy"):
            method = getattr(self.bean, self.destroy_method_name, None)
            if not callable(method):
                raise MethodNotFoundError(self.bean_name, self.destroy_method_name)
            method()

    def __call__(self) -> None:
        self.destroy()
