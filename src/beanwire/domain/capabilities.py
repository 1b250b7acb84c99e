"""Structural capabilities a hosted bean may implement.

None of these are required. The container checks for them with
``isinstance`` at the points of the lifecycle where they apply, so a bean
only needs to define the matching method(s); inheriting from the protocol is
optional.
"""

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from beanwire.domain.interfaces import IApplicationContext, IConfigurableBeanFactory


@runtime_checkable
class BeanFactoryAware(Protocol):
    """Receives the owning bean factory before any post-processor runs."""

    def set_bean_factory(self, bean_factory: "IConfigurableBeanFactory") -> None:
        ...


@runtime_checkable
class ApplicationContextAware(Protocol):
    """Receives the owning application context during the ``before`` phase."""

    def set_application_context(self, application_context: "IApplicationContext") -> None:
        ...


@runtime_checkable
class InitializingBean(Protocol):
    """Called once all properties have been applied."""

    def after_properties_set(self) -> None:
        ...


@runtime_checkable
class DisposableBean(Protocol):
    """Called when the container shuts down (singletons only)."""

    def destroy(self) -> None:
        ...


@runtime_checkable
class BeanPostProcessor(Protocol):
    """Hook into every bean realization.

    Either method may return a replacement bean. Returning ``None`` keeps the
    bean handed in.
    """

    def post_process_before_initialization(self, bean: Any, bean_name: str) -> Any:
        ...

    def post_process_after_initialization(self, bean: Any, bean_name: str) -> Any:
        ...


@runtime_checkable
class BeanFactoryPostProcessor(Protocol):
    """Hook that may rewrite bean definitions before any bean is instantiated."""

    def post_process_bean_factory(self, bean_factory: "IConfigurableBeanFactory") -> None:
        ...
