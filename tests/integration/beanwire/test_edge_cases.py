"""Integration tests for edge cases across the container layers."""

import threading

import pytest

from beanwire import (
    BeanCreationError,
    BeanDefinition,
    BeanReference,
    CircularReferenceError,
    ContainerSettings,
    ContextStateError,
    GenericApplicationContext,
    MethodNotFoundError,
    PropertyBindingError,
    PropertyValues,
    Scope,
    SubclassingInstantiationStrategy,
)


class Node:
    def __init__(self):
        self.next = None


class Slow:
    created = 0

    def __init__(self):
        Slow.created += 1


class Audited:
    log = []

    def __init__(self, label="default"):
        self.label = label

    def start(self):
        Audited.log.append(f"start:{self.label}")

    def stop(self):
        Audited.log.append(f"stop:{self.label}")


class Wrapper:
    def __init__(self, target):
        self.target = target


class WrappingProcessor:
    def post_process_before_initialization(self, bean, bean_name):
        return None

    def post_process_after_initialization(self, bean, bean_name):
        if isinstance(bean, Audited):
            return Wrapper(bean)
        return None


@pytest.fixture(autouse=True)
def reset_logs():
    Audited.log = []
    Slow.created = 0
    yield


def _context(definitions, **settings):
    return GenericApplicationContext(definitions, settings=ContainerSettings(**settings))


class TestCircularReferences:
    """Test that reference cycles fail instead of recursing."""

    def test_two_bean_cycle(self):
        """Test a cycle between two singletons."""
        context = _context(
            {
                "a": BeanDefinition(bean_class=Node, property_values=PropertyValues().add("next", BeanReference(bean_name="b"))),
                "b": BeanDefinition(bean_class=Node, property_values=PropertyValues().add("next", BeanReference(bean_name="a"))),
            }
        )

        with pytest.raises(BeanCreationError) as exc_info:
            context.refresh()

        cause = exc_info.value
        while not isinstance(cause, CircularReferenceError):
            cause = cause.__cause__
        assert cause.bean_chain == ["a", "b", "a"]

    def test_self_reference(self):
        """Test a bean referencing itself."""
        context = _context(
            {"a": BeanDefinition(bean_class=Node, property_values=PropertyValues().add("next", BeanReference(bean_name="a")))}
        )
        with pytest.raises(BeanCreationError):
            context.refresh()

    def test_prototype_chain_without_cycle(self):
        """Test that distinct prototypes referencing a singleton are not a cycle."""
        context = _context(
            {
                "tail": BeanDefinition(bean_class=Node),
                "head": BeanDefinition(
                    bean_class=Node,
                    scope=Scope.PROTOTYPE,
                    property_values=PropertyValues().add("next", BeanReference(bean_name="tail")),
                ),
            }
        )
        with context:
            assert context.get_bean("head").next is context.get_bean("head").next


class TestDestroyOrdering:
    """Test destroy ordering and failures at shutdown."""

    def _definitions(self):
        return {
            "first": BeanDefinition(bean_class=Audited, destroy_method_name="stop"),
            "second": BeanDefinition(bean_class=Audited, destroy_method_name="stop"),
        }

    def test_reverse_order_by_default(self):
        """Test that the last created singleton is destroyed first."""
        context = _context(self._definitions())
        context.refresh()
        context.get_bean("first").label = "first"
        context.get_bean("second").label = "second"

        context.close()

        assert Audited.log == ["stop:second", "stop:first"]

    def test_registration_order_when_configured(self):
        """Test the registration-order setting."""
        context = _context(self._definitions(), destroy_in_reverse_order=False)
        context.refresh()
        context.get_bean("first").label = "first"
        context.get_bean("second").label = "second"

        context.close()

        assert Audited.log == ["stop:first", "stop:second"]

    def test_missing_destroy_method_reported(self):
        """Test that a missing destroy-method does not block other callbacks."""
        context = _context(
            {
                "broken": BeanDefinition(bean_class=Node, destroy_method_name="close"),
                "audited": BeanDefinition(bean_class=Audited, destroy_method_name="stop"),
            },
            destroy_in_reverse_order=False,
        )
        context.refresh()

        failures = context.close()

        assert [name for name, _ in failures] == ["broken"]
        assert isinstance(failures[0][1], MethodNotFoundError)
        assert Audited.log == ["stop:default"]


class TestPostProcessorWrapping:
    """Test processors that replace beans."""

    def test_wrapped_bean_exposed_raw_bean_destroyed(self):
        """Test that lookup returns the wrapper and shutdown destroys the original."""
        context = _context(
            {
                "processor": BeanDefinition(bean_class=WrappingProcessor),
                "audited": BeanDefinition(bean_class=Audited, init_method_name="start", destroy_method_name="stop"),
            }
        )

        with context:
            bean = context.get_bean("audited")
            assert isinstance(bean, Wrapper)
            assert isinstance(bean.target, Audited)

        assert Audited.log == ["start:default", "stop:default"]

    def test_wrapped_bean_injected_into_dependents(self):
        """Test that references receive the processed bean."""
        context = _context(
            {
                "processor": BeanDefinition(bean_class=WrappingProcessor),
                "audited": BeanDefinition(bean_class=Audited),
                "node": BeanDefinition(
                    bean_class=Node,
                    property_values=PropertyValues().add("next", BeanReference(bean_name="audited")),
                ),
            }
        )

        with context:
            assert context.get_bean("node").next is context.get_bean("audited")


class TestMisconfiguration:
    """Test startup failures from bad definitions."""

    def test_missing_init_method(self):
        """Test that a configured init-method that does not exist fails startup."""
        context = _context({"node": BeanDefinition(bean_class=Node, init_method_name="start")})

        with pytest.raises(BeanCreationError) as exc_info:
            context.refresh()

        assert isinstance(exc_info.value.__cause__, MethodNotFoundError)

    def test_unknown_property(self):
        """Test that a property with no settable slot fails startup."""
        context = _context(
            {"node": BeanDefinition(bean_class=Node, property_values=PropertyValues().add("prev", "x"))}
        )

        with pytest.raises(BeanCreationError) as exc_info:
            context.refresh()

        assert isinstance(exc_info.value.__cause__, PropertyBindingError)

    def test_lookup_after_failed_refresh(self):
        """Test that a context whose refresh failed rejects lookups."""
        context = _context({"node": BeanDefinition(bean_class=Node, init_method_name="start")})
        with pytest.raises(BeanCreationError):
            context.refresh()

        with pytest.raises(ContextStateError):
            context.get_bean("node")


class TestConcurrency:
    """Test lookups from several threads after refresh."""

    def test_concurrent_lookups_share_singleton(self):
        """Test that threads see the singleton created at refresh."""
        context = _context({"slow": BeanDefinition(bean_class=Slow)})
        context.refresh()
        results = []

        def worker():
            results.append(context.get_bean("slow"))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(results) == 8
        assert all(result is results[0] for result in results)
        assert Slow.created == 1
        context.close()


class TestSubclassingStrategy:
    """Test the subclassing strategy through a context."""

    def test_context_uses_strategy(self):
        """Test that beans are instances of generated subclasses."""
        context = GenericApplicationContext(
            {"audited": BeanDefinition(bean_class=Audited, init_method_name="start")},
            settings=ContainerSettings(),
            instantiation_strategy=SubclassingInstantiationStrategy(),
        )

        with context:
            bean = context.get_bean("audited", required_type=Audited)
            assert type(bean) is not Audited

        assert Audited.log == ["start:default"]
