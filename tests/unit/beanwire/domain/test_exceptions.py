"""Unit tests for domain exceptions."""

import pytest

from beanwire.domain.exceptions import (
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


class TestBeansError:
    """Test cases for the base BeansError class."""

    def test_beans_error_is_exception(self):
        """Test that BeansError inherits from Exception."""
        assert issubclass(BeansError, Exception)

    def test_beans_error_can_be_raised(self):
        """Test that BeansError can be raised with a message."""
        with pytest.raises(BeansError, match="Test error"):
            raise BeansError("Test error")

    @pytest.mark.parametrize(
        "error_class",
        [
            BeanCreationError,
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
        ],
    )
    def test_all_errors_inherit_from_beans_error(self, error_class):
        """Test that every container error is a BeansError."""
        assert issubclass(error_class, BeansError)


class TestDefinitionErrors:
    """Test cases for definition lookup and registration errors."""

    def test_definition_not_found_error(self):
        """Test DefinitionNotFoundError attributes and message."""
        error = DefinitionNotFoundError("userDao")
        assert error.bean_name == "userDao"
        assert "userDao" in str(error)

    def test_duplicate_definition_error(self):
        """Test DuplicateDefinitionError attributes and message."""
        error = DuplicateDefinitionError("car")
        assert error.bean_name == "car"
        assert "'car'" in str(error)


class TestCreationErrors:
    """Test cases for errors raised while realizing a bean."""

    def test_instantiation_error_with_reason(self):
        """Test InstantiationError includes the reason."""
        error = InstantiationError("car", "No constructor accepts 3 argument(s)")
        assert error.bean_name == "car"
        assert error.reason == "No constructor accepts 3 argument(s)"
        assert "Reason: No constructor accepts 3 argument(s)" in str(error)

    def test_instantiation_error_without_reason(self):
        """Test InstantiationError without a reason."""
        error = InstantiationError("car")
        assert error.reason is None
        assert str(error) == "Failed to instantiate bean 'car'"

    def test_property_binding_error(self):
        """Test PropertyBindingError names bean and property."""
        error = PropertyBindingError("person", "age", "not settable")
        assert error.bean_name == "person"
        assert error.property_name == "age"
        assert "'age'" in str(error)
        assert "'person'" in str(error)

    def test_initialization_error(self):
        """Test InitializationError names the bean."""
        error = InitializationError("userDao", "boom")
        assert error.bean_name == "userDao"
        assert "boom" in str(error)

    def test_method_not_found_error(self):
        """Test MethodNotFoundError names bean and method."""
        error = MethodNotFoundError("userDao", "init_data_method")
        assert error.bean_name == "userDao"
        assert error.method_name == "init_data_method"
        assert "init_data_method" in str(error)

    def test_bean_creation_error(self):
        """Test BeanCreationError names the bean."""
        error = BeanCreationError("helloService", "inner failure")
        assert error.bean_name == "helloService"
        assert str(error) == "Error creating bean with name 'helloService': inner failure"

    def test_circular_reference_error(self):
        """Test CircularReferenceError renders the chain."""
        error = CircularReferenceError(["a", "b", "a"])
        assert error.bean_chain == ["a", "b", "a"]
        assert "a -> b -> a" in str(error)


class TestOtherErrors:
    """Test cases for type, resource and destruction errors."""

    def test_type_mismatch_error(self):
        """Test TypeMismatchError names both types."""

        class Car:
            pass

        class Person:
            pass

        error = TypeMismatchError("car", Person, Car)
        assert error.required_type is Person
        assert error.actual_type is Car
        assert "'Person'" in str(error)
        assert "'Car'" in str(error)

    def test_resource_not_found_error(self):
        """Test ResourceNotFoundError carries the location."""
        error = ResourceNotFoundError("classpath:missing.xml")
        assert error.location == "classpath:missing.xml"
        assert "classpath:missing.xml" in str(error)

    def test_destruction_error_lists_failures(self):
        """Test DestructionError collects every failure."""
        first = RuntimeError("first")
        second = RuntimeError("second")
        error = DestructionError([("a", first), ("b", second)])
        assert error.failures == [("a", first), ("b", second)]
        assert "a, b" in str(error)
