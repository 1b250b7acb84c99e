"""Unit tests for domain models."""

import pytest
from pydantic import ValidationError

from beanwire.domain import BeanDefinition, BeanReference, PropertyValue, PropertyValues, Scope


class Car:
    def __init__(self):
        self.brand = None


class TestBeanReference:
    """Test cases for the BeanReference value object."""

    def test_reference_holds_name(self):
        """Test that a reference only carries the bean name."""
        reference = BeanReference(bean_name="userDao")
        assert reference.bean_name == "userDao"

    def test_reference_is_immutable(self):
        """Test that a reference cannot be modified."""
        reference = BeanReference(bean_name="userDao")
        with pytest.raises(ValidationError):
            reference.bean_name = "other"

    def test_reference_requires_name(self):
        """Test that an empty name is rejected."""
        with pytest.raises(ValidationError):
            BeanReference(bean_name="")

    def test_references_with_same_name_are_equal(self):
        """Test value equality of references."""
        assert BeanReference(bean_name="a") == BeanReference(bean_name="a")


class TestPropertyValue:
    """Test cases for the PropertyValue model."""

    def test_literal_property(self):
        """Test a literal property value."""
        property_value = PropertyValue(name="brand", value="porsche")
        assert property_value.name == "brand"
        assert property_value.value == "porsche"
        assert property_value.is_reference is False

    def test_reference_property(self):
        """Test a property pointing at another bean."""
        property_value = PropertyValue(name="car", value=BeanReference(bean_name="car"))
        assert property_value.is_reference is True

    def test_property_requires_name(self):
        """Test that a property without a name is rejected."""
        with pytest.raises(ValidationError):
            PropertyValue(name="", value=1)


class TestPropertyValues:
    """Test cases for the PropertyValues set."""

    def test_empty_by_default(self):
        """Test that a new set is empty."""
        property_values = PropertyValues()
        assert property_values.is_empty()
        assert property_values.get_property_values() == []

    def test_add_keeps_declaration_order(self):
        """Test that properties keep the order they were added in."""
        property_values = PropertyValues().add("name", "derek").add("age", 30)
        assert [pv.name for pv in property_values.get_property_values()] == ["name", "age"]

    def test_adding_same_name_replaces_previous(self):
        """Test last-write-wins for a repeated property name."""
        property_values = PropertyValues()
        property_values.add_property_value(PropertyValue(name="name", value="derek"))
        property_values.add_property_value(PropertyValue(name="age", value=30))
        property_values.add_property_value(PropertyValue(name="name", value="bigboss"))

        values = property_values.get_property_values()
        assert len(values) == 2
        assert values[0].name == "name"
        assert values[0].value == "bigboss"

    def test_get_property_value(self):
        """Test lookup of a property by name."""
        property_values = PropertyValues().add("brand", "porsche")
        assert property_values.get_property_value("brand").value == "porsche"
        assert property_values.get_property_value("missing") is None
        assert property_values.contains("brand")
        assert not property_values.contains("missing")

    def test_get_property_values_returns_copy(self):
        """Test that the returned list cannot mutate the set."""
        property_values = PropertyValues().add("brand", "porsche")
        property_values.get_property_values().clear()
        assert property_values.contains("brand")


class TestBeanDefinition:
    """Test cases for the BeanDefinition model."""

    def test_defaults(self):
        """Test the default values of a definition."""
        definition = BeanDefinition(bean_class=Car)
        assert definition.bean_class is Car
        assert definition.scope == Scope.SINGLETON
        assert definition.is_singleton()
        assert not definition.is_prototype()
        assert definition.init_method_name is None
        assert definition.destroy_method_name is None
        assert definition.property_values.is_empty()
        assert definition.constructor_names == []
        assert definition.setters == {}

    def test_prototype_scope_from_string(self):
        """Test that the scope accepts strings, case-insensitively."""
        definition = BeanDefinition(bean_class=Car, scope="Prototype")
        assert definition.scope == Scope.PROTOTYPE
        assert definition.is_prototype()

    def test_blank_scope_means_singleton(self):
        """Test that a blank scope falls back to singleton."""
        assert BeanDefinition(bean_class=Car, scope="").is_singleton()
        assert BeanDefinition(bean_class=Car, scope=None).is_singleton()

    def test_invalid_scope_is_rejected(self):
        """Test that an unknown scope fails validation."""
        with pytest.raises(ValidationError):
            BeanDefinition(bean_class=Car, scope="session")

    def test_blank_method_names_become_none(self):
        """Test that empty init/destroy method names are treated as absent."""
        definition = BeanDefinition(bean_class=Car, init_method_name="", destroy_method_name="  ")
        assert definition.init_method_name is None
        assert definition.destroy_method_name is None

    def test_bean_class_must_be_a_class(self):
        """Test that bean_class rejects non-class values."""
        with pytest.raises(ValidationError):
            BeanDefinition(bean_class="not.a.Class")

    def test_property_values_are_shared_not_copied(self):
        """Test that a definition keeps the PropertyValues instance it was given."""
        property_values = PropertyValues()
        definition = BeanDefinition(bean_class=Car, property_values=property_values)
        property_values.add("brand", "hongqi")
        assert definition.property_values.get_property_value("brand").value == "hongqi"

    def test_scope_can_be_reassigned(self):
        """Test that the scope is validated on assignment."""
        definition = BeanDefinition(bean_class=Car)
        definition.scope = "prototype"
        assert definition.is_prototype()
        with pytest.raises(ValidationError):
            definition.scope = "unknown"
