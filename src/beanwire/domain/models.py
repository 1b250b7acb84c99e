from typing import Any, Callable, Dict, List, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, field_validator

from beanwire.domain.enums import Scope


class BeanReference(BaseModel):
    """Value object pointing at another bean by name.

    The referenced bean is looked up through the factory when the owning
    property is applied; no instance is held here.

    Attributes:
        bean_name: Name of the referenced bean.
    """

    model_config = ConfigDict(frozen=True)

    bean_name: str = Field(..., min_length=1, description="Name of the referenced bean.")


class PropertyValue(BaseModel):
    """A single (name, value) property assignment.

    Attributes:
        name: Name of the slot to write on the bean.
        value: A literal value or a ``BeanReference``.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(..., min_length=1, description="Name of the property.")
    value: Any = Field(default=None, description="Literal value or bean reference.")

    @property
    def is_reference(self) -> bool:
        return isinstance(self.value, BeanReference)


class PropertyValues(BaseModel):
    """Ordered set of property assignments for one bean definition.

    Adding a property whose name is already present replaces the earlier
    entry in place.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    property_values: List[PropertyValue] = Field(
        default_factory=list,
        description="Property assignments in declaration order.",
    )

    def add_property_value(self, property_value: PropertyValue) -> None:
        """Add a property, replacing any existing one with the same name.

        Args:
            property_value: The property to add.
        """
        for index, existing in enumerate(self.property_values):
            if existing.name == property_value.name:
                self.property_values[index] = property_value
                return
        self.property_values.append(property_value)

    def add(self, name: str, value: Any) -> "PropertyValues":
        """Shorthand for ``add_property_value(PropertyValue(name=name, value=value))``.

        Returns:
            This set, so calls can be chained.
        """
        self.add_property_value(PropertyValue(name=name, value=value))
        return self

    def get_property_value(self, name: str) -> Optional[PropertyValue]:
        for property_value in self.property_values:
            if property_value.name == name:
                return property_value
        return None

    def get_property_values(self) -> List[PropertyValue]:
        return list(self.property_values)

    def contains(self, name: str) -> bool:
        return self.get_property_value(name) is not None

    def is_empty(self) -> bool:
        return not self.property_values


class BeanDefinition(BaseModel):
    """Construction recipe for one bean.

    Attributes:
        bean_class: The class to construct.
        property_values: Properties applied after construction.
        init_method_name: Optional method invoked after properties are set.
        destroy_method_name: Optional method invoked at container shutdown.
        scope: Singleton (cached) or prototype (fresh per lookup).
        constructor_names: Alternate constructors (class-level callables on
            ``bean_class``) tried after the class itself, in order.
        setters: Explicit per-property setter functions, taking precedence
            over attribute assignment.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    bean_class: Type = Field(..., description="The class to instantiate.")
    property_values: PropertyValues = Field(
        default_factory=PropertyValues,
        description="Properties applied after construction.",
    )
    init_method_name: Optional[str] = Field(default=None, description="Init method name.")
    destroy_method_name: Optional[str] = Field(default=None, description="Destroy method name.")
    scope: Scope = Field(default=Scope.SINGLETON, description="Scope of the bean.")
    constructor_names: List[str] = Field(
        default_factory=list,
        description="Alternate constructor names tried after the class itself.",
    )
    setters: Dict[str, Callable[[Any, Any], None]] = Field(
        default_factory=dict,
        description="Explicit setters keyed by property name.",
    )

    @field_validator("init_method_name", "destroy_method_name", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("scope", mode="before")
    @classmethod
    def _normalize_scope(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return Scope.SINGLETON
        if isinstance(value, str):
            return value.strip().lower()
        return value

    def is_singleton(self) -> bool:
        return self.scope == Scope.SINGLETON

    def is_prototype(self) -> bool:
        return self.scope == Scope.PROTOTYPE
