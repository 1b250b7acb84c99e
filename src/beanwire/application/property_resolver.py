import inspect
from typing import Any, Dict, Type, get_type_hints

from pydantic import PydanticSchemaGenerationError, TypeAdapter, ValidationError

from beanwire.domain import BeanDefinition, BeanReference, IBeanFactory, PropertyBindingError


class PropertyResolver:
    """Applies a definition's property values onto a raw bean.

    Bean references are resolved through a full ``get_bean`` call on the
    factory, so dependencies are realized on demand, depth first. String
    literals written to an annotated attribute are coerced to the annotated
    type with pydantic (``"42"`` becomes ``42`` for an ``int`` field).
    """

    def apply_property_values(
        self,
        bean_name: str,
        bean: Any,
        bean_definition: BeanDefinition,
        bean_factory: IBeanFactory,
    ) -> None:
        """Resolve and bind every property value in declaration order.

        Args:
            bean_name: Name of the bean being populated.
            bean: The raw instance.
            bean_definition: Definition holding the property values.
            bean_factory: Factory used to resolve bean references.

        Raises:
            PropertyBindingError: If a property does not name a settable slot
                or the value cannot be converted.
            BeanCreationError: If a referenced bean cannot be realized.

        Example:
            >>> definition = BeanDefinition(bean_class=HelloService)
            >>> definition.property_values.add("userDao", BeanReference(bean_name="userDao"))
            >>> resolver.apply_property_values("helloService", service, definition, factory)
            >>> assert service.userDao is factory.get_bean("userDao")
        """
        type_hints = self._type_hints(type(bean))

        for property_value in bean_definition.property_values.get_property_values():
            name = property_value.name
            value = property_value.value

            if isinstance(value, BeanReference):
                value = bean_factory.get_bean(value.bean_name)
            elif isinstance(value, str) and name in type_hints:
                value = self._convert(bean_name, name, value, type_hints[name])

            setter = bean_definition.setters.get(name)
            if setter is not None:
                try:
                    setter(bean, value)
                except Exception as e:
                    raise PropertyBindingError(bean_name, name, f"setter raised {type(e).__name__}: {e}") from e
                continue

            self._set_attribute(bean_name, bean, name, value, type_hints)

    def _set_attribute(self, bean_name: str, bean: Any, name: str, value: Any, type_hints: Dict[str, Any]) -> None:
        if not self._is_settable(bean, name, type_hints):
            raise PropertyBindingError(bean_name, name, f"{type(bean).__name__} has no settable attribute '{name}'")
        try:
            setattr(bean, name, value)
        except (AttributeError, TypeError, ValueError) as e:
            raise PropertyBindingError(bean_name, name, str(e)) from e

    @staticmethod
    def _is_settable(bean: Any, name: str, type_hints: Dict[str, Any]) -> bool:
        """Check whether a name corresponds to a writable slot on the bean."""
        if name.startswith("__"):
            return False

        try:
            class_attribute = inspect.getattr_static(type(bean), name)
        except AttributeError:
            class_attribute = None
        else:
            if isinstance(class_attribute, property):
                return class_attribute.fset is not None
            if inspect.isfunction(class_attribute) or isinstance(class_attribute, (classmethod, staticmethod)):
                return False
            return True

        if name in getattr(bean, "__dict__", {}):
            return True
        return name in type_hints

    @staticmethod
    def _type_hints(bean_class: Type) -> Dict[str, Any]:
        try:
            return get_type_hints(bean_class)
        except (NameError, TypeError):
            # Unresolvable forward references; fall back to raw annotations.
            hints: Dict[str, Any] = {}
            for klass in reversed(bean_class.__mro__):
                hints.update(getattr(klass, "__annotations__", {}))
            return {name: hint for name, hint in hints.items() if not isinstance(hint, str)}

    @staticmethod
    def _convert(bean_name: str, name: str, value: str, annotation: Any) -> Any:
        if annotation is Any or annotation is str:
            return value
        try:
            return TypeAdapter(annotation).validate_python(value)
        except ValidationError as e:
            raise PropertyBindingError(bean_name, name, f"cannot convert {value!r}: {e.error_count()} error(s)") from e
        except PydanticSchemaGenerationError:
            # Annotation pydantic cannot build a schema for; keep the literal.
            return value
