from typing import List, Optional, Sequence, Tuple, Type


class BeansError(Exception):
    """Base exception for container-related errors."""


class DefinitionNotFoundError(BeansError):
    """Raised when no bean definition is registered under a name.

    Attributes:
        bean_name: The name that was looked up.
    """

    def __init__(self, bean_name: str) -> None:
        self.bean_name = bean_name
        super().__init__(f"No bean definition named '{bean_name}'")


class DuplicateDefinitionError(BeansError):
    """Raised when a definition source declares the same bean name twice.

    Attributes:
        bean_name: The duplicated name.
    """

    def __init__(self, bean_name: str) -> None:
        self.bean_name = bean_name
        super().__init__(f"Bean name '{bean_name}' is declared more than once")


class InstantiationError(BeansError):
    """Raised when a raw bean instance cannot be constructed.

    This occurs when:
    - No constructor accepts the given number of arguments.
    - The constructor itself raises.

    Attributes:
        bean_name: The bean being instantiated.
        reason: Optional reason for the failure.
    """

    def __init__(self, bean_name: str, reason: Optional[str] = None) -> None:
        self.bean_name = bean_name
        self.reason = reason
        message = f"Failed to instantiate bean '{bean_name}'"
        if reason:
            message += f". Reason: {reason}"
        super().__init__(message)


class PropertyBindingError(BeansError):
    """Raised when a property value cannot be written onto a bean.

    Attributes:
        bean_name: The bean being populated.
        property_name: The property that could not be bound.
    """

    def __init__(self, bean_name: str, property_name: str, reason: Optional[str] = None) -> None:
        self.bean_name = bean_name
        self.property_name = property_name
        self.reason = reason
        message = f"Failed to set property '{property_name}' on bean '{bean_name}'"
        if reason:
            message += f". Reason: {reason}"
        super().__init__(message)


class InitializationError(BeansError):
    """Raised when ``after_properties_set`` or an init-method fails.

    Attributes:
        bean_name: The bean being initialized.
    """

    def __init__(self, bean_name: str, reason: Optional[str] = None) -> None:
        self.bean_name = bean_name
        self.reason = reason
        message = f"Initialization of bean '{bean_name}' failed"
        if reason:
            message += f". Reason: {reason}"
        super().__init__(message)


class MethodNotFoundError(BeansError):
    """Raised when a configured init or destroy method does not exist on the bean.

    Attributes:
        bean_name: The bean the method was looked up on.
        method_name: The configured method name.
    """

    def __init__(self, bean_name: str, method_name: str) -> None:
        self.bean_name = bean_name
        self.method_name = method_name
        super().__init__(f"Could not find a method named '{method_name}' on bean '{bean_name}'")


class BeanCreationError(BeansError):
    """Raised when realizing a bean fails for any reason.

    The underlying failure is available as ``__cause__``.

    Attributes:
        bean_name: The bean whose creation failed.
    """

    def __init__(self, bean_name: str, reason: Optional[str] = None) -> None:
        self.bean_name = bean_name
        self.reason = reason
        message = f"Error creating bean with name '{bean_name}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class TypeMismatchError(BeansError):
    """Raised when a bean is not an instance of the requested type.

    Attributes:
        bean_name: The bean that was looked up.
        required_type: The type the caller asked for.
        actual_type: The type of the realized bean.
    """

    def __init__(self, bean_name: str, required_type: Type, actual_type: Type) -> None:
        self.bean_name = bean_name
        self.required_type = required_type
        self.actual_type = actual_type
        super().__init__(
            f"Bean named '{bean_name}' is expected to be of type '{required_type.__name__}' "
            f"but was actually of type '{actual_type.__name__}'"
        )


class CircularReferenceError(BeansError):
    """Raised when a bean is requested while it is still being created.

    Attributes:
        bean_chain: Names of the beans involved in the cycle.
    """

    def __init__(self, bean_chain: List[str]) -> None:
        self.bean_chain = bean_chain
        super().__init__(f"Circular reference between beans: {' -> '.join(bean_chain)}")


class ResourceNotFoundError(BeansError):
    """Raised when a resource location cannot be resolved or opened.

    Attributes:
        location: The location string that failed.
    """

    def __init__(self, location: str, reason: Optional[str] = None) -> None:
        self.location = location
        self.reason = reason
        message = f"Resource '{location}' cannot be opened because it does not exist"
        if reason:
            message += f". Reason: {reason}"
        super().__init__(message)


class DefinitionLoadError(BeansError):
    """Raised for malformed definition documents.

    This occurs when:
    - The document cannot be parsed.
    - A bean class cannot be imported.
    - A property declaration has no name.
    """


class ContextStateError(BeansError):
    """Raised when an application context is used in the wrong lifecycle state."""


class DestructionError(BeansError):
    """Raised after shutdown when one or more destroy callbacks failed.

    Attributes:
        failures: Pairs of (bean name, exception) for every failed callback.
    """

    def __init__(self, failures: Sequence[Tuple[str, BaseException]]) -> None:
        self.failures = list(failures)
        names = ", ".join(name for name, _ in self.failures)
        super().__init__(f"Destruction failed for beans: {names}")
