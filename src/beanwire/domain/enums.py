from enum import Enum


class Scope(str, Enum):
    """Defines the scope of a bean instance.

    Attributes:
        SINGLETON: Single instance shared across the entire container.
        PROTOTYPE: New instance created on each lookup, never cached.
    """

    SINGLETON = "singleton"
    PROTOTYPE = "prototype"

    def __str__(self) -> str:
        return self.value
