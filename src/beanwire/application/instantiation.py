import inspect
import threading
from typing import Any, Callable, Dict, List, Optional, Tuple, Type

from beanwire.domain import BeanDefinition, IInstantiationStrategy, InstantiationError


def _accepts(candidate: Callable[..., Any], args: Tuple[Any, ...]) -> bool:
    """Check whether a constructor can be called with exactly ``args`` positionally.

    Only the argument count is checked, not the argument types.
    """
    try:
        signature = inspect.signature(candidate)
    except (TypeError, ValueError):
        # Builtins without introspectable signatures; let the call decide.
        return True
    try:
        signature.bind(*args)
    except TypeError:
        return False
    return True


class SimpleInstantiationStrategy(IInstantiationStrategy):
    """Instantiates beans by calling their class or an alternate constructor.

    Candidate constructors are the class itself followed by the definition's
    ``constructor_names`` (class-level callables such as classmethods), in that
    order. The first candidate that accepts the arguments wins.
    """

    def instantiate(self, bean_definition: BeanDefinition, bean_name: str, args: Optional[tuple] = None) -> Any:
        """Create an unpopulated instance.

        Args:
            bean_definition: The construction recipe.
            bean_name: Name of the bean.
            args: Positional constructor arguments. Empty or None selects the
                no-argument form.

        Returns:
            The raw instance.

        Raises:
            InstantiationError: If no candidate accepts the arguments or the
                constructor raises.

        Example:
            >>> strategy = SimpleInstantiationStrategy()
            >>> car = strategy.instantiate(BeanDefinition(bean_class=Car), "car", ("porsche",))
        """
        args = tuple(args or ())
        target_class = self._target_class(bean_definition, bean_name)
        constructor = self._select_constructor(target_class, bean_definition, bean_name, args)

        try:
            return constructor(*args)
        except Exception as e:
            raise InstantiationError(bean_name, f"{type(e).__name__}: {e}") from e

    def _target_class(self, bean_definition: BeanDefinition, bean_name: str) -> Type:
        return bean_definition.bean_class

    def _select_constructor(
        self,
        target_class: Type,
        bean_definition: BeanDefinition,
        bean_name: str,
        args: Tuple[Any, ...],
    ) -> Callable[..., Any]:
        candidates: List[Callable[..., Any]] = [target_class]
        for constructor_name in bean_definition.constructor_names:
            constructor = getattr(target_class, constructor_name, None)
            if not callable(constructor):
                raise InstantiationError(
                    bean_name,
                    f"{target_class.__name__} has no constructor named '{constructor_name}'",
                )
            candidates.append(constructor)

        for candidate in candidates:
            if _accepts(candidate, args):
                return candidate

        raise InstantiationError(
            bean_name,
            f"No constructor of {bean_definition.bean_class.__name__} accepts {len(args)} argument(s)",
        )


class SubclassingInstantiationStrategy(SimpleInstantiationStrategy):
    """Instantiates a dynamically generated subclass of the bean class.

    The generated subclass adds nothing by itself; it is the hook for
    strategies that need to intercept methods on the instances they create.
    Generated classes are cached per bean class.
    """

    def __init__(self) -> None:
        self._generated: Dict[Type, Type] = {}
        self._lock = threading.Lock()

    def _target_class(self, bean_definition: BeanDefinition, bean_name: str) -> Type:
        bean_class = bean_definition.bean_class
        with self._lock:
            if bean_class not in self._generated:
                try:
                    self._generated[bean_class] = self.generate_subclass(bean_class)
                except TypeError as e:
                    raise InstantiationError(bean_name, f"Cannot subclass {bean_class.__name__}: {e}") from e
            return self._generated[bean_class]

    def generate_subclass(self, bean_class: Type) -> Type:
        """Build the subclass used for a bean class.

        Override to add attributes or wrap methods.
        """
        namespace = {
            "__module__": bean_class.__module__,
            "__qualname__": bean_class.__qualname__,
            "__doc__": bean_class.__doc__,
        }
        return type(bean_class.__name__, (bean_class,), namespace)
