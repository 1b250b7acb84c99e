import threading
from typing import Any, Callable, Dict, List, Optional, Tuple

from beanwire.domain import DestructionError, ISingletonRegistry
from beanwire.logging import get_logger

logger = get_logger(__name__)


class DefaultSingletonRegistry(ISingletonRegistry):
    """Caches fully built singletons and the callbacks that destroy them.

    The creation pipeline writes each name once and never mutates a cached
    singleton; only test helpers replace entries. Access is guarded by a
    re-entrant lock so beans can be looked up from several threads once the
    context is refreshed.

    Attributes:
        _singleton_objects: Cache of singleton instances by bean name.
        _disposable_beans: Destroy callbacks in registration order.
        _destroy_in_reverse_order: Whether shutdown runs callbacks last-first.
    """

    def __init__(self, destroy_in_reverse_order: bool = True) -> None:
        """Initialize the registry with empty caches.

        Args:
            destroy_in_reverse_order: Run destroy callbacks in reverse
                registration order, so dependents are destroyed before the
                beans they were wired with.
        """
        self._singleton_objects: Dict[str, Any] = {}
        self._disposable_beans: List[Tuple[str, Callable[[], None]]] = []
        self._destroy_in_reverse_order = destroy_in_reverse_order
        self._lock = threading.RLock()

    def get_singleton(self, bean_name: str) -> Optional[Any]:
        with self._lock:
            return self._singleton_objects.get(bean_name)

    def contains_singleton(self, bean_name: str) -> bool:
        with self._lock:
            return bean_name in self._singleton_objects

    def add_singleton(self, bean_name: str, singleton: Any) -> None:
        """Cache a singleton under a name.

        Callers are responsible for only caching singleton-scoped beans.

        Args:
            bean_name: Name of the bean.
            singleton: The fully initialized instance.
        """
        with self._lock:
            self._singleton_objects[bean_name] = singleton

    def get_singleton_names(self) -> List[str]:
        with self._lock:
            return list(self._singleton_objects)

    def register_disposable_bean(self, bean_name: str, destroy_callback: Callable[[], None]) -> None:
        """Register a callback to run when singletons are destroyed.

        Args:
            bean_name: Name of the bean the callback destroys.
            destroy_callback: Zero-argument callable.
        """
        with self._lock:
            self._disposable_beans.append((bean_name, destroy_callback))

    def destroy_singletons(self, raise_on_failure: bool = False) -> List[Tuple[str, BaseException]]:
        """Run every destroy callback, then clear the registry.

        A failing callback is logged and collected; the remaining callbacks
        still run. Calling this again after the registry is cleared does nothing.

        Args:
            raise_on_failure: Raise ``DestructionError`` after all callbacks
                ran if any of them failed.

        Returns:
            Pairs of (bean name, exception) for each failed callback.

        Raises:
            DestructionError: If ``raise_on_failure`` is set and a callback failed.
        """
        with self._lock:
            disposables = list(self._disposable_beans)
            self._disposable_beans.clear()
            self._singleton_objects.clear()

        if self._destroy_in_reverse_order:
            disposables.reverse()

        failures: List[Tuple[str, BaseException]] = []
        for bean_name, destroy_callback in disposables:
            try:
                destroy_callback()
            except Exception as e:
                logger.error("bean_destroy_failed", bean_name=bean_name, error=str(e), exc_info=True)
                failures.append((bean_name, e))
            else:
                logger.debug("bean_destroyed", bean_name=bean_name)

        if failures and raise_on_failure:
            raise DestructionError(failures)
        return failures
