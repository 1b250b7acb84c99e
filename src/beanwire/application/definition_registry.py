from typing import Dict, List

from beanwire.domain import BeanDefinition, DefinitionNotFoundError, IBeanDefinitionRegistry


class BeanDefinitionRegistry(IBeanDefinitionRegistry):
    """Name-keyed store of bean definitions.

    Names are kept in registration order, which makes post-processor discovery
    and singleton pre-instantiation deterministic.

    Attributes:
        _bean_definitions: Dictionary mapping bean names to definitions.
    """

    def __init__(self) -> None:
        self._bean_definitions: Dict[str, BeanDefinition] = {}

    def register_bean_definition(self, bean_name: str, bean_definition: BeanDefinition) -> None:
        """Register a definition, replacing any existing one under the same name.

        A replaced definition keeps its original position in the name order.

        Args:
            bean_name: Name of the bean.
            bean_definition: The construction recipe.

        Raises:
            ValueError: If the name is empty.

        Example:
            >>> registry.register_bean_definition("userDao", BeanDefinition(bean_class=UserDao))
        """
        if not bean_name or not bean_name.strip():
            raise ValueError("Bean name must not be empty")
        self._bean_definitions[bean_name] = bean_definition

    def get_bean_definition(self, bean_name: str) -> BeanDefinition:
        try:
            return self._bean_definitions[bean_name]
        except KeyError:
            raise DefinitionNotFoundError(bean_name) from None

    def contains_bean_definition(self, bean_name: str) -> bool:
        return bean_name in self._bean_definitions

    def get_bean_definition_names(self) -> List[str]:
        return list(self._bean_definitions)

    def remove_bean_definition(self, bean_name: str) -> None:
        """Remove a definition.

        Raises:
            DefinitionNotFoundError: If no definition is registered under the name.
        """
        if bean_name not in self._bean_definitions:
            raise DefinitionNotFoundError(bean_name)
        del self._bean_definitions[bean_name]

    def get_bean_definition_count(self) -> int:
        return len(self._bean_definitions)

    def clear(self) -> None:
        self._bean_definitions.clear()
