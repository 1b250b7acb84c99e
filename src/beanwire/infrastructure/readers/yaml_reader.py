from typing import Any, BinaryIO, Dict, Iterator, Mapping, Optional, Tuple

import yaml

from beanwire.domain import BeanReference, DefinitionLoadError, PropertyValues
from beanwire.infrastructure.readers.base import AbstractBeanDefinitionReader, default_bean_name, resolve_class


class YamlBeanDefinitionReader(AbstractBeanDefinitionReader):
    """Reads bean definitions from YAML documents.

    Format::

        beans:
          userDao:
            class: app.dao.UserDao
            destroy-method: close
          userService:
            class: app.service.UserService
            scope: prototype
            properties:
              timeout: 30
              userDao: {ref: userDao}

    ``beans`` may also be a list of entries carrying ``id`` or ``name``; the
    naming rules are then the same as for XML documents.
    """

    def _do_load_bean_definitions(self, stream: BinaryIO, description: str) -> int:
        try:
            document = yaml.safe_load(stream)
        except yaml.YAMLError as e:
            raise DefinitionLoadError(f"Malformed YAML in {description}: {e}") from e

        if document is None:
            return 0
        if not isinstance(document, Mapping) or "beans" not in document:
            raise DefinitionLoadError(f"{description} has no top-level 'beans' section")

        count = 0
        for bean_name, entry in self._iter_entries(document["beans"], description):
            self._load_bean(bean_name, entry, description)
            count += 1
        return count

    def _iter_entries(self, beans: Any, description: str) -> Iterator[Tuple[Optional[str], Dict[str, Any]]]:
        if beans is None:
            return
        if isinstance(beans, Mapping):
            for bean_name, entry in beans.items():
                yield str(bean_name), self._check_entry(entry, description)
        elif isinstance(beans, list):
            for entry in beans:
                entry = self._check_entry(entry, description)
                yield entry.get("id") or entry.get("name"), entry
        else:
            raise DefinitionLoadError(f"'beans' in {description} must be a mapping or a list")

    @staticmethod
    def _check_entry(entry: Any, description: str) -> Dict[str, Any]:
        if not isinstance(entry, Mapping):
            raise DefinitionLoadError(f"Bean entry in {description} must be a mapping, got {type(entry).__name__}")
        return dict(entry)

    def _load_bean(self, bean_name: Optional[str], entry: Dict[str, Any], description: str) -> None:
        bean_class = resolve_class(str(entry.get("class", "")))
        bean_name = bean_name or default_bean_name(bean_class)

        properties = entry.get("properties") or {}
        if not isinstance(properties, Mapping):
            raise DefinitionLoadError(f"Properties of bean [{bean_name}] in {description} must be a mapping")

        property_values = PropertyValues()
        for property_name, value in properties.items():
            if not property_name:
                raise DefinitionLoadError(f"Property of bean [{bean_name}] in {description} has no name")
            property_values.add(str(property_name), self._property_value(value))

        bean_definition = self._build_definition(
            description,
            bean_name,
            bean_class=bean_class,
            property_values=property_values,
            init_method_name=entry.get("init-method"),
            destroy_method_name=entry.get("destroy-method"),
            scope=entry.get("scope"),
            constructor_names=entry.get("constructors") or [],
        )
        self._register(bean_name, bean_definition)

    @staticmethod
    def _property_value(value: Any) -> Any:
        if isinstance(value, Mapping) and set(value) == {"ref"}:
            return BeanReference(bean_name=str(value["ref"]))
        return value
