from pathlib import PurePosixPath
from typing import Dict, Optional, Type
from urllib.parse import urlparse

from beanwire.application import AbstractApplicationContext, DefaultListableBeanFactory
from beanwire.config import ContainerSettings
from beanwire.domain import DefinitionLoadError, IInstantiationStrategy, IResourceLoader
from beanwire.infrastructure.io import CLASSPATH_URL_PREFIX, DefaultResourceLoader
from beanwire.infrastructure.readers import (
    AbstractBeanDefinitionReader,
    XmlBeanDefinitionReader,
    YamlBeanDefinitionReader,
)

READERS_BY_SUFFIX: Dict[str, Type[AbstractBeanDefinitionReader]] = {
    ".xml": XmlBeanDefinitionReader,
    ".yaml": YamlBeanDefinitionReader,
    ".yml": YamlBeanDefinitionReader,
}


def reader_class_for(location: str) -> Type[AbstractBeanDefinitionReader]:
    """Pick a definition reader from a location's file suffix.

    Raises:
        DefinitionLoadError: If the suffix is not recognized.
    """
    path = location[len(CLASSPATH_URL_PREFIX) :] if location.startswith(CLASSPATH_URL_PREFIX) else location
    parsed = urlparse(path)
    if parsed.scheme in ("http", "https", "file"):
        path = parsed.path
    suffix = PurePosixPath(path.replace("\\", "/")).suffix.lower()
    try:
        return READERS_BY_SUFFIX[suffix]
    except KeyError:
        raise DefinitionLoadError(f"No definition reader for location [{location}]") from None


class ConfigApplicationContext(AbstractApplicationContext):
    """Application context loading definitions from XML or YAML locations.

    The reader for each location is chosen by its suffix (``.xml``,
    ``.yaml``, ``.yml``). The context refreshes on construction unless told
    otherwise.

    Example:
        >>> with ConfigApplicationContext("classpath:spring.xml") as context:
        ...     person = context.get_bean("person", required_type=Person)
    """

    def __init__(
        self,
        *config_locations: str,
        settings: Optional[ContainerSettings] = None,
        resource_loader: Optional[IResourceLoader] = None,
        instantiation_strategy: Optional[IInstantiationStrategy] = None,
        refresh: bool = True,
    ) -> None:
        super().__init__(settings=settings, instantiation_strategy=instantiation_strategy)
        self.config_locations = list(config_locations)
        self.resource_loader = resource_loader or DefaultResourceLoader(url_timeout=self.settings.url_timeout)
        if refresh:
            self.refresh()

    def _load_bean_definitions(self, bean_factory: DefaultListableBeanFactory) -> None:
        for location in self.config_locations:
            reader = self._create_reader(location, bean_factory)
            reader.load_bean_definitions(location)

    def _create_reader(self, location: str, bean_factory: DefaultListableBeanFactory) -> AbstractBeanDefinitionReader:
        return reader_class_for(location)(bean_factory, self.resource_loader)


class ClassPathXmlApplicationContext(ConfigApplicationContext):
    """Application context reading XML definitions, from the class path by default.

    Locations without a prefix are looked up on the class path.
    """

    def __init__(self, *config_locations: str, **kwargs) -> None:
        locations = [self._with_prefix(location) for location in config_locations]
        super().__init__(*locations, **kwargs)

    @staticmethod
    def _with_prefix(location: str) -> str:
        if location.startswith(CLASSPATH_URL_PREFIX) or urlparse(location).scheme in ("http", "https", "file"):
            return location
        return CLASSPATH_URL_PREFIX + location

    def _create_reader(self, location: str, bean_factory: DefaultListableBeanFactory) -> AbstractBeanDefinitionReader:
        return XmlBeanDefinitionReader(bean_factory, self.resource_loader)
