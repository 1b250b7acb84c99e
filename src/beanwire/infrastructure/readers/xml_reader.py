import xml.etree.ElementTree as ET
from typing import Any, BinaryIO, List

from beanwire.domain import BeanReference, DefinitionLoadError, PropertyValues
from beanwire.infrastructure.readers.base import AbstractBeanDefinitionReader, default_bean_name, resolve_class


class XmlBeanDefinitionReader(AbstractBeanDefinitionReader):
    """Reads bean definitions from XML documents.

    Format::

        <beans>
            <bean id="userDao" class="app.dao.UserDao" destroy-method="close"/>
            <bean id="userService" class="app.service.UserService" scope="prototype">
                <property name="timeout" value="30"/>
                <property name="userDao" ref="userDao"/>
            </bean>
        </beans>

    ``constructors`` optionally lists alternate constructors, comma separated.
    The bean name is ``id``, then ``name``, then the class name with a
    lower-case first letter. Elements other than ``bean`` and ``property``
    are ignored.
    """

    def _do_load_bean_definitions(self, stream: BinaryIO, description: str) -> int:
        try:
            root = ET.parse(stream).getroot()
        except ET.ParseError as e:
            raise DefinitionLoadError(f"Malformed XML in {description}: {e}") from e

        count = 0
        for bean_element in root:
            if bean_element.tag != "bean":
                continue
            self._load_bean(bean_element, description)
            count += 1
        return count

    def _load_bean(self, bean_element: ET.Element, description: str) -> None:
        bean_class = resolve_class(bean_element.get("class", ""))
        bean_name = bean_element.get("id") or bean_element.get("name") or default_bean_name(bean_class)

        property_values = PropertyValues()
        for property_element in bean_element:
            if property_element.tag != "property":
                continue
            property_name = property_element.get("name")
            if not property_name:
                raise DefinitionLoadError(f"Property of bean [{bean_name}] in {description} has no name")
            property_values.add(property_name, self._property_value(property_element))

        bean_definition = self._build_definition(
            description,
            bean_name,
            bean_class=bean_class,
            property_values=property_values,
            init_method_name=bean_element.get("init-method"),
            destroy_method_name=bean_element.get("destroy-method"),
            scope=bean_element.get("scope"),
            constructor_names=self._split_names(bean_element.get("constructors", "")),
        )
        self._register(bean_name, bean_definition)

    @staticmethod
    def _property_value(property_element: ET.Element) -> Any:
        ref = property_element.get("ref")
        if ref:
            return BeanReference(bean_name=ref)
        if "value" in property_element.attrib:
            return property_element.get("value")
        text = (property_element.text or "").strip()
        return text or None

    @staticmethod
    def _split_names(names: str) -> List[str]:
        return [name.strip() for name in names.split(",") if name.strip()]
