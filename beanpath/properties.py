"""
This library provides the means by which bean paths read and write named properties
on values that are neither dictionaries nor sequences; i.e., plain objects,
dataclasses and named tuples.
"""
import dataclasses
from typing import Any, Optional

import stringcase

from beanpath.data_helper import ABSENT


class PropertyAccessor(object):
    """
    Instances of this class know how to read and write the named properties of an
    object.  When asked for a property that is spelled in camel case, like ``firstName``,
    and the object has no such attribute, the snake case spelling, ``first_name``, is
    tried as well, unless that has been turned off.
    """
    def __init__(self, snake_case_fallback: bool = True):
        """
        A function that creates instances of the ``PropertyAccessor`` class.

        :param snake_case_fallback: whether snake case spellings of property names should
        be tried when the name, as given, is not found.
        """
        self._snake_case_fallback = snake_case_fallback

    @property
    def snake_case_fallback(self) -> bool:
        """
        A read-only property that returns whether snake case spellings of property names
        are tried.

        :return: ``True`` if snake case spellings are tried.
        """
        return self._snake_case_fallback

    def _attribute_name(self, bean: Any, name: str) -> Optional[str]:
        if hasattr(bean, name):
            return name
        if self._snake_case_fallback and name:
            snake_name = stringcase.snakecase(name)
            if snake_name != name and hasattr(bean, snake_name):
                return snake_name
        return None

    def read(self, bean: Any, name: str) -> Any:
        """
        A function that returns the value of the named property of the given object.
        Only data is exposed: names starting with an underscore and attributes that are
        callable, like methods, are treated as missing.

        :param bean: the object to read from.
        :param name: the name of the property to read.
        :return: the property's value or ``ABSENT`` if the object has no such property.
        """
        if name.startswith('_'):
            return ABSENT
        attribute = self._attribute_name(bean, name)
        if attribute is None:
            return ABSENT
        value = getattr(bean, attribute)
        return ABSENT if callable(value) else value

    def write(self, bean: Any, name: str, value: Any) -> Any:
        """
        A function that sets the named property of the given object to the given value.
        Objects that cannot be changed in place, frozen dataclasses and named tuples, are
        copied with the property replaced.  Callers must carry on with whatever object
        this function returns.

        :param bean: the object to write to.
        :param name: the name of the property to set.
        :param value: the value to set the property to.
        :return: the object that now holds the value.
        :raises AttributeError: if the property cannot be set.
        """
        if name.startswith('_'):
            raise AttributeError(f'"{name}" is not a property that may be set')

        attribute = self._attribute_name(bean, name) or name

        if dataclasses.is_dataclass(bean) and not isinstance(bean, type) and bean.__dataclass_params__.frozen:
            try:
                return dataclasses.replace(bean, **{attribute: value})
            except TypeError as error:
                raise AttributeError(str(error)) from error

        if isinstance(bean, tuple) and hasattr(bean, '_fields'):
            try:
                return bean._replace(**{attribute: value})
            except ValueError as error:
                raise AttributeError(str(error)) from error

        try:
            setattr(bean, attribute, value)
        except TypeError as error:
            raise AttributeError(str(error)) from error

        return bean


_default_accessor = PropertyAccessor()
_accessor = _default_accessor


def get_property_accessor() -> PropertyAccessor:
    """
    A function that returns the property accessor currently in force.

    :return: the current property accessor.
    """
    return _accessor


def set_property_accessor(accessor: Optional[PropertyAccessor] = None):
    global _accessor
    _accessor = accessor or _default_accessor
