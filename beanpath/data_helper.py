"""
This library gives us the means to classify the values we meet while walking a
dictionary/list/object graph with a bean path.
"""
import re

from collections.abc import Mapping, MutableMapping, MutableSequence, Sequence
from typing import Any

_digits_pattern = re.compile(r'[0-9]+')
_signed_integer_pattern = re.compile(r'[+-][0-9]+')


class _Absent(object):
    """
    The type of the ``ABSENT`` sentinel.  There is only ever one instance of this
    class.  It is falsy so it may be tested like ``None`` but is never equal to it.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return 'ABSENT'

    def __reduce__(self):
        return _Absent, ()


# The value returned when a path does not lead to anything.
ABSENT = _Absent()


def is_absent(thing: Any) -> bool:
    """
    A function that returns whether the given value is "no value"; i.e., either
    ``None`` or the ``ABSENT`` sentinel.

    :param thing: the value to check.
    :return: ``True`` if there is nothing there.
    """
    return thing is None or thing is ABSENT


def is_object(thing: Any) -> bool:
    """
    A function that returns whether the given value is an object.  This is in terms of
    a data structure and not Python; i.e., it will return ``True`` for any value which
    is dictionary-like.

    :param thing: the value to check.
    :return: ``True`` if the value is (or is like) a dictionary.
    """
    return isinstance(thing, Mapping)


def is_mutable_object(thing: Any) -> bool:
    """
    A function that returns whether the given value is a dictionary-like object that
    may be changed in place.

    :param thing: the value to check.
    :return: ``True`` if the value is a mutable mapping.
    """
    return isinstance(thing, MutableMapping)


def is_sequence(thing: Any) -> bool:
    """
    A function that returns whether the given value may be indexed by position.  Strings
    and bytes are sequences to Python but are treated as simple values here.

    :param thing: the value to check.
    :return: ``True`` if the value is a list, tuple or similar.
    """
    return isinstance(thing, Sequence) and not isinstance(thing, (str, bytes, bytearray))


def is_array(thing: Any) -> bool:
    """
    A function that returns whether the given value is an array.  This is in terms of
    a data structure and equates to checking that the value is a sequence that can be
    changed (and grown) in place.

    :param thing: the value to check.
    :return: ``True`` if the value is a list or list-like.
    """
    return isinstance(thing, MutableSequence) and not isinstance(thing, bytearray)


def is_string(thing: Any) -> bool:
    """
    A function that returns whether the given value is a string.

    :param thing: the value to check.
    :return: ``True`` if the value is a string.
    """
    return isinstance(thing, str)


def is_digits(text: str) -> bool:
    """
    A function that returns whether the given text consists only of the ASCII decimal
    digits.  The empty string is not.

    :param text: the text to check.
    :return: ``True`` if the text is a non-empty run of digits.
    """
    return _digits_pattern.fullmatch(text) is not None


def is_signed_integer(text: str) -> bool:
    """
    A function that returns whether the given text is an integer literal carrying an
    explicit sign, like ``-1`` or ``+2``.

    :param text: the text to check.
    :return: ``True`` if the text is a signed integer.
    """
    return _signed_integer_pattern.fullmatch(text) is not None
