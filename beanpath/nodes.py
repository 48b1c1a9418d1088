"""
This library provides the nodes a bean path is made of.  Each node represents one
access step, by name or by position, and knows how to read and write its value in
a container.
"""
from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence, Tuple

from beanpath.data_helper import ABSENT, is_absent, is_array, is_digits, is_mutable_object, is_object, \
    is_sequence, is_signed_integer, is_string
from beanpath.properties import get_property_accessor

# The most slots a single write may add to the end of a sequence.
MAX_GROWTH = 10000


def _type_name(container: Any) -> str:
    return 'nothing' if container is ABSENT else type(container).__name__


class PathShapeError(ValueError):
    """
    Raised when a node is applied to a container it cannot work with, such as an index
    into an object that is neither a sequence nor a dictionary.
    """
    def __init__(self, node: 'Node', container: Any, reason: Optional[str] = None):
        message = f'Cannot apply {node} to a value of type {_type_name(container)}'
        if reason:
            message = f'{message}: {reason}'
        super().__init__(message)
        self.node = node
        self.container = container


def _get_at(sequence: Sequence, index: int) -> Any:
    """
    A function that returns the item in a sequence at the given position.  Negative
    positions count from the end.  Positions outside the sequence give ``ABSENT``.
    """
    if -len(sequence) <= index < len(sequence):
        return sequence[index]
    return ABSENT


def _set_at(node: 'Node', sequence: Sequence, index: int, value: Any) -> Sequence:
    """
    A function that stores a value at the given position in a sequence.  Writing past the
    end grows the sequence, by at most ``MAX_GROWTH`` slots, filling the gap with ``None``.
    Lists are changed in place; other sequences, like tuples, are rebuilt and the new one
    returned.
    """
    length = len(sequence)

    if index < -length:
        raise PathShapeError(node, sequence, f'index {index} is before the start of the sequence')

    if index < 0:
        index = index + length

    if index - length >= MAX_GROWTH:
        raise PathShapeError(node, sequence, f'index {index} is more than {MAX_GROWTH} past the end of the sequence')

    if is_array(sequence):
        if index >= length:
            sequence.extend([None] * (index - length + 1))
        sequence[index] = value
        return sequence

    items = list(sequence)
    if index >= length:
        items.extend([None] * (index - length + 1))
    items[index] = value

    if isinstance(sequence, tuple) and hasattr(sequence, '_fields'):
        if len(items) != length:
            raise PathShapeError(node, sequence, 'named tuples cannot grow')
        return type(sequence)(*items)

    try:
        return type(sequence)(items)
    except TypeError as error:
        raise PathShapeError(node, sequence, str(error)) from error


def _replace_in_mapping(mapping, key, value):
    """
    A function that stores a value under a key in a dictionary.  Read-only mappings are
    copied to a new dictionary, which is then returned.
    """
    if is_mutable_object(mapping):
        mapping[key] = value
        return mapping
    result = dict(mapping)
    result[key] = value
    return result


class Node(ABC):
    """
    The base class for all path nodes.  Nodes are immutable.
    """
    @property
    def wants_sequence(self) -> bool:
        """
        A read-only property that says whether a missing container this node is applied
        to should be created as a list (``True``) or as a dictionary (``False``).
        """
        return False

    @abstractmethod
    def get_value(self, container: Any) -> Any:
        """
        A function that returns the value this node refers to in the given container.

        :param container: the container to read from.
        :return: the value or ``ABSENT`` if the container doesn't hold one.
        :raises PathShapeError: if the node cannot be applied to the container.
        """
        raise NotImplementedError()

    @abstractmethod
    def set_value(self, container: Any, value: Any) -> Any:
        """
        A function that stores the given value in the given container at the place this
        node refers to.  Some containers have to be replaced to take the value; the
        container returned is the one that must be used from now on.

        :param container: the container to write to.
        :param value: the value to store.
        :return: the container holding the value, either the one given or a new one.
        :raises PathShapeError: if the node cannot be applied to the container.
        """
        raise NotImplementedError()

    def _key(self) -> Tuple:
        return ()

    def __eq__(self, other):
        return type(self) is type(other) and self._key() == other._key()

    def __hash__(self):
        return hash((type(self).__name__,) + self._key())


class NamedNode(Node):
    """
    A node that accesses something by name: a dictionary key or an object property.
    """
    def __init__(self, key: str):
        self._key_text = key
        self._looks_numeric = is_signed_integer(key)

    @property
    def key(self) -> str:
        return self._key_text

    @property
    def looks_numeric(self) -> bool:
        """
        A read-only property that returns whether the name of this node is itself a
        (signed) integer, which makes it usable as a position in a sequence.
        """
        return self._looks_numeric

    @property
    def wants_sequence(self) -> bool:
        return self._looks_numeric

    def get_value(self, container: Any) -> Any:
        if is_absent(container):
            return ABSENT
        if is_object(container):
            return container.get(self._key_text, ABSENT)
        if is_sequence(container) and self._looks_numeric:
            return _get_at(container, int(self._key_text))
        if is_string(container) or (is_sequence(container) and not hasattr(container, '_fields')):
            return ABSENT
        return get_property_accessor().read(container, self._key_text)

    def set_value(self, container: Any, value: Any) -> Any:
        if is_absent(container):
            raise PathShapeError(self, container)
        if is_object(container):
            return _replace_in_mapping(container, self._key_text, value)
        if is_sequence(container) and self._looks_numeric:
            return _set_at(self, container, int(self._key_text), value)
        try:
            return get_property_accessor().write(container, self._key_text, value)
        except AttributeError as error:
            raise PathShapeError(self, container, str(error)) from error

    def _key(self) -> Tuple:
        return self._key_text,

    def __repr__(self):
        return f'NamedNode({self._key_text!r})'


class IndexedNode(Node):
    """
    A node that accesses something by position in a sequence.
    """
    def __init__(self, index: int):
        self._index = index

    @property
    def index(self) -> int:
        return self._index

    @property
    def wants_sequence(self) -> bool:
        return True

    def get_value(self, container: Any) -> Any:
        if is_absent(container):
            return ABSENT
        if is_sequence(container):
            return _get_at(container, self._index)
        if is_object(container):
            if self._index in container:
                return container[self._index]
            return container.get(str(self._index), ABSENT)
        raise PathShapeError(self, container)

    def set_value(self, container: Any, value: Any) -> Any:
        if is_sequence(container):
            return _set_at(self, container, self._index, value)
        if is_object(container):
            key = str(self._index) if str(self._index) in container else self._index
            return _replace_in_mapping(container, key, value)
        raise PathShapeError(self, container)

    def _key(self) -> Tuple:
        return self._index,

    def __repr__(self):
        return f'IndexedNode({self._index})'


class ListNode(Node):
    """
    A node that selects several items at once, like ``[1,3,5]`` or ``[name,age]``.
    Reading gives back a list of the selected values.  It cannot be written through.
    """
    def __init__(self, keys: Sequence[str]):
        self._keys = tuple(keys)

    @property
    def keys(self) -> Tuple[str, ...]:
        return self._keys

    def get_value(self, container: Any) -> Any:
        if is_absent(container):
            return ABSENT
        if is_sequence(container):
            result = []
            for key in self._keys:
                if not (is_digits(key) or is_signed_integer(key)):
                    raise PathShapeError(self, container, f'"{key}" is not a position')
                item = _get_at(container, int(key))
                if item is not ABSENT:
                    result.append(item)
            return result
        if is_object(container):
            return [container.get(key) for key in self._keys]
        accessor = get_property_accessor()
        values = [accessor.read(container, key) for key in self._keys]
        return [None if value is ABSENT else value for value in values]

    def set_value(self, container: Any, value: Any) -> Any:
        raise PathShapeError(self, container, 'multiple selections cannot be written')

    def _key(self) -> Tuple:
        return self._keys

    def __repr__(self):
        return f'ListNode({list(self._keys)!r})'


class RangeNode(Node):
    """
    A node that selects a slice of a sequence, like ``[1:3]`` or ``[0:10:2]``.  Reading
    gives back a list.  It cannot be written through.
    """
    def __init__(self, start: Optional[int] = None, stop: Optional[int] = None, step: Optional[int] = None):
        self._start = start
        self._stop = stop
        self._step = step

    @classmethod
    def from_text(cls, text: str) -> 'RangeNode':
        """
        A function that creates a range node from text of the form ``start:stop[:step]``,
        where any of the numbers may be left out.

        :param text: the text to parse.
        :return: the resulting range node.
        :raises ValueError: if the text is not a valid range.
        """
        parts = [part.strip() for part in text.split(':')]

        if len(parts) > 3:
            raise ValueError(f'Bad range "{text}": too many ":" characters.')

        numbers = []
        for part in parts:
            if part and not (is_digits(part) or is_signed_integer(part)):
                raise ValueError(f'Bad range "{text}": "{part}" is not an integer.')
            numbers.append(int(part) if part else None)

        if len(numbers) == 3 and numbers[2] == 0:
            raise ValueError(f'Bad range "{text}": the step cannot be zero.')

        return cls(*numbers)

    @property
    def start(self) -> Optional[int]:
        return self._start

    @property
    def stop(self) -> Optional[int]:
        return self._stop

    @property
    def step(self) -> Optional[int]:
        return self._step

    def get_value(self, container: Any) -> Any:
        if is_absent(container):
            return ABSENT
        if is_sequence(container):
            return list(container[self._start:self._stop:self._step])
        raise PathShapeError(self, container)

    def set_value(self, container: Any, value: Any) -> Any:
        raise PathShapeError(self, container, 'ranges cannot be written')

    def _key(self) -> Tuple:
        return self._start, self._stop, self._step

    def __repr__(self):
        return f'RangeNode({self._start}, {self._stop}, {self._step})'


def create_node(token: str, bracketed: bool = False, quoted: bool = False) -> Node:
    """
    This function is the node factory.  It decides what kind of node a token from a path
    expression becomes.  A token made only of digits is always an index.  Unquoted tokens
    that appeared within brackets may also be a range (``1:3``) or a list of selections
    (``1,3``).  Everything else, including the empty string, is a name.

    :param token: the text of the token.
    :param bracketed: whether the token appeared within ``[`` and ``]``.
    :param quoted: whether any part of the token was quoted.
    :return: the appropriate node.
    :raises ValueError: if the token looks like a range but isn't a valid one.
    """
    if is_digits(token):
        return IndexedNode(int(token))

    if bracketed and not quoted:
        if ':' in token:
            return RangeNode.from_text(token)
        if ',' in token:
            return ListNode([key.strip() for key in token.split(',')])

    return NamedNode(token)
