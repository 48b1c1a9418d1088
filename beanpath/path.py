"""
This library provides bean paths: expressions that describe a chain of field, key and
index accesses into a graph of dictionaries, sequences and objects, like

    person
    person.name
    persons[3]
    person.friends[5].name
    ['person']['friends'][5]['name']

A path is used to read the value it leads to or to write a value there, creating any
missing dictionaries or lists along the way.
"""
from typing import Any, Iterator, Optional, Tuple, Union

from beanpath.data_helper import ABSENT, is_absent
from beanpath.nodes import Node, PathShapeError, create_node
from beanpath.utils import verbose_out

_QUOTE = "'"
_DOT = '.'
_BRACKET_START = '['
_BRACKET_END = ']'
_BOUNDARIES = (_DOT, _BRACKET_START, _BRACKET_END)


class PathSyntaxError(ValueError):
    """
    Raised when a path expression is malformed.  The offset is the position in the
    expression where the problem was found.
    """
    def __init__(self, expression: str, offset: int, reason: str):
        super().__init__(f'Bad path expression "{expression}" at offset {offset}: {reason}.')
        self.expression = expression
        self.offset = offset
        self.reason = reason


def _scan(expression: str, start: int) -> Tuple[str, bool, bool, Optional[int]]:
    """
    This function scans a single segment of a path expression, beginning at the given
    offset.  Single quotes turn the special meaning of ``.``, ``[`` and ``]`` off (and
    back on); they are not part of the token.

    :param expression: the full path expression.
    :param start: the offset at which the segment starts.
    :return: a tuple of the segment's token, whether it was bracketed, whether any of it
    was quoted and the offset at which the rest of the expression starts.  The offset is
    ``None`` when this is the last segment.
    :raises PathSyntaxError: if brackets are misplaced.
    """
    length = len(expression)
    buffer = []
    in_quote = False
    quoted = False
    bracket_at = None
    position = start

    while position < length:
        ch = expression[position]

        if ch == _QUOTE:
            in_quote = not in_quote
            quoted = True
        elif in_quote or ch not in _BOUNDARIES:
            buffer.append(ch)
        elif ch == _BRACKET_START:
            if bracket_at is not None:
                raise PathSyntaxError(expression, position, "found '[' but no matching ']' for the previous one")
            if buffer or quoted:
                # The bracket starts the next segment so it stays in the residual.
                return ''.join(buffer), False, quoted, position
            bracket_at = position
        elif ch == _BRACKET_END:
            if bracket_at is None:
                raise PathSyntaxError(expression, position, "found ']' but no matching '['")
            position = position + 1
            if position < length and expression[position] == _DOT:
                return ''.join(buffer), True, quoted, position + 1
            return ''.join(buffer), True, quoted, position if position < length else None
        else:
            if bracket_at is not None:
                raise PathSyntaxError(expression, position, "found '.' between '[' and ']'")
            return ''.join(buffer), False, quoted, position + 1

        position = position + 1

    if bracket_at is not None:
        raise PathSyntaxError(expression, length, "found '[' but no matching ']'")

    return ''.join(buffer), False, quoted, None


def _create_node(expression: str, offset: int, token: str, bracketed: bool, quoted: bool) -> Node:
    try:
        return create_node(token, bracketed, quoted)
    except ValueError as error:
        raise PathSyntaxError(expression, offset, str(error).rstrip('.')) from error


class BeanPath(object):
    """
    Instances of this class represent one segment of a path expression along with the
    rest of the expression after it.  The rest is not parsed until it's asked for, via
    ``next()``, and is parsed afresh each time it is.  A path may be iterated over to
    visit its segments in order.
    """
    @classmethod
    def of(cls, expression: str) -> 'BeanPath':
        """
        This class function creates a bean path from an expression, checking the whole
        expression for errors first.

        :param expression: the path expression to parse.
        :return: the first segment of the path.
        :raises PathSyntaxError: if the expression is malformed.
        """
        return parse(expression)

    def __init__(self, expression: str, offset: int = 0):
        """
        A function that creates a bean path from the segment of the given expression
        that starts at the given offset.  Only that one segment is examined here.

        :param expression: the full path expression.
        :param offset: where in the expression this segment starts.
        :raises PathSyntaxError: if the segment is malformed.
        """
        token, bracketed, quoted, residual_start = _scan(expression, offset)
        self._expression = expression
        self._offset = offset
        self._node = _create_node(expression, offset, token, bracketed, quoted)
        self._residual_start = residual_start

    @property
    def node(self) -> Node:
        return self._node

    @property
    def expression(self) -> str:
        return self._expression

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def residual(self) -> Optional[str]:
        """
        A read-only property that returns the text of the expression that follows this
        segment.  It is ``None`` if this is the last segment.  An empty string means
        there is one more, empty, segment.

        :return: the rest of the expression.
        """
        return None if self._residual_start is None else self._expression[self._residual_start:]

    def has_next(self) -> bool:
        return self._residual_start is not None

    def next(self) -> 'BeanPath':
        """
        A function that parses the segment that follows this one.  A new path is returned
        every time.

        :return: the path for the next segment.
        :raises ValueError: if this is the last segment.
        """
        if self._residual_start is None:
            raise ValueError(f'The segment {self._node} is the last one in "{self._expression}".')
        return BeanPath(self._expression, self._residual_start)

    def __iter__(self) -> Iterator['BeanPath']:
        path = self
        yield path
        while path.has_next():
            path = path.next()
            yield path

    def get_value(self, bean: Any) -> Any:
        """
        A function that returns the value this path leads to in the given object graph.
        Reading through a missing value is not an error; the result is just ``ABSENT``.

        :param bean: the root of the object graph.
        :return: the value found or ``ABSENT``.
        :raises PathShapeError: if a segment cannot be applied to the value it meets.
        """
        value = self._node.get_value(bean)
        if not self.has_next():
            return value
        return self.next().get_value(value)

    def set_value(self, bean: Any, value: Any, create_missing: bool = True) -> Any:
        """
        A function that stores a value at the place this path leads to in the given object
        graph.  Missing dictionaries and lists along the way are created unless told not
        to.  If a container on the way has to be replaced to take the change (a tuple that
        grows, for example) the replacement is stored in its parent.

        This recurses once per segment, so very long paths are limited by Python's
        recursion limit.

        :param bean: the root of the object graph.
        :param value: the value to store.
        :param create_missing: whether missing intermediate containers should be created.
        :return: the root of the object graph, which will be a different object than the
        one given if the root itself had to be replaced.
        :raises PathShapeError: if a segment cannot be applied to the value it meets.
        """
        if not self.has_next():
            return self._node.set_value(bean, value)

        child = self.next()
        sub_bean = self._node.get_value(bean)

        if is_absent(sub_bean):
            if not create_missing:
                raise PathShapeError(child.node, sub_bean, f'nothing exists at {self._node} to hold it')
            sub_bean = [] if child.node.wants_sequence else {}
            verbose_out(f'Creating a {type(sub_bean).__name__} at {self._node} for "{self._expression}".', level=2)
            bean = self._node.set_value(bean, sub_bean)
            # The container may have stored something other than what it was given.
            sub_bean = self._node.get_value(bean)

        new_sub_bean = child.set_value(sub_bean, value, create_missing)

        if new_sub_bean is not sub_bean:
            verbose_out(f'Replacing the {type(sub_bean).__name__} at {self._node} for "{self._expression}".',
                        level=2)
            bean = self._node.set_value(bean, new_sub_bean)

        return bean

    def __str__(self):
        return f'BeanPath[node={self._node}, residual={self.residual!r}]'

    def __repr__(self):
        return f'BeanPath({self._expression!r}, {self._offset})'


PathLike = Union[str, BeanPath]


def parse(expression: str) -> BeanPath:
    """
    This function parses a path expression.  The whole expression is checked, one
    segment at a time, before the first segment is returned.

    :param expression: the path expression to parse.
    :return: the path for the first segment.
    :raises PathSyntaxError: if the expression is malformed.
    """
    start = 0

    while start is not None:
        token, bracketed, quoted, next_start = _scan(expression, start)
        _create_node(expression, start, token, bracketed, quoted)
        start = next_start

    return BeanPath(expression)


def _to_path(path: PathLike) -> BeanPath:
    return path if isinstance(path, BeanPath) else parse(path)


def get(path: PathLike, bean: Any) -> Any:
    """
    A function that returns the value the given path leads to in an object graph.

    :param path: the path or path expression to follow.
    :param bean: the root of the object graph.
    :return: the value found or ``ABSENT``.
    """
    return _to_path(path).get_value(bean)


def put(path: PathLike, bean: Any, value: Any, create_missing: bool = True) -> Any:
    """
    A function that stores a value at the place the given path leads to in an object graph.

    :param path: the path or path expression to follow.
    :param bean: the root of the object graph.
    :param value: the value to store.
    :param create_missing: whether missing intermediate containers should be created.
    :return: the root of the object graph to use from now on.
    """
    return _to_path(path).set_value(bean, value, create_missing)


def find_value(root: Any, expression: PathLike, default: Any = None) -> Any:
    """
    This function is used to follow the specified path through the object graph at root
    and return the item in the graph, if any, that the path refers to.

    :param root: the root of the object graph to traverse.
    :param expression: the path through the graph to take.
    :param default: what to return if the path leads nowhere.
    :return: the resulting value or ``default``.
    """
    value = get(expression, root)
    return default if value is ABSENT else value


def set_value(root: Any, expression: PathLike, value: Any, create_missing: bool = True) -> Any:
    """
    This function stores a value in the object graph at root, at the place the specified
    path refers to.

    :param root: the root of the object graph to change.
    :param expression: the path through the graph to take.
    :param value: the value to store.
    :param create_missing: whether missing intermediate containers should be created.
    :return: the root of the object graph to use from now on.
    """
    return put(expression, root, value, create_missing)
