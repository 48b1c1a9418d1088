"""
This file contains all the unit tests for path nodes and the node factory.
"""
from collections import namedtuple
from types import MappingProxyType

# noinspection PyPackageRequirements
import pytest

from beanpath.data_helper import ABSENT
from beanpath.nodes import NamedNode, IndexedNode, ListNode, RangeNode, PathShapeError, create_node, MAX_GROWTH

Point = namedtuple('Point', ['x', 'y'])


class Bean(object):
    def __init__(self, name=None):
        self.name = name


class TestCreateNode(object):
    def test_digits_are_indexes(self):
        assert create_node('3') == IndexedNode(3)
        assert create_node('03') == IndexedNode(3)
        assert create_node('3', bracketed=True) == IndexedNode(3)
        assert create_node('3', bracketed=True, quoted=True) == IndexedNode(3)

    def test_everything_else_is_a_name(self):
        assert create_node('name') == NamedNode('name')
        assert create_node('') == NamedNode('')
        assert create_node('-1') == NamedNode('-1')
        assert create_node('a.b', quoted=True) == NamedNode('a.b')
        assert create_node('1:3') == NamedNode('1:3')
        assert create_node('1,3') == NamedNode('1,3')
        assert create_node('1:3', bracketed=True, quoted=True) == NamedNode('1:3')
        assert create_node('a,b', bracketed=True, quoted=True) == NamedNode('a,b')

    def test_ranges(self):
        assert create_node('1:3', bracketed=True) == RangeNode(1, 3)
        assert create_node('::2', bracketed=True) == RangeNode(None, None, 2)
        assert create_node('-2:', bracketed=True) == RangeNode(-2, None)

        with pytest.raises(ValueError, match='too many'):
            create_node('1:2:3:4', bracketed=True)
        with pytest.raises(ValueError, match='not an integer'):
            create_node('a:b', bracketed=True)
        with pytest.raises(ValueError, match='cannot be zero'):
            create_node('1:5:0', bracketed=True)

    def test_lists(self):
        assert create_node('1,3', bracketed=True) == ListNode(['1', '3'])
        assert create_node('name, age', bracketed=True) == ListNode(['name', 'age'])


class TestNodeValues(object):
    def test_equality_and_hashing(self):
        assert NamedNode('a') == NamedNode('a')
        assert NamedNode('a') != NamedNode('b')
        assert NamedNode('1') != IndexedNode(1)
        assert len({IndexedNode(1), IndexedNode(1), NamedNode('1')}) == 2
        assert repr(NamedNode('a')) == "NamedNode('a')"
        assert repr(IndexedNode(2)) == 'IndexedNode(2)'

    def test_wants_sequence(self):
        assert IndexedNode(0).wants_sequence is True
        assert NamedNode('-1').wants_sequence is True
        assert NamedNode('-1').looks_numeric is True
        assert NamedNode('a').wants_sequence is False
        assert NamedNode('a').looks_numeric is False
        assert ListNode(['1', '2']).wants_sequence is False
        assert RangeNode(1, 2).wants_sequence is False


class TestNamedNode(object):
    def test_get_from_mapping(self):
        node = NamedNode('a')

        assert node.get_value({'a': 1}) == 1
        assert node.get_value({'a': None}) is None
        assert node.get_value({'b': 1}) is ABSENT
        assert node.get_value(MappingProxyType({'a': 2})) == 2

    def test_get_from_nothing(self):
        assert NamedNode('a').get_value(None) is ABSENT
        assert NamedNode('a').get_value(ABSENT) is ABSENT

    def test_get_from_sequence(self):
        assert NamedNode('-1').get_value([1, 2, 3]) == 3
        assert NamedNode('-4').get_value([1, 2, 3]) is ABSENT
        assert NamedNode('name').get_value([1, 2, 3]) is ABSENT
        assert NamedNode('count').get_value([1, 2, 3]) is ABSENT
        assert NamedNode('index').get_value(('a', 'b')) is ABSENT

    def test_get_from_string(self):
        assert NamedNode('upper').get_value('Bob') is ABSENT
        assert NamedNode('__class__').get_value('Bob') is ABSENT
        assert NamedNode('-1').get_value('Bob') is ABSENT

    def test_get_from_bean(self):
        assert NamedNode('name').get_value(Bean('Bob')) == 'Bob'
        assert NamedNode('other').get_value(Bean('Bob')) is ABSENT
        assert NamedNode('x').get_value(Point(1, 2)) == 1

    def test_set_in_mapping(self):
        data = {}

        assert NamedNode('a').set_value(data, 1) is data
        assert data == {'a': 1}

    def test_set_in_read_only_mapping(self):
        data = MappingProxyType({'a': 1})
        result = NamedNode('b').set_value(data, 2)

        assert result == {'a': 1, 'b': 2}
        assert 'b' not in data

    def test_set_in_sequence(self):
        data = [1, 2, 3]

        assert NamedNode('-1').set_value(data, 9) is data
        assert data == [1, 2, 9]

        with pytest.raises(PathShapeError, match='before the start'):
            NamedNode('-5').set_value(data, 9)

    def test_set_in_bean(self):
        bean = Bean()

        assert NamedNode('name').set_value(bean, 'Bob') is bean
        assert bean.name == 'Bob'

        assert NamedNode('y').set_value(Point(1, 2), 3) == Point(1, 3)

    def test_set_failures(self):
        with pytest.raises(PathShapeError, match=r"Cannot apply NamedNode\('a'\) to a value of type NoneType"):
            NamedNode('a').set_value(None, 1)

        with pytest.raises(PathShapeError, match=r"Cannot apply NamedNode\('a'\) to a value of type nothing"):
            NamedNode('a').set_value(ABSENT, 1)

        with pytest.raises(PathShapeError, match='type int'):
            NamedNode('a').set_value(5, 1)

        with pytest.raises(PathShapeError, match='type list'):
            NamedNode('a').set_value([], 1)


class TestIndexedNode(object):
    def test_get_from_sequence(self):
        assert IndexedNode(1).get_value(['a', 'b']) == 'b'
        assert IndexedNode(1).get_value(('a', 'b')) == 'b'
        assert IndexedNode(2).get_value(['a', 'b']) is ABSENT
        assert IndexedNode(0).get_value([None]) is None

    def test_get_from_mapping(self):
        assert IndexedNode(1).get_value({1: 'int'}) == 'int'
        assert IndexedNode(1).get_value({'1': 'str'}) == 'str'
        assert IndexedNode(1).get_value({1: 'int', '1': 'str'}) == 'int'
        assert IndexedNode(1).get_value({}) is ABSENT

    def test_get_from_nothing(self):
        assert IndexedNode(0).get_value(None) is ABSENT
        assert IndexedNode(0).get_value(ABSENT) is ABSENT

    def test_get_shape_mismatch(self):
        with pytest.raises(PathShapeError, match=r'Cannot apply IndexedNode\(0\) to a value of type Bean'):
            IndexedNode(0).get_value(Bean())

        with pytest.raises(PathShapeError, match='type str'):
            IndexedNode(0).get_value('text')

    def test_set_grows_list_in_place(self):
        data = ['a']

        assert IndexedNode(3).set_value(data, 'd') is data
        assert data == ['a', None, None, 'd']

        assert IndexedNode(1).set_value(data, 'b') is data
        assert data == ['a', 'b', None, 'd']

    def test_set_growth_is_bounded(self):
        data = []

        IndexedNode(MAX_GROWTH - 1).set_value(data, 'last')

        assert len(data) == MAX_GROWTH
        assert data[-1] == 'last'

        with pytest.raises(PathShapeError, match='past the end'):
            IndexedNode(2 * MAX_GROWTH).set_value(data, 'x')

        with pytest.raises(PathShapeError, match='past the end'):
            IndexedNode(MAX_GROWTH + 5).set_value([], 1)

        with pytest.raises(PathShapeError, match='past the end'):
            IndexedNode(MAX_GROWTH).set_value((), 1)

        assert len(data) == MAX_GROWTH

    def test_set_replaces_tuple(self):
        data = ('a',)
        result = IndexedNode(2).set_value(data, 'c')

        assert result == ('a', None, 'c')
        assert data == ('a',)

        assert IndexedNode(0).set_value(data, 'z') == ('z',)

    def test_set_named_tuple(self):
        assert IndexedNode(1).set_value(Point(1, 2), 5) == Point(1, 5)

        with pytest.raises(PathShapeError, match='cannot grow'):
            IndexedNode(2).set_value(Point(1, 2), 5)

    def test_set_in_mapping(self):
        data = {'1': 'str'}

        IndexedNode(1).set_value(data, 'new')
        IndexedNode(2).set_value(data, 'two')

        assert data == {'1': 'new', 2: 'two'}

    def test_set_shape_mismatch(self):
        with pytest.raises(PathShapeError):
            IndexedNode(0).set_value(Bean(), 1)

        with pytest.raises(PathShapeError):
            IndexedNode(0).set_value(None, 1)

        with pytest.raises(PathShapeError):
            IndexedNode(0).set_value(range(3), 1)


class TestListNode(object):
    def test_get_from_sequence(self):
        node = ListNode(['0', '2', '5', '-1'])

        assert node.get_value(['a', 'b', 'c']) == ['a', 'c', 'c']

        with pytest.raises(PathShapeError, match='not a position'):
            ListNode(['0', 'x']).get_value(['a'])

    def test_get_from_mapping_and_bean(self):
        node = ListNode(['name', 'age'])

        assert node.get_value({'name': 'Bob'}) == ['Bob', None]
        assert node.get_value(Bean('Bob')) == ['Bob', None]
        assert node.get_value(None) is ABSENT

    def test_set_not_allowed(self):
        with pytest.raises(PathShapeError, match='cannot be written'):
            ListNode(['a', 'b']).set_value({}, 1)


class TestRangeNode(object):
    def test_get(self):
        data = [0, 1, 2, 3, 4]

        assert RangeNode(1, 3).get_value(data) == [1, 2]
        assert RangeNode(None, None, 2).get_value(data) == [0, 2, 4]
        assert RangeNode(-2).get_value(tuple(data)) == [3, 4]
        assert RangeNode(1, 3).get_value(None) is ABSENT

        with pytest.raises(PathShapeError):
            RangeNode(1, 3).get_value({'a': 1})

    def test_set_not_allowed(self):
        with pytest.raises(PathShapeError, match='cannot be written'):
            RangeNode(1, 3).set_value([1, 2, 3], 1)
