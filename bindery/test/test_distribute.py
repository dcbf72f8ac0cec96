
import pytest

from bindery import (Args,
                     Value,
                     distribute_posargs,
                     PositionalUnderflow,
                     PositionalOverflow,
                     InvalidValue)


def test_front_anchored_then_unbounded():
    src, rest = Args('src', arity=1), Args('rest')
    distribute_posargs([src, rest], ['a', 'b', 'c'])

    assert src.value.value == 'a'
    assert rest.value.value == ['b', 'c']


def test_unbounded_then_back_anchored():
    pre, dst = Args('pre'), Args('dst', arity=1)
    distribute_posargs([pre, dst], ['a', 'b', 'c'])

    assert dst.value.value == 'c'
    assert pre.value.value == ['a', 'b']


def test_unbounded_between_anchors():
    first = Args('first', arity=1)
    middle = Args('middle')
    last = Args('last', arity=2)
    distribute_posargs([first, middle, last], ['1', '2', '3', '4', '5'])

    assert first.value.value == '1'
    assert middle.value.value == ['2', '3']
    assert last.value.value == ['4', '5']


def test_fixed_slots_in_order():
    a, b, c = Args('a', arity=1), Args('b', arity=2), Args('c', arity=1)
    distribute_posargs([a, b, c], ['x', 'y', 'z', 'w'])

    assert a.value.value == 'x'
    assert b.value.value == ['y', 'z']
    assert c.value.value == 'w'


def test_under_provision_names_slot():
    pair = Args('pair', arity=2)
    with pytest.raises(PositionalUnderflow, match='not provided enough') as exc_info:
        distribute_posargs([pair], ['x'])
    assert exc_info.value.name == 'pair'


def test_no_tokens_for_required_slot():
    src = Args('src', arity=1)
    with pytest.raises(PositionalUnderflow, match='not provided') as exc_info:
        distribute_posargs([src], [])
    assert exc_info.value.name == 'src'

    rest = Args('rest')
    with pytest.raises(PositionalUnderflow):
        distribute_posargs([rest], [])


def test_over_provision():
    src = Args('src', arity=1)
    with pytest.raises(PositionalOverflow) as exc_info:
        distribute_posargs([src], ['a', 'b'])
    assert exc_info.value.name == 'b'

    with pytest.raises(PositionalOverflow, match='unexpected positional'):
        distribute_posargs([], ['stray'])

    distribute_posargs([], [])


def test_optional_and_default_slots_without_tokens():
    maybe = Args('maybe', arity=1, optional=True)
    count = Args('count', Value(int, default=3), arity=1)
    distribute_posargs([maybe, count], [])

    assert not maybe.value.is_set
    assert maybe.value.value is None
    assert not count.value.is_set
    assert count.value.value == 3


def test_short_optional_slot_takes_the_rest():
    pair = Args('pair', arity=2, optional=True)
    distribute_posargs([pair], ['x'])

    assert pair.value.value == ['x']


def test_short_optional_tail_slot_takes_the_rest():
    pre = Args('pre', optional=True)
    post = Args('post', arity=2, optional=True)
    distribute_posargs([pre, post], ['a'])

    assert post.value.value == ['a']
    assert not pre.value.is_set
    assert pre.value.value is None


def test_empty_optional_unbounded_between_anchors():
    first = Args('first', arity=1)
    middle = Args('middle', Value(default=[]), optional=True)
    last = Args('last', arity=1)
    distribute_posargs([first, middle, last], ['1', '2'])

    assert first.value.value == '1'
    assert last.value.value == '2'
    assert not middle.value.is_set
    assert middle.value.value == []


def test_front_slots_take_precedence():
    first = Args('first', arity=1)
    middle = Args('middle', optional=True)
    last = Args('last', arity=1, optional=True)
    distribute_posargs([first, middle, last], ['1'])

    assert first.value.value == '1'
    assert not middle.value.is_set
    assert not last.value.is_set


def test_typed_values():
    nums = Args('nums', int)
    distribute_posargs([nums], ['1', '2', '3'])
    assert nums.value.value == [1, 2, 3]

    with pytest.raises(InvalidValue, match='nums expected a valid value'):
        distribute_posargs([Args('nums', int)], ['1', 'two'])


def test_distribution_is_repeatable():
    def bind(tokens):
        src, rest, dst = Args('src', arity=1), Args('rest'), Args('dst', arity=1)
        distribute_posargs([src, rest, dst], tokens)
        return src.value.value, rest.value.value, dst.value.value

    tokens = ['a', 'b', 'c', 'd']
    assert bind(tokens) == bind(tokens) == ('a', ['b', 'c'], 'd')
