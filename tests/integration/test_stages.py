import operator
import threading

import pytest

from stroom import (
    AdapterError,
    Conduit,
    curry,
    flip,
    flip_curry,
    from_sequence,
    integer_range,
    negate,
    values,
)


def is_even(x: int) -> bool:
    return x % 2 == 0


# --- map ---


def test_map_chain_composes_left_to_right():
    result = values(1, 2, 3, 4).map(lambda x: x + 1).map(lambda x: x * 2).take_all()
    assert result == [4, 6, 8, 10]


def test_map_multiple_transforms_in_one_stage():
    result = values(1, 2, 3, 4).map(lambda x: x + 1, lambda x: x * 2).take_all()
    assert result == [4, 6, 8, 10]


def test_map_multiple_transforms_spawn_a_single_task():
    source = values(1, 2, 3)
    stage = source.map(str, lambda s: s + "!", str.upper)
    assert stage.upstream is source
    assert stage.upstream.upstream is None
    assert stage.take_all() == ["1!", "2!", "3!"]


def test_map_runs_transforms_on_stage_thread():
    caller = threading.get_ident()
    threads = set()

    def record(x):
        threads.add(threading.get_ident())
        return x

    assert values(1, 2).map(record).take_all() == [1, 2]
    assert caller not in threads


def test_map_preserves_order():
    assert integer_range(0, 200).map(lambda x: x * x).take_all() == [x * x for x in range(200)]


def test_map_on_empty_source():
    assert values().map(lambda x: x + 1).take_all() == []


def test_map_with_curried_function():
    assert values(1, 2, 3).map(curry(operator.add, 10)).take_all() == [11, 12, 13]


def test_map_with_flip_curry():
    assert values(10, 20).map(flip_curry(operator.sub, 1)).take_all() == [9, 19]


def test_map_rejects_non_callable_at_construction():
    source = values(1, 2)
    with pytest.raises(AdapterError):
        source.map(lambda x: x, 42)
    source.drop_all()


def test_map_rejects_binary_function_at_construction():
    def add(a: int, b: int) -> int:
        return a + b

    source = values(1, 2)
    with pytest.raises(AdapterError):
        source.map(add)
    source.drop_all()


# --- filter ---


def test_filter_even():
    assert values(1, 2, 3, 4, 5).filter(is_even).take_all() == [2, 4]


def test_filter_with_lambda_uses_truthiness():
    assert from_sequence(["a", "", "b", ""]).filter(lambda s: s).take_all() == ["a", "b"]


def test_filter_dropping_everything():
    assert integer_range(0, 10).filter(lambda x: x > 100).take_all() == []


def test_filter_negated():
    assert values(1, 2, 3, 4, 5).filter(negate(is_even)).take_all() == [1, 3, 5]


def test_filter_then_map():
    result = integer_range(1, 11).filter(is_even).map(lambda x: x // 2).take_all()
    assert result == [1, 2, 3, 4, 5]


def test_filter_rejects_non_boolean_predicate_at_construction():
    def double(x: int) -> int:
        return x * 2

    source = values(1, 2)
    with pytest.raises(AdapterError) as excinfo:
        source.filter(double)
    assert "must return bool" in str(excinfo.value)
    source.drop_all()


# --- reduce ---


def test_reduce_sum():
    assert values(1, 2, 3, 4, 5).reduce(lambda v, acc: v + acc, 0) == 15


def test_reduce_passes_new_value_first():
    calls = []

    def combine(value, acc):
        calls.append((value, acc))
        return acc + [value]

    assert values(1, 2, 3).reduce(combine, []) == [1, 2, 3]
    assert calls == [(1, []), (2, [1]), (3, [1, 2])]


def test_reduce_non_commutative_combiner():
    # (3 - (2 - (1 - 0)))
    assert values(1, 2, 3).reduce(operator.sub, 0) == 2
    # flip gives ((0 - 1) - 2) - 3
    assert values(1, 2, 3).reduce(flip(operator.sub), 0) == -6


def test_reduce_empty_returns_seed():
    assert values().reduce(operator.add, "seed") == "seed"


def test_reduce_rejects_mismatched_accumulator_at_construction():
    def bad(value: int, acc: int) -> str:
        return str(value + acc)

    source = values(1, 2)
    with pytest.raises(AdapterError):
        source.reduce(bad, 0)
    source.drop_all()


def test_reduce_after_partial_consumption():
    conduit = integer_range(0, 5)
    conduit.take(2)
    assert conduit.reduce(operator.add, 0) == 2 + 3 + 4


# --- failures ---


class StageBroke(Exception):
    pass


def test_transform_exception_propagates_to_terminal():
    def explode(x):
        if x == 3:
            raise StageBroke("bad value")
        return x

    conduit = integer_range(0, 10).map(explode).map(lambda x: x * 10)
    assert conduit.take(3) == [0, 10, 20]
    with pytest.raises(StageBroke):
        conduit.take_all()


def test_predicate_exception_propagates_to_terminal():
    def picky(x) -> bool:
        raise StageBroke("never")

    with pytest.raises(StageBroke):
        values(1).filter(picky).take_all()


def test_source_exception_propagates_through_stages():
    def produce(out):
        out.put(1)
        raise StageBroke("source")

    conduit = Conduit(produce).map(lambda x: x + 1).filter(lambda x: True)
    with pytest.raises(StageBroke):
        conduit.take_all()
