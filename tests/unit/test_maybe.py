import pickle

import pytest

from stroom import AdapterError, Just, Maybe, Nothing, just, nothing


def test_maybe_cannot_be_built_directly():
    with pytest.raises(TypeError):
        Maybe()


def test_nothing_is_a_singleton():
    assert Nothing() is nothing
    assert Nothing() is Nothing()
    assert pickle.loads(pickle.dumps(nothing)) is nothing


def test_just_none_collapses_to_nothing():
    assert just(None) is nothing
    assert Just(None) is nothing


def test_falsy_values_are_still_present():
    for value in (0, "", [], False):
        assert just(value).is_present
        assert just(value) is not nothing


def test_nothing_map_does_not_call_transform():
    calls = []

    def transform(x):
        calls.append(x)
        return x

    assert nothing.map(transform) is nothing
    assert calls == []


def test_just_map():
    assert just(1).map(lambda x: x + 1) == just(2)


def test_just_map_to_none_collapses():
    assert just(1).map(lambda x: None) is nothing


def test_just_map_validates_transform():
    with pytest.raises(AdapterError):
        just(1).map("not callable")


def test_join_flattens_one_level():
    assert just(just(1)).join() == just(1)
    assert just(just(just(1))).join() == just(just(1))


def test_join_of_plain_value_is_identity():
    j = just(1)
    assert j.join() is j
    assert nothing.join() is nothing
    assert just(nothing).join() is nothing


def test_string_rendering():
    assert str(nothing) == "Nothing"
    assert str(just(3)) == "Just 3"
    assert str(just("a b")) == "Just a b"
    assert str(just(just(3))) == "Just Just 3"


def test_equality_and_hashing():
    assert just(1) == just(1)
    assert just(1) != just(2)
    assert just(1) != nothing
    assert nothing == nothing
    assert len({just(1), just(1), nothing, nothing}) == 2


def test_get_and_truthiness():
    assert just(5).get() == 5
    assert nothing.get("fallback") == "fallback"
    assert just(0)
    assert not nothing
    assert isinstance(just(1), Maybe)
    assert isinstance(nothing, Maybe)


def test_just_is_immutable():
    with pytest.raises(AttributeError):
        just(1)._value = 2


def test_just_pickles():
    assert pickle.loads(pickle.dumps(just([1, 2]))) == just([1, 2])
