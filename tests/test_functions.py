from hypothesis import given
from hypothesis.strategies import lists

from sumtype import functions
from sumtype.hypothesis_strategies import anything


@given(anything(allow_nan=False))
def test_identity(a):
    assert functions.identity(a) == a


@given(anything(allow_nan=False), lists(anything()))
def test_always(value, args):
    f = functions.always(value)
    assert f(*args) == value
    assert f() == value


@given(anything(allow_nan=False))
def test_always_is_comparable(value):
    assert functions.always(value) == functions.Always(value)
