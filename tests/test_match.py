import asyncio
import logging
from unittest.mock import Mock

import pytest
from hypothesis import given
from hypothesis.strategies import integers, lists, sampled_from

from sumtype import (NonExhaustiveError, UnhandledKindError, UnknownKindError,
                     _, always, case_of, construct, exhaustive, identity)
from sumtype.hypothesis_strategies import anything, cases, instances, variants

from .sum_types import Download, Maybe, Shape
from .utils import called, mock_cases

maybe_cases = {
    'Nothing': lambda: 'nope',
    'Just': lambda a: a + 'bar'
}

progress = {
    'Downloading': lambda pct: pct,
    'Completed': lambda: 100,
    _: lambda: 0
}


class TestScenarios:
    def test_just(self):
        assert construct('Just', 'foo').match(maybe_cases) == 'foobar'
        assert Maybe.Just('foo').match(maybe_cases) == 'foobar'

    def test_nothing(self):
        assert construct('Nothing').match(maybe_cases) == 'nope'
        assert Maybe.Nothing().match(maybe_cases) == 'nope'

    def test_failed_falls_back(self):
        assert construct('Failed', 'Connection reset.').match(progress) == 0
        assert Download.Failed('Connection reset.').match(progress) == 0

    def test_downloading(self):
        assert construct('Downloading', 42).match(progress) == 42
        assert Download.Downloading(42).match(progress) == 42


class TestMatch:
    @given(instances(Shape, anything()))
    def test_handler_gets_values_in_order(self, shape):
        handlers = mock_cases(Shape)
        shape.match(handlers)
        handlers[shape.kind].assert_called_once_with(*shape.values)

    @given(variants())
    def test_open_variant_gets_values_in_order(self, variant):
        handler = Mock(return_value='result')
        assert variant.match({variant.kind: handler}) == 'result'
        handler.assert_called_once_with(*variant.values)

    @given(instances(Download, integers()))
    def test_exactly_one_handler_is_called(self, download):
        handlers = mock_cases(Download, result=download.kind)
        fallback = Mock()
        assert download.match(handlers, default=fallback) == download.kind
        assert called(handlers) == [download.kind]
        fallback.assert_not_called()

    @given(
        instances(Download, integers()),
        lists(sampled_from(Download.kinds()), unique=True)
    )
    def test_order_of_cases_is_irrelevant(self, download, order):
        handlers = mock_cases(Download)
        for kind in Download.kinds():
            if kind not in order:
                order.append(kind)
        reordered = {kind: handlers[kind] for kind in order}
        download.match(reordered)
        assert called(reordered) == [download.kind]

    @given(instances(Download, integers()))
    def test_missing_kind_without_fallback(self, download):
        handlers = mock_cases(Download)
        del handlers[download.kind]
        with pytest.raises(UnhandledKindError) as e:
            download.match(handlers)
        assert e.value.kind == download.kind
        assert called(handlers) == []

    @given(instances(Download, integers()), anything())
    def test_missing_kind_with_default(self, download, result):
        handlers = mock_cases(Download)
        del handlers[download.kind]
        fallback = Mock(return_value=result)
        assert download.match(handlers, default=fallback) == result
        fallback.assert_called_once_with()
        assert called(handlers) == []

    @given(instances(Download, integers()), anything())
    def test_missing_kind_with_wildcard(self, download, result):
        handlers = mock_cases(Download)
        del handlers[download.kind]
        fallback = Mock(return_value=result)
        assert download.match({**handlers, _: fallback}) == result
        fallback.assert_called_once_with()

    @given(instances(Shape, integers()))
    def test_fallback_gets_no_arguments(self, shape):
        assert shape.match({}, default=lambda: 'fallback') == 'fallback'

    @given(instances(Download, integers()), cases(Download, wildcard=True))
    def test_wildcard_tables_never_fail(self, download, table):
        download.match(table)

    def test_wildcard_and_default(self):
        with pytest.raises(TypeError):
            Download.Completed().match({_: always(0)}, default=always(1))

    def test_wildcard_is_not_a_kind_name(self):
        variant = construct('_', 'value')
        assert variant.match({'_': identity, _: always(None)}) == 'value'

    def test_non_string_keys(self):
        with pytest.raises(TypeError):
            Download.Completed().match({1: always(0)})

    def test_unknown_kind_in_cases(self):
        with pytest.raises(UnknownKindError) as e:
            Download.Completed().match({
                'Completed': always(100), 'Complete': always(100)
            })
        assert e.value.kind == 'Complete'

    def test_open_variant_accepts_any_cases(self):
        just = construct('Just', 1)
        assert just.match({'Anything': identity}, always(0)) == 0

    def test_none_default_is_no_fallback(self):
        with pytest.raises(UnhandledKindError):
            Download.Completed().match({}, default=None)

    def test_handler_errors_propagate(self):
        def fail(pct):
            raise ZeroDivisionError()

        with pytest.raises(ZeroDivisionError):
            Download.Downloading(0).match({'Downloading': fail, _: always(0)})

    def test_repeated_matches(self):
        download = Download.Downloading(42)
        assert [download.match(progress) for _ in range(3)] == [42, 42, 42]
        assert download == Download.Downloading(42)

    def test_handler_results_are_opaque(self):
        async def downloaded(pct):
            return pct

        coroutine = Download.Downloading(42).match({
            'Downloading': downloaded, _: always(None)
        })
        assert asyncio.run(coroutine) == 42

    def test_fallback_is_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger='sumtype'):
            Download.Failed('Connection reset.').match(progress)
        assert 'No case for Download.Failed' in caplog.text

    def test_case_of(self):
        assert case_of(Maybe.Just('foo'), maybe_cases) == 'foobar'
        assert case_of(Download.Failed(''), {}, default=always(0)) == 0


class TestExhaustive:
    def test_every_kind(self):
        table = {
            'Downloading': identity,
            'Completed': always(100),
            'Failed': always(0)
        }
        assert exhaustive(Download, table) is table

    def test_wildcard(self):
        assert exhaustive(Download, progress) is progress

    def test_missing_kinds(self):
        with pytest.raises(NonExhaustiveError) as e:
            exhaustive(Download, {'Completed': always(100)})
        assert e.value.missing == ('Downloading', 'Failed')
        assert e.value.handled == ('Completed', )

    def test_unknown_kinds(self):
        with pytest.raises(UnknownKindError):
            exhaustive(Maybe, {
                'Nothing': always(0), 'Some': identity, _: always(0)
            })

    def test_handlers_are_not_called(self):
        handlers = mock_cases(Download)
        exhaustive(Download, handlers)
        assert called(handlers) == []
