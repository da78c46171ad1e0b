from typing import Any, Callable, Dict, Type, TypeVar, Union

from .functions import Cases, Handler
from .sumtype import SumType, Variant, _

try:
    from hypothesis.strategies import (
        booleans,
        builds,
        composite,
        floats,
        integers,
        lists,
        one_of,
        sampled_from,
        text,
        SearchStrategy
    )
except ImportError:
    raise ImportError(
        'Could not import hypothesis. To use sumtype.hypothesis_strategies, '
        'install sumtype with \n\n\tpip install sumtype[test]'
    )

S = TypeVar('S', bound=SumType)


def anything(allow_nan: bool = False
             ) -> SearchStrategy[Union[int, bool, str, float]]:
    """
    Create a search strategy that produces one of int, bool, str or floats.

    Args:
        allow_nan: whether to allow nan values
    Return:
        Search strategy that produces ints, bools, str or floats
    """
    return one_of(integers(), booleans(), text(), floats(allow_nan=allow_nan))


def kind_names() -> SearchStrategy[str]:
    """
    Create a search strategy that produces valid kind names

    Example:
        >>> kind_names().example()
        'Kx_3'
    """
    return builds(
        lambda head, tail: head + tail,
        sampled_from('ABCDEFGHIJKLMNOPQRSTUVWXYZ'),
        text(alphabet='abcdefghijklmnopqrstuvwxyz_0123456789', max_size=8)
    )


def instances(sum_type: Type[S],
              value_strategy: SearchStrategy[Any] = anything()
              ) -> SearchStrategy[S]:
    """
    Create a search strategy that produces instances of `sum_type`, with
    the declared number of values for each kind

    Example:
        >>> instances(Download, integers()).example()
        Download.Downloading(7)

    Args:
        sum_type: the sum type to produce instances of
        value_strategy: strategy for the associated values
    Return:
        search strategy that produces instances of `sum_type`
    """
    @composite
    def instance(draw: Callable[[SearchStrategy[Any]], Any]) -> S:
        kind = draw(sampled_from(sum_type.kinds()))
        values = [
            draw(value_strategy) for _ in range(sum_type.arity(kind))
        ]
        return sum_type.construct(kind, *values)

    return instance()


def variants(value_strategy: SearchStrategy[Any] = anything()
             ) -> SearchStrategy[Variant]:
    """
    Create a search strategy that produces open `Variant` instances

    Example:
        >>> variants().example()
        Variant('Ab', 1, 'x')

    Args:
        value_strategy: strategy for the associated values
    Return:
        search strategy that produces `Variant` instances
    """
    return builds(
        Variant, kind_names(), lists(value_strategy, max_size=5).map(tuple)
    )


def cases(sum_type: Type[SumType],
          result_strategy: SearchStrategy[Any] = anything(),
          wildcard: bool = False) -> SearchStrategy[Cases[Any]]:
    """
    Create a search strategy that produces handler tables for a subset
    of the kinds of `sum_type`, optionally with a wildcard case

    Args:
        sum_type: the sum type the handler tables are for
        result_strategy: strategy for the results of the handlers
        wildcard: whether to include a wildcard case
    Return:
        search strategy that produces handler tables
    """
    @composite
    def table(draw: Callable[[SearchStrategy[Any]], Any]) -> Cases[Any]:
        kinds = draw(lists(sampled_from(sum_type.kinds()), unique=True))
        handlers: Dict[Any, Handler[Any]] = {}
        for kind in kinds:
            result = draw(result_strategy)
            handlers[kind] = lambda *values, result=result: result
        if wildcard:
            result = draw(result_strategy)
            handlers[_] = lambda result=result: result
        return handlers

    return table()


__all__ = [
    'anything', 'kind_names', 'instances', 'variants', 'cases'
]
