from typing import Any, Callable, Generic, Mapping, TypeVar, Union

from typing_extensions import Protocol

from .immutable import Immutable

A = TypeVar('A')
R = TypeVar('R', covariant=True)


class Handler(Protocol[R]):
    """
    Handles one kind of a sum type. Called with the associated values
    of the kind as positional arguments
    """
    def __call__(self, *values: Any) -> R:
        pass


class Fallback(Protocol[R]):
    """
    Called with no arguments when no handler matches the kind of
    an instance
    """
    def __call__(self) -> R:
        pass


Cases = Mapping[Union[str, type], Handler[R]]
"""
Handler table given to `match`: kind names (or the wildcard `_`) mapped
to handlers
"""


def identity(v: A) -> A:
    """
    The identity function. Just gives back its argument

    Example:
        >>> Maybe.Just(1).match({'Just': identity}, default=always(0))
        1

    Args:
        v: The value to get back

    Return:
        `v`
    """
    return v


class Always(Generic[A], Immutable):
    """
    A Callable that always returns the same value
    regardless of the arguments

    Example:
        >>> f = Always(1)
        >>> f()
        1
        >>> f('ignored', 'too')
        1

    """
    value: A

    def __call__(self, *args: Any, **kwargs: Any) -> A:
        return self.value


def always(value: A) -> Callable[..., A]:
    """
    Get a function that always returns `value`. Handy as a handler for
    kinds whose associated values are irrelevant, or as a fallback

    Example:
        >>> download = Download.Failed('Connection reset.')
        >>> download.match({'Downloading': identity}, default=always(0))
        0

    Args:
        value: The value to return always

    Return:
        function that always returns `value`
    """
    return Always(value)


__all__ = [
    'identity', 'always', 'Always', 'Handler', 'Fallback', 'Cases'
]
