from typing import Iterable, Optional, Tuple


def _names(kinds: Iterable[str]) -> str:
    return ', '.join(repr(k) for k in kinds)


class SumTypeError(Exception):
    """
    Base class of all errors raised by `sumtype`
    """
    pass


class SchemaError(SumTypeError, TypeError):
    """
    Raised when a sum type declaration is malformed
    """
    pass


class UnknownKindError(SumTypeError, ValueError):
    """
    Raised when a kind name is not declared by a sum type

    Example:
        >>> Maybe.construct('Perhaps', 1)
        UnknownKindError: 'Perhaps' is not a kind of Maybe (kinds: 'Nothing', 'Just')

    Attributes:
        type_name: name of the sum type
        kind: the unknown kind name
        kinds: the kinds the sum type declares
    """
    def __init__(self, type_name: str, kind: object, kinds: Tuple[str, ...]):
        self.type_name = type_name
        self.kind = kind
        self.kinds = kinds
        super().__init__(
            f'{kind!r} is not a kind of {type_name} (kinds: {_names(kinds)})'
        )


class ArityError(SumTypeError, TypeError):
    """
    Raised when a kind is constructed with the wrong number of values

    Attributes:
        type_name: name of the sum type
        kind: the kind being constructed
        expected: the declared arity of `kind`
        actual: the number of values given
    """
    def __init__(self, type_name: str, kind: str, expected: int, actual: int):
        self.type_name = type_name
        self.kind = kind
        self.expected = expected
        self.actual = actual
        plural = '' if expected == 1 else 's'
        verb = 'was' if actual == 1 else 'were'
        super().__init__(
            f'{type_name}.{kind} takes {expected} value{plural} '
            f'but {actual} {verb} given'
        )


class UnhandledKindError(SumTypeError, LookupError):
    """
    Raised by `match` when neither a handler for the instance's kind
    nor a fallback was given

    Attributes:
        type_name: name of the sum type
        kind: the kind without a handler
        handled: the kinds that did have a handler
    """
    def __init__(self,
                 type_name: str,
                 kind: str,
                 handled: Iterable[str],
                 message: Optional[str] = None):
        self.type_name = type_name
        self.kind = kind
        self.handled = tuple(sorted(handled))
        if message is None:
            message = (
                f'Unhandled kind {kind!r} of {type_name} '
                f'(handled: {_names(self.handled) or "nothing"})'
            )
        super().__init__(message)


class NonExhaustiveError(UnhandledKindError):
    """
    Raised by `exhaustive` when a handler table neither covers
    every kind nor has a fallback

    Attributes:
        missing: the kinds without a handler, in declaration order
    """
    def __init__(self,
                 type_name: str,
                 missing: Tuple[str, ...],
                 handled: Iterable[str]):
        self.missing = missing
        super().__init__(
            type_name,
            missing[0],
            handled,
            f'Cases for {type_name} are not exhaustive '
            f'(missing: {_names(missing)})'
        )


__all__ = [
    'SumTypeError',
    'SchemaError',
    'UnknownKindError',
    'ArityError',
    'UnhandledKindError',
    'NonExhaustiveError'
]
