import ast
import keyword
import logging
import sys
import types
from typing import (Any, ClassVar, Dict, ForwardRef, Mapping, Optional,
                    Tuple, Type, TypeVar, get_args, get_origin)

from typing_extensions import Format, get_annotations

from .errors import (ArityError, NonExhaustiveError, SchemaError,
                     UnhandledKindError, UnknownKindError)
from .functions import Cases, Fallback, Handler
from .immutable import Immutable

logger = logging.getLogger(__name__)

R = TypeVar('R')
V = TypeVar('V', bound='Variant')


class _:
    """
    Wildcard case. Use it as a key in a handler table to give a
    zero-argument fallback for every kind without a handler of its own.
    It is a class rather than a string, so it can never be mistaken for
    a kind name

    Example:
        >>> Download.Failed('Connection reset.').match({
        ...     'Downloading': lambda pct: pct,
        ...     'Completed': lambda: 100,
        ...     _: lambda: 0
        ... })
        0
    """
    pass


def _split_cases(cases: Cases[R], default: Optional[Fallback[R]]
                 ) -> Tuple[Dict[str, Handler[R]], Optional[Fallback[R]]]:
    table = dict(cases)
    wildcard = table.pop(_, None)
    if wildcard is not None and default is not None:
        raise TypeError('Give either a wildcard case or a default, not both')
    for key in table:
        if not isinstance(key, str):
            raise TypeError(
                f'Case keys must be kind names or the wildcard _, '
                f'got {key!r}'
            )
    return table, wildcard if wildcard is not None else default


class Variant(Immutable, repr=False):
    """
    An immutable tagged value: exactly one `kind` together with the
    positional `values` associated with it.

    `Variant` itself is open: any kind name is accepted, since there is
    no declared set of kinds to check against. Subclass `SumType` to
    declare a closed set of kinds that is validated on construction.

    Example:
        >>> maybe = Variant('Just', ('foo',))
        >>> maybe.match({
        ...     'Nothing': lambda: 'nope',
        ...     'Just': lambda a: a + 'bar'
        ... })
        'foobar'
    """
    kind: str
    """
    Name of the active kind
    """

    values: Tuple[Any, ...] = ()
    """
    The associated values of `kind`, in declaration order
    """

    def __post_init__(self) -> None:
        if not isinstance(self.kind, str):
            raise TypeError(
                f'Kind of {type(self).__name__} must be a str, '
                f'got {self.kind!r}'
            )
        if not isinstance(self.values, tuple):
            raise TypeError(
                f'Values of {type(self).__name__} must be a tuple, '
                f'got {self.values!r}'
            )

    @classmethod
    def construct(cls: Type[V], kind: str, *values: Any) -> V:
        """
        Create an instance of `kind` with associated `values`

        Example:
            >>> Download.construct('Downloading', 42)
            Download.Downloading(42)

        Args:
            kind: name of the kind
            values: the associated values of `kind`
        Return:
            new instance of `cls`
        """
        return cls(kind, values)

    @classmethod
    def _check_kind(cls, kind: str) -> None:
        pass

    def is_(self, kind: str) -> bool:
        """
        Test whether `kind` is the active kind of this instance

        Example:
            >>> Download.Completed().is_('Completed')
            True

        Args:
            kind: name of the kind to test for
        Return:
            True if this instance is of `kind`, False otherwise
        """
        type(self)._check_kind(kind)
        return self.kind == kind

    def match(self,
              cases: Cases[R],
              default: Optional[Fallback[R]] = None) -> R:
        """
        Dispatch to the handler for the kind of this instance.

        The handler for the active kind is called with the associated
        values as positional arguments. If `cases` has no handler for the
        active kind, the fallback (the wildcard case `_` or `default`) is
        called with no arguments, whatever the arity of the kind.
        Exactly one handler is called.

        Example:
            >>> progress = {
            ...     'Downloading': lambda pct: pct,
            ...     'Completed': lambda: 100
            ... }
            >>> Download.Downloading(42).match(progress, default=always(0))
            42
            >>> Download.Failed('Connection reset.').match(progress)
            UnhandledKindError: Unhandled kind 'Failed' of Download (handled: 'Completed', 'Downloading')

        Args:
            cases: mapping from kind name, or `_`, to handler
            default: zero-argument fallback, instead of a `_` case
        Return:
            the result of the handler that was called
        Raises:
            UnhandledKindError: if neither a handler for the active kind \
                nor a fallback was given
            UnknownKindError: if `cases` names a kind that is not declared
        """
        table, fallback = _split_cases(cases, default)
        for kind in table:
            type(self)._check_kind(kind)
        if self.kind in table:
            return table[self.kind](*self.values)
        if fallback is not None:
            logger.debug(
                'No case for %s.%s, calling fallback',
                type(self).__name__,
                self.kind
            )
            return fallback()
        raise UnhandledKindError(type(self).__name__, self.kind, table)

    def __repr__(self) -> str:
        args = ', '.join(repr(v) for v in (self.kind, ) + self.values)
        return f'{type(self).__name__}({args})'


class Constructor(Immutable, repr=False):
    """
    Callable that constructs one kind of a sum type. Declared sum types
    get one as a class attribute per kind

    Example:
        >>> Download.Downloading
        <constructor Download.Downloading/1>
        >>> Download.Downloading(42)
        Download.Downloading(42)
    """
    sum_type: Type['SumType']
    kind: str

    def __call__(self, *values: Any) -> 'SumType':
        return self.sum_type(self.kind, values)

    def __repr__(self) -> str:
        arity = self.sum_type.arity(self.kind)
        return f'<constructor {self.sum_type.__name__}.{self.kind}/{arity}>'


def _is_tuple_name(node: ast.expr) -> bool:
    if isinstance(node, ast.Name):
        return node.id in ('Tuple', 'tuple')
    return isinstance(node, ast.Attribute) and node.attr == 'Tuple'


def _source_slots(type_name: str, kind: str,
                  source: str) -> Tuple[Any, ...]:
    try:
        node = ast.parse(source, mode='eval').body
    except SyntaxError:
        raise SchemaError(
            f'{type_name}.{kind}: cannot read annotation {source!r}'
        )
    if isinstance(node, ast.Subscript) and _is_tuple_name(node.value):
        args = node.slice
        elements = args.elts if isinstance(args, ast.Tuple) else [args]
    elif isinstance(node, ast.Tuple):
        elements = node.elts
    elif _is_tuple_name(node):
        raise SchemaError(
            f'{type_name}.{kind}: use Tuple[()] to declare a kind '
            'without values'
        )
    else:
        return (source, )
    return tuple(
        Ellipsis if isinstance(e, ast.Constant) and e.value is Ellipsis else
        ast.unparse(e) for e in elements
    )


def _slots(type_name: str, kind: str, declared: Any) -> Tuple[Any, ...]:
    # unresolved names are read from source, never evaluated
    if isinstance(declared, ForwardRef):
        declared = declared.__forward_arg__
    if isinstance(declared, str):
        declared = _source_slots(type_name, kind, declared)
    if isinstance(declared, tuple):
        slots = declared
    elif declared is tuple or declared is Tuple:
        raise SchemaError(
            f'{type_name}.{kind}: use Tuple[()] to declare a kind '
            'without values'
        )
    elif get_origin(declared) is tuple:
        slots = get_args(declared)
        # Tuple[()] on python < 3.11
        if slots == ((), ):
            slots = ()
    else:
        slots = (declared, )
    if any(slot is Ellipsis for slot in slots):
        raise SchemaError(
            f'{type_name}.{kind}: kinds take a fixed number of values'
        )
    return slots


def _check_name(type_name: str, kind: Any) -> None:
    if not isinstance(kind, str) or not kind.isidentifier():
        raise SchemaError(
            f'{type_name}: kind names must be identifiers, got {kind!r}'
        )
    if kind.startswith('_') or keyword.iskeyword(kind) or kind in _RESERVED:
        raise SchemaError(f'{type_name}: {kind!r} cannot be used as a kind')


class SumType(Variant, repr=False):
    """
    Base class of declared sum types. Each annotation in the body of a
    subclass declares a kind; the annotation gives the slots of its
    associated values. ``Tuple[()]`` declares a kind without values,
    ``Tuple[a, b]`` a kind with two values and any other annotation a kind
    with one value. Slot types are documentation; only the number of
    values is checked, and annotations that name undefined types (such as
    the sum type itself) are read as written.

    Construction is validated against the declared kinds, so an unknown
    kind or a wrong number of values fails immediately.

    Example:
        >>> class Download(SumType):
        ...     Downloading: Tuple[int]
        ...     Completed: Tuple[()]
        ...     Failed: Tuple[str]
        >>> Download.kinds()
        ('Downloading', 'Completed', 'Failed')
        >>> Download.Downloading(42).values
        (42,)
        >>> Download.Downloading()
        ArityError: Download.Downloading takes 1 value but 0 were given

    The set of kinds is fixed: a declared sum type cannot be subclassed.
    """
    schema: ClassVar[Mapping[str, Tuple[Any, ...]]] = types.MappingProxyType(
        {}
    )
    """
    Read-only mapping from kind name to the slots of its values,
    in declaration order
    """

    _declared: ClassVar[bool] = False

    def __init_subclass__(cls,
                          kinds: Optional[Mapping[str, Any]] = None) -> None:
        if cls._declared:
            raise SchemaError(
                f'Cannot subclass sum type {cls.__mro__[1].__name__}: '
                'its kinds are fixed'
            )
        annotations = get_annotations(cls, format=Format.FORWARDREF)
        cls.__annotations__ = {}
        if kinds is None:
            kinds = annotations
        elif annotations:
            raise SchemaError(
                f'{cls.__name__}: declare kinds as annotations or with '
                'kinds=, not both'
            )
        if not kinds:
            raise SchemaError(f'Sum type {cls.__name__} declares no kinds')
        schema = {}
        for kind, declared in kinds.items():
            _check_name(cls.__name__, kind)
            schema[kind] = _slots(cls.__name__, kind, declared)
        cls.schema = types.MappingProxyType(schema)
        cls._declared = True
        super().__init_subclass__(repr=False)
        for kind in schema:
            setattr(cls, kind, Constructor(cls, kind))
        logger.debug(
            'Declared sum type %s with kinds %s',
            cls.__qualname__,
            ', '.join(f'{k}/{len(s)}' for k, s in schema.items())
        )

    def __post_init__(self) -> None:
        super().__post_init__()
        cls = type(self)
        if not cls._declared:
            raise SchemaError(
                f'{cls.__name__} declares no kinds, subclass it to '
                'declare a sum type'
            )
        expected = cls.arity(self.kind)
        if len(self.values) != expected:
            raise ArityError(
                cls.__name__, self.kind, expected, len(self.values)
            )

    @classmethod
    def _check_kind(cls, kind: str) -> None:
        if kind not in cls.schema:
            raise UnknownKindError(cls.__name__, kind, cls.kinds())

    @classmethod
    def kinds(cls) -> Tuple[str, ...]:
        """
        Get the declared kinds of this sum type in declaration order
        """
        return tuple(cls.schema)

    @classmethod
    def arity(cls, kind: str) -> int:
        """
        Get the number of values associated with `kind`

        Example:
            >>> Download.arity('Completed')
            0

        Args:
            kind: name of a declared kind
        Return:
            the declared arity of `kind`
        Raises:
            UnknownKindError: if `kind` is not declared
        """
        cls._check_kind(kind)
        return len(cls.schema[kind])

    def __repr__(self) -> str:
        args = ', '.join(repr(v) for v in self.values)
        return f'{type(self).__name__}.{self.kind}({args})'


_RESERVED = frozenset(dir(SumType)) | frozenset(SumType.__dataclass_fields__)


def sum_type(name: str, /, **kinds: Any) -> Type[SumType]:
    """
    Declare a sum type without a class statement. Each keyword
    declares a kind; its value is a tuple of slots, or any other object
    to declare a single slot

    Example:
        >>> Maybe = sum_type('Maybe', Nothing=(), Just=(object, ))
        >>> Maybe.Just('foo')
        Maybe.Just('foo')

    Args:
        name: name of the new sum type
        kinds: kind names mapped to their slots
    Return:
        the new `SumType` subclass
    """
    module = sys._getframe(1).f_globals.get('__name__', '__main__')
    return types.new_class(
        name, (SumType, ), {'kinds': kinds},
        lambda ns: ns.update({'__module__': module})
    )


def construct(kind: str, *values: Any) -> Variant:
    """
    Create an open `Variant`. No kinds are declared for open variants,
    so nothing is validated

    Example:
        >>> construct('Just', 'foo')
        Variant('Just', 'foo')

    Args:
        kind: name of the kind
        values: the associated values of `kind`
    Return:
        new `Variant`
    """
    return Variant(kind, values)


def case_of(instance: Variant,
            cases: Cases[R],
            default: Optional[Fallback[R]] = None) -> R:
    """
    Function form of `Variant.match`

    Example:
        >>> case_of(construct('Nothing'), {
        ...     'Nothing': lambda: 'nope',
        ...     'Just': lambda a: a + 'bar'
        ... })
        'nope'
    """
    return instance.match(cases, default)


def exhaustive(sum_type: Type[SumType], cases: Cases[R]) -> Cases[R]:
    """
    Check once that a handler table covers every kind of `sum_type`,
    either with a handler per kind or with the wildcard case `_`.
    Useful for handler tables that are defined once and used many times

    Example:
        >>> progress = exhaustive(Download, {
        ...     'Downloading': lambda pct: pct,
        ...     'Completed': lambda: 100
        ... })
        NonExhaustiveError: Cases for Download are not exhaustive (missing: 'Failed')

    Args:
        sum_type: the sum type the cases are for
        cases: the handler table to check
    Return:
        `cases`
    Raises:
        NonExhaustiveError: if a kind is neither handled nor covered by `_`
        UnknownKindError: if `cases` names a kind that is not declared
    """
    table, fallback = _split_cases(cases, None)
    for kind in table:
        sum_type._check_kind(kind)
    if fallback is None:
        missing = tuple(k for k in sum_type.kinds() if k not in table)
        if missing:
            raise NonExhaustiveError(sum_type.__name__, missing, table)
    return cases


__all__ = [
    '_',
    'Variant',
    'SumType',
    'Constructor',
    'sum_type',
    'construct',
    'case_of',
    'exhaustive'
]
