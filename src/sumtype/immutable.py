from dataclasses import dataclass


class Immutable:
    """
    Super class that makes subclasses immutable using dataclasses.
    Sum type instances are built on it so that neither the kind
    nor the associated values of an instance can change after
    construction

    Example:
        >>> class Point(Immutable):
        ...     x: int
        ...     y: int
        >>> p = Point(1, 2)
        >>> p.x = 3
        FrozenInstanceError: cannot assign to field 'x'

    Pass ``repr=False`` to keep a ``__repr__`` defined in the class body.
    """

    def __init_subclass__(cls, repr: bool = True) -> None:
        super().__init_subclass__()
        if not hasattr(cls, '__annotations__'):
            cls.__annotations__ = {}
        dataclass(frozen=True, repr=repr, eq=True)(cls)


__all__ = ['Immutable']
