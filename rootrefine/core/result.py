"""
Outcomes of a root refinement.

Each outcome is an immutable value. Use `kind` or `isinstance` to tell
them apart and `approximation` for a single decimal estimate.

+ ExactRoot(root): the polynomial vanishes at the decimal `root`.
+ Bounded(lower, upper): the root lies in the decimal interval
  [lower, upper] of one unit in the last requested place.
+ BoundedLeft(lower, upper): the root lies in (lower, upper) where
  `lower` is the exact rational bound and `upper` a decimal.
+ BoundedRight(lower, upper): the root lies in (lower, upper) where
  `lower` is a decimal and `upper` the exact rational bound.
+ OutOfBounds(lower, upper, approximation): no decimal of the requested
  precision could be confirmed inside the exact bounds. The approximation
  is not guaranteed and callers should increase the precision or
  provide tighter bounds.
"""
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Tuple, Union

from sympy import Rational

from ..utils.decimals import to_rational

class _RefinementOutcome(ABC):
    """
    Shared value semantics of the outcomes. Subclasses store their
    fields in `_args` and never modify them after construction.
    """
    __slots__ = ('_args',)
    kind = None
    _fields = ()

    def __init__(self, *args):
        if len(args) != len(self._fields):
            raise TypeError(f"{self.__class__.__name__} takes {len(self._fields)} arguments, but got {len(args)}.")
        object.__setattr__(self, '_args', tuple(args))

    def __setattr__(self, name, value):
        raise AttributeError(f"{self.__class__.__name__} is immutable.")

    @property
    def args(self) -> tuple:
        return self._args

    def __eq__(self, other) -> bool:
        return type(self) is type(other) and self._args == other._args

    def __ne__(self, other) -> bool:
        return not self.__eq__(other)

    def __hash__(self) -> int:
        return hash((self.__class__.__name__,) + self._args)

    def __repr__(self) -> str:
        args = ', '.join(str(_) if isinstance(_, Decimal) else repr(_) for _ in self._args)
        return f"{self.__class__.__name__}({args})"

    def __str__(self) -> str:
        return self.__repr__()

    @property
    @abstractmethod
    def approximation(self) -> Decimal:
        """A single decimal estimate of the root."""

    @abstractmethod
    def as_interval(self) -> Tuple[Rational, Rational]:
        """Closed rational interval that contains the root."""

    def contains(self, x) -> bool:
        """Whether `x` lies in the closed interval returned by `as_interval`."""
        lower, upper = self.as_interval()
        x = to_rational(x)
        return lower <= x <= upper


class ExactRoot(_RefinementOutcome):
    __slots__ = ()
    kind = 'exact'
    _fields = ('root',)

    @property
    def root(self) -> Decimal:
        return self._args[0]

    @property
    def approximation(self) -> Decimal:
        return self.root

    def as_interval(self) -> Tuple[Rational, Rational]:
        r = to_rational(self.root)
        return r, r


class Bounded(_RefinementOutcome):
    __slots__ = ()
    kind = 'bounded'
    _fields = ('lower', 'upper')

    @property
    def lower(self) -> Decimal:
        return self._args[0]

    @property
    def upper(self) -> Decimal:
        return self._args[1]

    @property
    def approximation(self) -> Decimal:
        return self.lower

    def as_interval(self) -> Tuple[Rational, Rational]:
        return to_rational(self.lower), to_rational(self.upper)


class BoundedLeft(_RefinementOutcome):
    __slots__ = ()
    kind = 'bounded_left'
    _fields = ('lower', 'upper')

    @property
    def lower(self) -> Rational:
        return self._args[0]

    @property
    def upper(self) -> Decimal:
        return self._args[1]

    @property
    def approximation(self) -> Decimal:
        return self.upper

    def as_interval(self) -> Tuple[Rational, Rational]:
        return self.lower, to_rational(self.upper)


class BoundedRight(_RefinementOutcome):
    __slots__ = ()
    kind = 'bounded_right'
    _fields = ('lower', 'upper')

    @property
    def lower(self) -> Decimal:
        return self._args[0]

    @property
    def upper(self) -> Rational:
        return self._args[1]

    @property
    def approximation(self) -> Decimal:
        return self.lower

    def as_interval(self) -> Tuple[Rational, Rational]:
        return to_rational(self.lower), self.upper


class OutOfBounds(_RefinementOutcome):
    __slots__ = ()
    kind = 'out_of_bounds'
    _fields = ('lower', 'upper', 'approximation')

    @property
    def lower(self) -> Rational:
        return self._args[0]

    @property
    def upper(self) -> Rational:
        return self._args[1]

    @property
    def approximation(self) -> Decimal:
        return self._args[2]

    def as_interval(self) -> Tuple[Rational, Rational]:
        return self.lower, self.upper


RootRefinement = Union[ExactRoot, Bounded, BoundedLeft, BoundedRight, OutOfBounds]
