"""
Precision policies decide how fine the decimal grid of a refinement is.

A policy answers two questions:
+ `eps(x)`: the scale at which an interval around `x` is small enough;
+ `round(v)`: how an exact rational value is turned into a decimal.

Two policies are supported: a fixed number of decimal places and
a number of significant digits given by a `decimal.Context`.
"""
from abc import ABC, abstractmethod
from decimal import Decimal, Context, ROUND_UP, ROUND_CEILING, ROUND_FLOOR
from functools import singledispatch
from math import ceil, log10
from typing import Optional

from sympy import Integer, Rational

from ..utils.decimals import (
    scale, unscaled, bit_length, rational_to_decimal, rational_to_context
)

BITS2DEC = log10(2)

class PrecisionPolicy(ABC):
    """
    Abstract precision policy shared by the refinement engine.
    """
    @abstractmethod
    def eps(self, x: Decimal) -> int:
        """Scale of one unit in the last requested place around `x`."""

    @abstractmethod
    def round(self, v: Rational, rounding: Optional[str] = None) -> Decimal:
        """
        Convert an exact value to a decimal. If rounding is None, the default
        rounding of the policy for evaluated values is used.
        """

    def lower_bound(self, lower: Rational) -> Decimal:
        """Round an exact lower bound upwards so that the bracket never widens."""
        return self.round(lower, ROUND_CEILING)

    def upper_bound(self, upper: Rational) -> Decimal:
        """Round an exact upper bound downwards so that the bracket never widens."""
        return self.round(upper, ROUND_FLOOR)


class FixedScale(PrecisionPolicy):
    """
    Every decimal carries `scale` digits after the decimal point. Evaluated
    values are rounded away from zero so that they are zero only if exact.
    """
    def __init__(self, scale: int):
        self.scale = int(scale)

    def __repr__(self) -> str:
        return f"FixedScale({self.scale})"

    def eps(self, x: Decimal) -> int:
        return self.scale

    def round(self, v: Rational, rounding: Optional[str] = None) -> Decimal:
        return rational_to_decimal(v, self.scale, ROUND_UP if rounding is None else rounding)


class SignificantDigits(PrecisionPolicy):
    """
    Decimals carry `context.prec` significant digits. The scale of a value
    grows with its number of leading digits, estimated from the bit length of
    its unscaled value.
    """
    def __init__(self, context: Context):
        self.context = context.copy()

    def __repr__(self) -> str:
        return f"SignificantDigits(prec={self.prec}, rounding={self.context.rounding})"

    @property
    def prec(self) -> int:
        return self.context.prec

    def eps(self, x: Decimal) -> int:
        return scale(x) - ceil(bit_length(unscaled(x)) * BITS2DEC) + self.prec + 1

    def round(self, v: Rational, rounding: Optional[str] = None) -> Decimal:
        return rational_to_context(v, self.context, rounding)


@singledispatch
def make_precision_policy(precision) -> PrecisionPolicy:
    """
    Build a precision policy from a user input. Integers are numbers of
    decimal places and `decimal.Context` objects give significant digits.
    """
    raise TypeError(f"Precision should be an int or a decimal.Context, but got {type(precision)}.")

@make_precision_policy.register(PrecisionPolicy)
def _make_precision_policy_policy(precision: PrecisionPolicy) -> PrecisionPolicy:
    return precision

@make_precision_policy.register(int)
def _make_precision_policy_int(precision: int) -> PrecisionPolicy:
    return FixedScale(precision)

@make_precision_policy.register(Integer)
def _make_precision_policy_integer(precision: Integer) -> PrecisionPolicy:
    return FixedScale(int(precision))

@make_precision_policy.register(Context)
def _make_precision_policy_context(precision: Context) -> PrecisionPolicy:
    return SignificantDigits(precision)
