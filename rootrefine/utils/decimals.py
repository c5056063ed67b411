"""
This module provides the small set of decimal operations needed by
the root refinement, on top of the standard `decimal.Decimal`.

A decimal value `x` is viewed as `unscaled(x) * 10**(-scale(x))`,
so that `Decimal('1.250')` has unscaled value 1250 and scale 3.
All arithmetic here is exact unless a rounding mode is given explicitly.
"""
from decimal import (
    Decimal, Context, MAX_PREC, MAX_EMAX, MIN_EMIN,
    ROUND_UP, ROUND_DOWN, ROUND_CEILING, ROUND_FLOOR,
    ROUND_HALF_UP, ROUND_HALF_DOWN, ROUND_HALF_EVEN, ROUND_05UP
)
from fractions import Fraction
from typing import Union

from sympy import Rational

# Additions, subtractions and multiplications of finite decimals are exact
# under this context. Never use it to divide.
EXACT = Context(prec=MAX_PREC, rounding=ROUND_HALF_UP, Emax=MAX_EMAX, Emin=MIN_EMIN)

ONE_FIFTH = Decimal('0.2')

def scale(x: Decimal) -> int:
    """Number of digits after the decimal point, possibly negative."""
    return -x.as_tuple().exponent

def unscaled(x: Decimal) -> int:
    """
    Signed integer formed by the digits of `x`.

    Examples
    --------
    >>> unscaled(Decimal('-1.250'))
    -1250
    """
    return int(x.scaleb(scale(x), EXACT))

def bit_length(n: int) -> int:
    """Bit length of a two's complement integer, excluding the sign bit."""
    return (n if n >= 0 else ~n).bit_length()

def unit(s: int) -> Decimal:
    """Return 10**(-s) with scale s."""
    return Decimal((0, (1,), -s))

def ulp(x: Decimal) -> Decimal:
    """Unit in the last place of `x`."""
    return unit(scale(x))

def sign(x: Decimal) -> int:
    return (x > 0) - (x < 0)

def add(x: Decimal, y: Decimal) -> Decimal:
    return EXACT.add(x, y)

def subtract(x: Decimal, y: Decimal) -> Decimal:
    return EXACT.subtract(x, y)

def multiply(x: Decimal, y: Decimal) -> Decimal:
    return EXACT.multiply(x, y)

def set_scale(x: Decimal, s: int, rounding: str) -> Decimal:
    """Round `x` to exactly `s` digits after the decimal point."""
    return x.quantize(unit(s), rounding=rounding, context=EXACT)

def _round_division(num: int, den: int, rounding: str) -> int:
    """Round num/den to an integer with the given decimal rounding mode."""
    if den < 0:
        num, den = -num, -den
    q, r = divmod(num, den) # floor division
    if r == 0 or rounding == ROUND_FLOOR:
        return q
    negative = num < 0
    if rounding == ROUND_CEILING:
        return q + 1
    if rounding == ROUND_DOWN:
        return q + 1 if negative else q
    if rounding == ROUND_UP:
        return q if negative else q + 1
    if rounding == ROUND_05UP:
        # away from zero only if the truncated last digit is 0 or 5
        t = q + 1 if negative else q
        if t % 5 == 0:
            return q if negative else q + 1
        return t

    c = 2 * r - den
    if c < 0:
        return q
    if c > 0:
        return q + 1
    # a tie
    if rounding == ROUND_HALF_UP:
        return q if negative else q + 1
    if rounding == ROUND_HALF_DOWN:
        return q + 1 if negative else q
    if rounding == ROUND_HALF_EVEN:
        return q if q % 2 == 0 else q + 1
    raise ValueError(f"Unknown rounding mode {rounding!r}.")

def to_rational(x: Union[Decimal, Fraction, Rational, int, str]) -> Rational:
    """
    Convert a number to a sympy Rational exactly.

    Decimals are converted through their integer ratio so that
    no binary floating point is involved.
    """
    if isinstance(x, Decimal):
        if not x.is_finite():
            raise ValueError(f"Cannot convert {x} to a rational number.")
        return Rational(*x.as_integer_ratio())
    if isinstance(x, Fraction):
        return Rational(x.numerator, x.denominator)
    if isinstance(x, float):
        raise TypeError("Floats are not accepted as exact bounds. Use a string or a Rational instead.")
    return Rational(x)

def rational_to_decimal(x: Rational, s: int, rounding: str) -> Decimal:
    """
    Round a rational number to a decimal with exactly `s` digits
    after the decimal point.

    Examples
    --------
    >>> rational_to_decimal(Rational(2, 3), 3, ROUND_FLOOR)
    Decimal('0.666')
    >>> rational_to_decimal(Rational(2, 3), 3, ROUND_CEILING)
    Decimal('0.667')
    """
    x = Rational(x)
    num, den = int(x.p), int(x.q)
    if s >= 0:
        k = _round_division(num * 10**s, den, rounding)
    else:
        k = _round_division(num, den * 10**(-s), rounding)
    return Decimal(k).scaleb(-s, EXACT)

def rational_to_context(x: Rational, context: Context, rounding: str = None) -> Decimal:
    """
    Round a rational number to `context.prec` significant digits. The rounding
    mode of the context is used unless `rounding` is given.

    The division is carried out by `decimal`, which rounds correctly
    under every rounding mode. Exact quotients keep their shortest form,
    e.g. 1/4 becomes Decimal('0.25') regardless of the precision.
    """
    x = Rational(x)
    if rounding is not None and rounding != context.rounding:
        context = context.copy()
        context.rounding = rounding
    return context.divide(Decimal(int(x.p)), Decimal(int(x.q)))

def divide(x: Decimal, y: Decimal, s: int, rounding: str) -> Decimal:
    """Compute x / y rounded to exactly `s` digits after the decimal point."""
    if y == 0:
        raise ZeroDivisionError("Division of decimals by zero.")
    return rational_to_decimal(to_rational(x) / to_rational(y), s, rounding)
