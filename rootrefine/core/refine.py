from decimal import Context
from typing import List, Optional, Union

from sympy import Poly, Expr, Symbol, Rational
from sympy.polys.rootoftools import ComplexRootOf as CRootOf

from .precision import PrecisionPolicy, make_precision_policy
from .qir import QIRRefiner
from .result import ExactRoot, Bounded, RootRefinement
from ..utils.decimals import to_rational
from ..utils.descartes import as_integer_poly

def refine_root(
        poly: Union[Poly, Expr, List],
        lower: Union[Rational, int, str],
        upper: Union[Rational, int, str],
        precision: Union[int, Context, PrecisionPolicy],
        gen: Optional[Symbol] = None,
        max_adjust_steps: Optional[int] = None,
        time_limit: Optional[float] = None,
        verbose: bool = False
    ) -> RootRefinement:
    """
    Refine the unique real root of a polynomial in the open interval
    (lower, upper) to a decimal of the given precision.

    Parameters
    ----------
    poly : Poly, Expr or list
        A univariate polynomial with rational coefficients.
    lower, upper : Rational, int, str, Fraction or Decimal
        Exact bounds with lower < upper. The open interval (lower, upper)
        must contain exactly one root of the polynomial, which should be
        a simple root. This precondition is not checked.
    precision : int or decimal.Context
        An integer is the number of decimal places, which can be negative.
        A decimal.Context gives the number of significant digits and the
        rounding mode of the evaluated values.
    gen : Symbol, optional
        The generator if `poly` is an expression.
    max_adjust_steps : int, optional
        Maximum number of adjustments of the decimal endpoints.
    time_limit : float, optional
        Time limit in seconds. RefinementTimeout is raised when exceeded.
    verbose : bool
        Whether to print the refinement steps.

    Returns
    -------
    RootRefinement
        One of ExactRoot, Bounded, BoundedLeft, BoundedRight and OutOfBounds.
        OutOfBounds means that the precision is too coarse for the bounds.

    Examples
    --------
    >>> from sympy.abc import x
    >>> refine_root(x**2 - 2, 1, 2, 5)
    Bounded(1.41421, 1.41422)
    >>> refine_root(x - 1, 0, 2, 3)
    ExactRoot(1.000)
    """
    policy = make_precision_policy(precision)
    poly = as_integer_poly(poly, gen)
    lower, upper = to_rational(lower), to_rational(upper)
    if not lower < upper:
        raise ValueError(f"Lower bound {lower} should be less than upper bound {upper}.")

    refiner = QIRRefiner(poly, lower, upper, policy,
        max_adjust_steps=max_adjust_steps, time_limit=time_limit, verbose=verbose)
    return refiner.run()


def refine_root_to_scale(poly, lower, upper, scale: int, **kwargs) -> RootRefinement:
    """
    Refine a root to `scale` decimal places. See `refine_root`.
    """
    if not isinstance(scale, int):
        raise TypeError(f"Scale should be an integer, but got {type(scale)}.")
    return refine_root(poly, lower, upper, scale, **kwargs)


def refine_root_to_context(poly, lower, upper, context: Context, **kwargs) -> RootRefinement:
    """
    Refine a root to `context.prec` significant digits. See `refine_root`.
    """
    if not isinstance(context, Context):
        raise TypeError(f"Context should be a decimal.Context, but got {type(context)}.")
    return refine_root(poly, lower, upper, context, **kwargs)


def _refine_rational_root(root: Rational, policy: PrecisionPolicy) -> RootRefinement:
    """Round a known rational root to the decimal grid of the policy."""
    lower = policy.upper_bound(root)
    if to_rational(lower) == root:
        return ExactRoot(lower)
    return Bounded(lower, policy.lower_bound(root))


def _qq_to_rational(x) -> Rational:
    if isinstance(x, Rational):
        return x
    return Rational(int(x.numerator), int(x.denominator))


def refine_crootof(
        root: Union[CRootOf, Rational],
        precision: Union[int, Context, PrecisionPolicy],
        **kwargs
    ) -> RootRefinement:
    """
    Refine a real root represented by sympy CRootOf, starting from
    the isolating interval maintained by sympy.

    Parameters
    ----------
    root : CRootOf or Rational
        A real root of a polynomial with rational coefficients. Rational
        roots are accepted since CRootOf evaluates to them automatically.
    precision : int or decimal.Context
        See `refine_root`.
    kwargs :
        Passed to `refine_root`.

    Examples
    --------
    >>> from sympy import CRootOf
    >>> from sympy.abc import x
    >>> refine_crootof(CRootOf(x**3 - x - 1, 0), 6)
    Bounded(1.324717, 1.324718)
    """
    policy = make_precision_policy(precision)
    if isinstance(root, (int, Rational)):
        return _refine_rational_root(Rational(root), policy)
    if not isinstance(root, CRootOf):
        raise TypeError(f"Expected a CRootOf instance, but got {type(root)}.")
    if not root.is_real:
        raise ValueError(f"{root} is not a real root.")

    interval = root._get_interval()
    lower, upper = _qq_to_rational(interval.a), _qq_to_rational(interval.b)
    if lower == upper:
        return _refine_rational_root(lower, policy)
    return refine_root(root.poly, lower, upper, policy, **kwargs)


def refine_real_roots(
        poly: Union[Poly, Expr, List],
        precision: Union[int, Context, PrecisionPolicy],
        gen: Optional[Symbol] = None,
        **kwargs
    ) -> List[RootRefinement]:
    """
    Refine all distinct real roots of a polynomial in increasing order.
    The roots are isolated by sympy on the square-free part of the polynomial.

    Parameters
    ----------
    poly : Poly, Expr or list
        A univariate polynomial with rational coefficients.
    precision : int or decimal.Context
        See `refine_root`.
    gen : Symbol, optional
        The generator if `poly` is an expression.
    kwargs :
        Passed to `refine_root`.

    Examples
    --------
    >>> from sympy.abc import x
    >>> refine_real_roots(x**2 - 2, 3)
    [Bounded(-1.415, -1.414), Bounded(1.414, 1.415)]
    """
    policy = make_precision_policy(precision)
    poly = as_integer_poly(poly, gen).sqf_part()

    results = []
    for (lower, upper), _ in poly.intervals():
        lower, upper = Rational(lower), Rational(upper)
        if lower == upper:
            results.append(_refine_rational_root(lower, policy))
        else:
            results.append(refine_root(poly, lower, upper, policy, **kwargs))
    return results
