"""
Exact operations on univariate polynomials over the rationals that are
needed to decide on which side of a point a root lies.

All functions take and return sympy Poly objects and never mutate them.
"""
from typing import List, Optional, Union

import sympy as sp
from sympy import Poly, Expr, Symbol, Rational, QQ
from sympy.polys.densebasic import dup_reverse
from sympy.polys.densetools import dup_sign_variations
from sympy.polys.polyerrors import BasePolynomialError

def as_integer_poly(poly: Union[Poly, Expr, List], gen: Optional[Symbol] = None) -> Poly:
    """
    Convert the input to a univariate polynomial with integer coefficients.

    Parameters
    ----------
    poly : Poly, Expr or list
        A univariate polynomial, a sympy expression or a list of coefficients
        with the highest degree first.
    gen : Symbol, optional
        The generator of the polynomial. It is required when `poly` is an
        expression with more than one free symbol.

    Returns
    -------
    Poly
        A polynomial over ZZ. Rational coefficients are cleared by
        multiplying with the common denominator, which keeps the roots.

    Examples
    --------
    >>> from sympy.abc import x
    >>> as_integer_poly(x**2/2 - 1)
    Poly(x**2 - 2, x, domain='ZZ')
    """
    if isinstance(poly, (list, tuple)):
        poly = Poly(list(poly), gen if gen is not None else Symbol('x'))
    elif not isinstance(poly, Poly):
        try:
            poly = Poly(sp.sympify(poly), gen) if gen is not None else Poly(sp.sympify(poly))
        except BasePolynomialError as e:
            raise ValueError(f"Cannot convert {poly} to a polynomial.") from e
    elif gen is not None and poly.gens != (gen,):
        poly = Poly(poly.as_expr(), gen)

    if len(poly.gens) != 1:
        raise ValueError(f"Expected a univariate polynomial, but got generators {poly.gens}.")
    if poly.is_zero:
        raise ValueError("The zero polynomial has no isolated roots.")
    if poly.domain.is_ZZ:
        return poly
    if poly.domain.is_QQ:
        _, poly = poly.clear_denoms(convert=True)
        return poly
    raise ValueError(f"Expected rational coefficients, but got domain {poly.domain}.")

def to_rational_poly(poly: Poly) -> Poly:
    """Map the coefficients of an integer polynomial to QQ."""
    return poly.set_domain(QQ)

def evaluate(poly: Poly, x: Rational) -> Rational:
    """Evaluate a polynomial over QQ at a rational point exactly."""
    return poly.eval(x)

def sign_variations(poly: Poly) -> int:
    """
    Count the sign changes in the coefficient sequence, ignoring zeros.
    By Descartes' rule of signs, this bounds the number of positive roots
    and has the same parity.
    """
    return dup_sign_variations(poly.rep.to_list(), poly.domain)

def remove_zero_roots(poly: Poly) -> Poly:
    """Divide the polynomial by the largest power of its generator."""
    _, poly = poly.terms_gcd()
    return poly

def reciprocal(poly: Poly) -> Poly:
    """Compute x**n * p(1/x) where n is the degree of p."""
    return Poly.from_list(dup_reverse(poly.rep.to_list()), *poly.gens, domain=poly.domain)

def has_root_in(poly: Poly, l: Rational, r: Rational) -> bool:
    """
    Return True if Descartes' rule of signs certifies an odd number of roots
    in the open interval (l, r). When (l, r) lies inside an isolating interval
    of a simple root, this decides whether the root is in (l, r).

    The interval is mapped to (0, oo) through a shift,
    a reciprocal and another shift.
    """
    if l == r:
        return False
    l, r = Rational(l), Rational(r)
    poly0 = remove_zero_roots(poly.shift(l))
    poly0 = reciprocal(poly0)
    poly0 = remove_zero_roots(poly0.shift(1 / (r - l)))
    return sign_variations(poly0) % 2 == 1
