"""
Quadratic Interval Refinement (QIR) of a real root over decimals.

Reference: J. Abbott, "Quadratic Interval Refinement for Real Roots".

The refinement is written as a state machine so that no step recurses:
+ ADJUSTING: turn the exact bounds into decimal endpoints whose values
  have opposite nonzero signs, or return early.
+ STALLED: split the bracket into five parts and probe the signs.
+ BISECTING: choose a sign change among three consecutive probes.
+ MAIN_LOOP: secant steps with a working precision that doubles on success.
+ DONE: `result` is available.
"""
from decimal import Decimal, ROUND_HALF_UP, ROUND_CEILING, ROUND_FLOOR
from time import perf_counter
from typing import Optional, Tuple

from sympy import Poly, Rational

from .precision import PrecisionPolicy
from .result import ExactRoot, Bounded, BoundedLeft, BoundedRight, OutOfBounds, RootRefinement
from ..utils.decimals import (
    ONE_FIFTH, add, subtract, multiply, divide, set_scale,
    sign, ulp, unit, unscaled, to_rational
)
from ..utils.descartes import to_rational_poly, evaluate, has_root_in
from ..utils.timeout import RefinementTimeout

ADJUSTING, MAIN_LOOP, STALLED, BISECTING, DONE = range(5)

STATE_NAMES = {
    ADJUSTING: 'ADJUSTING',
    MAIN_LOOP: 'MAIN_LOOP',
    STALLED: 'STALLED',
    BISECTING: 'BISECTING',
    DONE: 'DONE'
}

class QIRRefiner:
    """
    Refine the unique root of an integer polynomial in the open interval
    (lower, upper) to the precision of a PrecisionPolicy.

    A QIRRefiner instance is mutable and is meant to be run once.

    Parameters
    ----------
    poly : Poly
        A univariate polynomial over ZZ.
    lower, upper : Rational
        Exact bounds such that (lower, upper) contains exactly one root.
        This is not checked.
    policy : PrecisionPolicy
        The precision policy.
    max_adjust_steps : int, optional
        Maximum number of adjustments of the decimal endpoints before
        giving up with OutOfBounds. Defaults to `QIRRefiner.max_adjust_steps`.
    time_limit : float, optional
        Time limit in seconds. It is checked before every state transition
        and RefinementTimeout is raised when it is exceeded.
    verbose : bool
        Whether to print the state transitions.
    """
    max_adjust_steps = 8

    state = ADJUSTING
    result: Optional[RootRefinement] = None
    def __init__(self,
        poly: Poly,
        lower: Rational,
        upper: Rational,
        policy: PrecisionPolicy,
        max_adjust_steps: Optional[int] = None,
        time_limit: Optional[float] = None,
        verbose: bool = False
    ):
        self.poly = poly
        self.qpoly = to_rational_poly(poly)
        self.lower = lower
        self.upper = upper
        self.policy = policy
        if max_adjust_steps is not None:
            self.max_adjust_steps = max_adjust_steps
        self.time_limit = time_limit
        self.verbose = verbose

        # working precision of the secant step
        self.n = 1
        self.steps = 0
        self.evaluations = 0
        self._adjust_steps = 0
        self._args: Tuple = ()

    def __repr__(self) -> str:
        return f"QIRRefiner({self.poly.as_expr()}, ({self.lower}, {self.upper}), {self.policy!r}, state={STATE_NAMES[self.state]})"

    def evaluate(self, x: Decimal) -> Decimal:
        """Evaluate the polynomial exactly at `x` and round it by the policy."""
        self.evaluations += 1
        return self.policy.round(evaluate(self.qpoly, to_rational(x)))

    def eps(self, x: Decimal) -> int:
        return self.policy.eps(x)

    def run(self) -> RootRefinement:
        if self.state == DONE:
            return self.result
        time0 = perf_counter()
        time_limit = RefinementTimeout.make_checker(self.time_limit)

        lx = self.policy.lower_bound(self.lower)
        rx = self.policy.upper_bound(self.upper)
        self._transit(ADJUSTING, (lx, None, rx, None))

        handlers = {
            ADJUSTING: self._adjust,
            MAIN_LOOP: self._loop,
            STALLED: self._loop0,
            BISECTING: self._bisect,
        }
        while self.state != DONE:
            time_limit()
            handlers[self.state](*self._args)

        if self.verbose:
            print(f"QIR finished in {self.steps} steps and {self.evaluations} evaluations"
                  f" : {perf_counter() - time0:.6f} seconds. Result = {self.result}")
        return self.result

    def _transit(self, state: int, args: Tuple):
        self.state = state
        self._args = args
        self.steps += 1
        if self.verbose:
            print(f"QIR step {self.steps:<4d} {STATE_NAMES[state]:<10s} n = {self.n:<6d}"
                  f" [{args[0]}, {args[-2]}]")

    def _finish(self, result: RootRefinement):
        self.state = DONE
        self.result = result
        self._args = ()

    def _adjust(self, lx: Decimal, ly: Optional[Decimal], rx: Decimal, ry: Optional[Decimal]):
        """
        QIR expects decimal endpoints whose values have opposite nonzero signs.
        Rounding the exact bounds may instead hit a root exactly, land on a
        root of the endpoint or overshoot the root.
        """
        self._adjust_steps += 1
        if lx >= rx or self._adjust_steps > self.max_adjust_steps:
            # the decimal grid is too coarse to separate the bounds
            return self._finish(OutOfBounds(self.lower, self.upper, lx))

        if ly is None:
            ly = self.evaluate(lx)
        if ry is None:
            ry = self.evaluate(rx)

        if sign(ly) == 0:
            if to_rational(lx) > self.lower:
                return self._finish(ExactRoot(lx))
            # lx equals the open bound, push it inside and evaluate again
            return self._transit(ADJUSTING, (add(lx, unit(self.eps(lx))), None, rx, ry))
        if sign(ry) == 0:
            if to_rational(rx) < self.upper:
                return self._finish(ExactRoot(rx))
            return self._transit(ADJUSTING, (lx, ly, subtract(rx, unit(self.eps(rx))), None))
        if sign(ly) == sign(ry):
            # The root was cut off by one of the endpoints. It is either
            # in (lower, lx) or in (rx, upper).
            if has_root_in(self.qpoly, self.lower, to_rational(lx)):
                return self._finish(BoundedLeft(self.lower, lx))
            return self._finish(BoundedRight(rx, self.upper))
        return self._transit(STALLED, (lx, ly, rx, ry))

    def _loop(self, lx: Decimal, ly: Decimal, rx: Decimal, ry: Decimal):
        """One secant step at working precision n."""
        n = self.n
        s = divide(ly, subtract(ly, ry), n, ROUND_HALF_UP)
        dx = subtract(rx, lx)
        scale = max(self.eps(lx), self.eps(rx))
        if dx <= unit(scale):
            return self._bound(lx, ly, rx, ry, scale)

        delta = multiply(dx, ulp(s))
        k = unscaled(s)
        x1 = set_scale(add(lx, multiply(delta, Decimal(k))), scale, ROUND_HALF_UP)
        y1 = self.evaluate(x1)
        s1 = sign(y1)
        if s1 == sign(ly):
            x2 = set_scale(add(x1, delta), scale, ROUND_CEILING)
            y2 = self.evaluate(x2)
            s2 = sign(y2)
            if s2 == s1:
                return self._transit(STALLED, (lx, ly, rx, ry))
            if s2 == sign(ry):
                self.n = 2 * n
                return self._transit(MAIN_LOOP, (x1, y1, x2, y2))
            return self._finish(ExactRoot(x2))
        if s1 == sign(ry):
            x0 = set_scale(subtract(x1, delta), scale, ROUND_FLOOR)
            y0 = self.evaluate(x0)
            s0 = sign(y0)
            if s0 == s1:
                return self._transit(STALLED, (lx, ly, rx, ry))
            if s0 == sign(ly):
                self.n = 2 * n
                return self._transit(MAIN_LOOP, (x0, y0, x1, y1))
            return self._finish(ExactRoot(x0))
        return self._finish(ExactRoot(x1))

    def _bound(self, lx: Decimal, ly: Decimal, rx: Decimal, ry: Decimal, scale: int):
        """
        Round a bracket of width at most one unit outwards to the grid.
        Endpoints off the grid may round to two units apart, in which case
        the sign at the middle grid point selects the half with the root.
        """
        lower = set_scale(lx, scale, ROUND_FLOOR)
        upper = set_scale(rx, scale, ROUND_CEILING)
        u = unit(scale)
        if subtract(upper, lower) > u:
            mid = add(lower, u)
            ymid = self.evaluate(mid)
            if sign(ymid) == sign(ly):
                lower = mid
            elif sign(ymid) == sign(ry):
                upper = mid
            else:
                return self._finish(ExactRoot(mid))
        return self._finish(Bounded(lower, upper))

    def _loop0(self, x0: Decimal, y0: Decimal, x5: Decimal, y5: Decimal):
        """
        Split [x0, x5] into five equal parts and locate the sign change
        starting from the side suggested by the secant.
        """
        k = unscaled(divide(y0, subtract(y0, y5), 1, ROUND_HALF_UP))
        step = multiply(subtract(x5, x0), ONE_FIFTH)
        def probe(i: int) -> Tuple[Decimal, Decimal]:
            x = add(x0, multiply(Decimal(i), step))
            return x, self.evaluate(x)

        if k < 5:
            x2, y2 = probe(2)
            if sign(y2) != sign(y0):
                x1, y1 = probe(1)
                return self._transit(BISECTING, (x0, y0, x1, y1, x2, y2))
            x3, y3 = probe(3)
            if sign(y3) == sign(y5):
                self.n = 1
                return self._transit(MAIN_LOOP, (x2, y2, x3, y3))
            x4, y4 = probe(4)
            return self._transit(BISECTING, (x3, y3, x4, y4, x5, y5))

        x3, y3 = probe(3)
        if sign(y3) != sign(y5):
            x4, y4 = probe(4)
            return self._transit(BISECTING, (x3, y3, x4, y4, x5, y5))
        x2, y2 = probe(2)
        if sign(y2) == sign(y0):
            self.n = 1
            return self._transit(MAIN_LOOP, (x2, y2, x3, y3))
        x1, y1 = probe(1)
        return self._transit(BISECTING, (x0, y0, x1, y1, x2, y2))

    def _bisect(self, x0: Decimal, y0: Decimal, x1: Decimal, y1: Decimal, x2: Decimal, y2: Decimal):
        """Pick the sign change among three consecutive probes."""
        for x, y in ((x0, y0), (x1, y1), (x2, y2)):
            if sign(y) == 0:
                return self._finish(ExactRoot(x))
        self.n = 1
        if sign(y0) != sign(y1):
            return self._transit(MAIN_LOOP, (x0, y0, x1, y1))
        return self._transit(MAIN_LOOP, (x1, y1, x2, y2))
