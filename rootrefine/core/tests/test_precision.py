from decimal import Decimal, Context, ROUND_HALF_UP, ROUND_DOWN

from sympy import Rational, Integer
from sympy.testing.pytest import raises

from ..precision import FixedScale, SignificantDigits, make_precision_policy

def test_fixed_scale():
    policy = FixedScale(5)
    assert policy.eps(Decimal('1.5')) == 5 and policy.eps(Decimal('-123456.789')) == 5
    assert str(policy.round(Rational(2, 3))) == '0.66667'
    assert str(policy.round(Rational(-2, 3))) == '-0.66667'
    # values are rounded away from zero and are never rounded to zero
    assert str(policy.round(Rational(1, 10**9))) == '0.00001'
    assert str(policy.round(0)) == '0.00000'
    assert str(policy.lower_bound(Rational(1, 3))) == '0.33334'
    assert str(policy.upper_bound(Rational(1, 3))) == '0.33333'
    assert str(policy.lower_bound(Rational(-1, 3))) == '-0.33333'
    assert str(policy.upper_bound(Rational(-1, 3))) == '-0.33334'
    assert str(FixedScale(-1).lower_bound(Rational(123))) == '1.3E+2'

def test_significant_digits():
    ctx = Context(prec=10, rounding=ROUND_HALF_UP)
    policy10 = SignificantDigits(ctx)
    assert policy10.prec == 10
    assert policy10.eps(Decimal('1.5')) == 10
    assert policy10.eps(Decimal('1.41421')) == 10
    assert policy10.eps(Decimal('123.4')) == 8
    assert policy10.eps(Decimal('-123.4')) == 8

    policy = SignificantDigits(Context(prec=4, rounding=ROUND_HALF_UP))
    assert str(policy.round(Rational(2, 3))) == '0.6667'
    assert str(policy.lower_bound(Rational(2, 3))) == '0.6667'
    assert str(policy.upper_bound(Rational(2, 3))) == '0.6666'
    assert str(policy.upper_bound(Rational(200, 3))) == '66.66'

    # the policy keeps its own copy of the context
    ctx.rounding = ROUND_DOWN
    ctx.prec = 3
    assert policy10.prec == 10 and policy10.context.rounding == ROUND_HALF_UP

def test_make_precision_policy():
    assert isinstance(make_precision_policy(5), FixedScale)
    assert make_precision_policy(Integer(7)).scale == 7
    assert make_precision_policy(-2).scale == -2
    assert isinstance(make_precision_policy(Context(prec=20)), SignificantDigits)
    policy = FixedScale(3)
    assert make_precision_policy(policy) is policy

    raises(TypeError, lambda: make_precision_policy(1.5))
    raises(TypeError, lambda: make_precision_policy('5'))
