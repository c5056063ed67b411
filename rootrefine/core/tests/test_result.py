from decimal import Decimal

from sympy import Rational
from sympy.testing.pytest import raises

from ..result import ExactRoot, Bounded, BoundedLeft, BoundedRight, OutOfBounds, _RefinementOutcome

def test_approximation():
    assert ExactRoot(Decimal('1.00')).approximation == Decimal(1)
    assert Bounded(Decimal('1.41'), Decimal('1.42')).approximation == Decimal('1.41')
    assert BoundedLeft(Rational(7, 5), Decimal('1.42')).approximation == Decimal('1.42')
    assert BoundedRight(Decimal('1.41'), Rational(3, 2)).approximation == Decimal('1.41')
    assert OutOfBounds(Rational(7, 5), Rational(3, 2), Decimal('1.5')).approximation == Decimal('1.5')

def test_kind_and_fields():
    results = [
        ExactRoot(Decimal('1.00')),
        Bounded(Decimal('1.41'), Decimal('1.42')),
        BoundedLeft(Rational(7, 5), Decimal('1.42')),
        BoundedRight(Decimal('1.41'), Rational(3, 2)),
        OutOfBounds(Rational(7, 5), Rational(3, 2), Decimal('1.5'))
    ]
    assert [r.kind for r in results] == ['exact', 'bounded', 'bounded_left', 'bounded_right', 'out_of_bounds']
    assert results[2].lower == Rational(7, 5) and results[3].upper == Rational(3, 2)
    assert results[4].args == (Rational(7, 5), Rational(3, 2), Decimal('1.5'))

def test_value_semantics():
    assert Bounded(Decimal('1.41'), Decimal('1.42')) == Bounded(Decimal('1.410'), Decimal('1.420'))
    assert Bounded(Decimal('1.41'), Decimal('1.42')) != BoundedRight(Decimal('1.41'), Decimal('1.42'))
    assert len({ExactRoot(Decimal('1.0')), ExactRoot(Decimal('1.00')), ExactRoot(Decimal(2))}) == 2

    r = ExactRoot(Decimal('1.00'))
    raises(AttributeError, lambda: setattr(r, 'root', Decimal(2)))
    raises(AttributeError, lambda: setattr(r, '_args', (Decimal(2),)))
    raises(TypeError, lambda: Bounded(Decimal(1)))

    assert repr(Bounded(Decimal('1.41421'), Decimal('1.41422'))) == 'Bounded(1.41421, 1.41422)'
    assert repr(BoundedLeft(Rational(7, 5), Decimal('1.42'))) == 'BoundedLeft(7/5, 1.42)'

def test_outcome_interface():
    class Midpoint(_RefinementOutcome):
        __slots__ = ()
        kind = 'midpoint'
        _fields = ('lower', 'upper')

        @property
        def approximation(self):
            return (self._args[0] + self._args[1]) / 2

    # an outcome must describe its enclosing interval
    raises(TypeError, lambda: _RefinementOutcome())
    raises(TypeError, lambda: Midpoint(Decimal(1), Decimal(2)))

    class ClosedMidpoint(Midpoint):
        __slots__ = ()
        def as_interval(self):
            return Rational(str(self._args[0])), Rational(str(self._args[1]))

    r = ClosedMidpoint(Decimal(1), Decimal(2))
    assert r.approximation == Decimal('1.5') and r.contains(Rational(3, 2))

def test_as_interval():
    assert ExactRoot(Decimal('1.5')).as_interval() == (Rational(3, 2), Rational(3, 2))
    assert Bounded(Decimal('1.41'), Decimal('1.42')).as_interval() == (Rational(141, 100), Rational(71, 50))
    assert BoundedLeft(Rational(7, 5), Decimal('1.42')).as_interval() == (Rational(7, 5), Rational(71, 50))
    assert OutOfBounds(Rational(7, 5), Rational(3, 2), Decimal('1.5')).as_interval() == (Rational(7, 5), Rational(3, 2))

    assert Bounded(Decimal('1.41'), Decimal('1.42')).contains(Decimal('1.415'))
    assert Bounded(Decimal('1.41'), Decimal('1.42')).contains('1.42')
    assert not Bounded(Decimal('1.41'), Decimal('1.42')).contains(Rational(3, 2))
    assert BoundedRight(Decimal('1.41'), Rational(3, 2)).contains(Rational(3, 2))
