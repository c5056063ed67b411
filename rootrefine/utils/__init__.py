from .decimals import (
    scale, unscaled, ulp, unit, sign, set_scale, to_rational,
    rational_to_decimal, rational_to_context, divide
)

from .descartes import (
    as_integer_poly, to_rational_poly, evaluate, sign_variations,
    remove_zero_roots, reciprocal, has_root_in
)

from .timeout import RefinementTimeout

__all__ = [
    'scale', 'unscaled', 'ulp', 'unit', 'sign', 'set_scale', 'to_rational',
    'rational_to_decimal', 'rational_to_context', 'divide',
    'as_integer_poly', 'to_rational_poly', 'evaluate', 'sign_variations',
    'remove_zero_roots', 'reciprocal', 'has_root_in',
    'RefinementTimeout'
]
