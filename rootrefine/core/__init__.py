from .result import (
    ExactRoot, Bounded, BoundedLeft, BoundedRight, OutOfBounds, RootRefinement
)

from .precision import PrecisionPolicy, FixedScale, SignificantDigits, make_precision_policy

from .qir import QIRRefiner

from .refine import (
    refine_root, refine_root_to_scale, refine_root_to_context,
    refine_crootof, refine_real_roots
)

__all__ = [
    'ExactRoot', 'Bounded', 'BoundedLeft', 'BoundedRight', 'OutOfBounds', 'RootRefinement',
    'PrecisionPolicy', 'FixedScale', 'SignificantDigits', 'make_precision_policy',
    'QIRRefiner',
    'refine_root', 'refine_root_to_scale', 'refine_root_to_context',
    'refine_crootof', 'refine_real_roots'
]
