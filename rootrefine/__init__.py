from .core import (
    refine_root, refine_root_to_scale, refine_root_to_context,
    refine_crootof, refine_real_roots,
    ExactRoot, Bounded, BoundedLeft, BoundedRight, OutOfBounds, RootRefinement,
    FixedScale, SignificantDigits, QIRRefiner
)

from .utils import RefinementTimeout

__version__ = "0.1.0.dev"

__all__ = [
    '__version__',

    'refine_root', 'refine_root_to_scale', 'refine_root_to_context',
    'refine_crootof', 'refine_real_roots',
    'ExactRoot', 'Bounded', 'BoundedLeft', 'BoundedRight', 'OutOfBounds', 'RootRefinement',
    'FixedScale', 'SignificantDigits', 'QIRRefiner',
    'RefinementTimeout'
]
