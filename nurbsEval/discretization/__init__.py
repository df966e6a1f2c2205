"""
Discretization module: knot vectors and B-spline basis functions.

Provides:
- KnotVector: Knot vector representation
- find_span / eval_basis_1d / eval_basis_ders_1d: the basis provider
  used by the evaluators
"""

from .knot_vector import KnotVector, make_open_knot_vector
from .bspline import find_span, eval_basis_1d, eval_basis_ders_1d
