"""
nurbsEval - B-spline and NURBS curve/surface evaluation

Evaluates points and derivatives of B-spline and NURBS (rational)
curves and surfaces at given parameter values.

Key modules:
- evaluate: The evaluation engine (pure functions on plain arrays)
- discretization: Knot vectors, span search and basis functions
- geometry: Validated curve/surface handles and primitive shapes
- validation: Degree/knot/control point consistency checks
- postprocess: Uniform sampling of curves and surfaces
- io: JSON curve/surface definitions

Quick start (free functions):
    from nurbsEval.evaluate import curve_point

    curve_point(0.5, 2, [0, 0, 0, 1, 1, 1], [[0, 0], [1, 2], [2, 0]])
    # -> array([1., 1.])

Quick start (validated handles):
    from nurbsEval import KnotVector, NURBSCurve

    kv = KnotVector([0, 0, 0, 1, 1, 1], degree=2)
    curve = NURBSCurve(kv, [[0, 0], [1, 2], [2, 0]], weights=[1, 2, 1])
    curve.eval_derivatives(0.5, n_ders=2)
"""

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

from .exceptions import NURBSEvalError, InvalidRelationError
from .config import settings, load_settings
from .validation import is_valid_relation, check_curve, check_surface
from .discretization.knot_vector import KnotVector, make_open_knot_vector
from .evaluate import (
    curve_point,
    rational_curve_point,
    curve_derivatives,
    rational_curve_derivatives,
    surface_point,
    rational_surface_point,
    surface_derivatives,
    rational_surface_derivatives,
)
from .geometry.nurbs import NURBSCurve, NURBSSurface, BSplineCurve, BSplineSurface
