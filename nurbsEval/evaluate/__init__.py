"""
Evaluation engine for B-spline and NURBS curves and surfaces.

Pure functions over plain arrays; see curve.py and surface.py.
"""

from .curve import (
    curve_point,
    rational_curve_point,
    curve_derivatives,
    rational_curve_derivatives,
)
from .surface import (
    surface_point,
    rational_surface_point,
    surface_derivatives,
    rational_surface_derivatives,
)
