"""
Geometry module for B-spline/NURBS curves and surfaces.
"""

from .nurbs import (
    NURBSGeometry,
    NURBSCurve,
    NURBSSurface,
    BSplineCurve,
    BSplineSurface,
)
from .primitives import (
    make_nurbs_line,
    make_nurbs_circle,
    make_nurbs_arc,
    make_bilinear_patch,
    make_nurbs_unit_square,
    make_nurbs_cylinder_patch,
)
