"""
Primitive geometry factory functions.

Exact B-spline/NURBS representations of simple shapes:
- Lines and bilinear patches (non-rational)
- Circles and circular arcs (rational, degree 2)
- A quarter cylinder patch (rational in u, linear in v)

They are handy reference geometries: points on the circle lie at exactly
the radius, so they double as checks on the rational evaluators.
"""

import numpy as np
from typing import Sequence, Tuple

from .nurbs import NURBSCurve, NURBSSurface
from ..discretization.knot_vector import KnotVector, make_open_knot_vector


def make_nurbs_line(start: Sequence[float], end: Sequence[float],
                    degree: int = 1) -> NURBSCurve:
    """
    Create a straight line segment from start to end.

    Control points are evenly spaced along the segment, so the
    parameterization is uniform for any degree.

    Parameters:
        start: Start point
        end: End point
        degree: Polynomial degree (>= 1)

    Returns:
        Non-rational NURBSCurve on [0, 1]
    """
    if degree < 1:
        raise ValueError("Line degree must be at least 1")

    start = np.asarray(start, dtype=np.float64)
    end = np.asarray(end, dtype=np.float64)

    kv = make_open_knot_vector(degree + 1, degree)
    t = np.linspace(0.0, 1.0, degree + 1)[:, np.newaxis]
    control_points = (1.0 - t) * start + t * end

    return NURBSCurve(kv, control_points)


def make_nurbs_circle(radius: float = 1.0,
                      center: Tuple[float, float] = (0.0, 0.0)) -> NURBSCurve:
    """
    Create a NURBS curve representing a full circle.

    Uses the standard 9-control-point representation with degree 2.
    The circle is parameterized from 0 to 1, going counterclockwise
    starting from the positive x-axis.

    Parameters:
        radius: Circle radius
        center: Center coordinates (x, y)

    Returns:
        NURBSCurve representing the circle
    """
    p = 2
    n_basis = 9

    # Double knots at the quarter points
    knots = np.array([0, 0, 0, 0.25, 0.25, 0.5, 0.5, 0.75, 0.75, 1, 1, 1])
    kv = KnotVector(knots, p)

    w = 1.0 / np.sqrt(2.0)
    angles = np.arange(n_basis) * np.pi / 4
    weights = np.array([1, w, 1, w, 1, w, 1, w, 1])

    # Corner control points sit at radius*sqrt(2) on the 45-degree diagonals
    r = np.where(np.arange(n_basis) % 2 == 1, radius * np.sqrt(2.0), radius)

    control_points = np.zeros((n_basis, 2))
    control_points[:, 0] = center[0] + r * np.cos(angles)
    control_points[:, 1] = center[1] + r * np.sin(angles)

    return NURBSCurve(kv, control_points, weights)


def make_nurbs_arc(radius: float = 1.0,
                   center: Tuple[float, float] = (0.0, 0.0),
                   start_angle: float = 0.0,
                   end_angle: float = np.pi / 2) -> NURBSCurve:
    """
    Create a NURBS curve representing a circular arc.

    Uses degree 2 with 3 control points for arcs up to 90 degrees.

    Parameters:
        radius: Arc radius
        center: Center coordinates (x, y)
        start_angle: Starting angle in radians
        end_angle: Ending angle in radians (must be within 90 degrees of start)

    Returns:
        NURBSCurve representing the arc
    """
    sweep = end_angle - start_angle
    if sweep == 0 or abs(sweep) > np.pi / 2 + 1e-10:
        raise ValueError("Arc sweep must be non-zero and <= 90 degrees. "
                         "Use make_nurbs_circle for larger arcs.")

    kv = KnotVector(np.array([0, 0, 0, 1, 1, 1]), 2)

    w = np.cos(sweep / 2)
    weights = np.array([1, w, 1])

    # Middle control point: intersection of the end tangents
    mid_angle = (start_angle + end_angle) / 2
    d = radius / np.cos(sweep / 2)

    control_points = np.array([
        [center[0] + radius * np.cos(start_angle), center[1] + radius * np.sin(start_angle)],
        [center[0] + d * np.cos(mid_angle), center[1] + d * np.sin(mid_angle)],
        [center[0] + radius * np.cos(end_angle), center[1] + radius * np.sin(end_angle)],
    ])

    return NURBSCurve(kv, control_points, weights)


def make_bilinear_patch(p00: Sequence[float], p10: Sequence[float],
                        p01: Sequence[float], p11: Sequence[float]) -> NURBSSurface:
    """
    Create a bidegree-(1, 1) patch through four corner points.

    Parameters:
        p00, p10, p01, p11: Corners at (u, v) = (0,0), (1,0), (0,1), (1,1)

    Returns:
        Non-rational NURBSSurface on [0, 1]²
    """
    kv = KnotVector(np.array([0.0, 0.0, 1.0, 1.0]), 1)
    control_points = np.array([[p00, p01], [p10, p11]], dtype=np.float64)
    return NURBSSurface(kv, kv, control_points)


def make_nurbs_unit_square(p: int = 2, n_elem_u: int = 4, n_elem_v: int = 4,
                           physical_dim: int = 2) -> NURBSSurface:
    """
    Create a surface representing the unit square [0,1]².

    Control points sit at the Greville abscissae, which gives the
    identity mapping S(u, v) = (u, v) for any degree.

    Parameters:
        p: Polynomial degree in both directions
        n_elem_u: Number of knot spans in u direction
        n_elem_v: Number of knot spans in v direction
        physical_dim: 2 for a planar domain, 3 for a square in the z=0 plane

    Returns:
        Non-rational NURBSSurface representing the unit square
    """
    kv_u = make_open_knot_vector(n_elem_u + p, p, domain=(0.0, 1.0))
    kv_v = make_open_knot_vector(n_elem_v + p, p, domain=(0.0, 1.0))

    gu = kv_u.greville_abscissae()
    gv = kv_v.greville_abscissae()

    control_points = np.zeros((len(gu), len(gv), physical_dim))
    control_points[:, :, 0] = gu[:, np.newaxis]
    control_points[:, :, 1] = gv[np.newaxis, :]

    return NURBSSurface(kv_u, kv_v, control_points)


def make_nurbs_cylinder_patch(radius: float = 1.0, height: float = 1.0,
                              start_angle: float = 0.0,
                              end_angle: float = np.pi / 2) -> NURBSSurface:
    """
    Create a patch of a cylinder around the z-axis.

    The u direction follows a circular arc (see make_nurbs_arc) and the
    v direction runs linearly from z=0 to z=height.

    Returns:
        Rational NURBSSurface in 3D
    """
    arc = make_nurbs_arc(radius, (0.0, 0.0), start_angle, end_angle)
    arc_cp = arc.control_points
    arc_w = arc.weights

    kv_v = KnotVector(np.array([0.0, 0.0, 1.0, 1.0]), 1)

    control_points = np.zeros((arc.n_control_points, 2, 3))
    control_points[:, :, :2] = arc_cp[:, np.newaxis, :]
    control_points[:, 1, 2] = height

    weights = np.repeat(arc_w[:, np.newaxis], 2, axis=1)

    return NURBSSurface(arc.knot_vector, kv_v, control_points, weights)
