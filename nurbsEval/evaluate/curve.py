"""
Point and derivative evaluation on B-spline and NURBS curves.

A B-spline curve of degree p is

    C(u) = sum_i N_{i,p}(u) * P_i

and only the p+1 basis functions that are non-zero on the knot span
containing u contribute. A NURBS curve is evaluated by lifting the
control points to homogeneous coordinates Pw_i = (w_i*P_i, w_i),
evaluating the resulting B-spline in one extra dimension and projecting
back.

All functions here are pure: they take plain arrays and return new
arrays. They do not validate their input; see nurbsEval.validation.

Derivative tables have shape (num_ders+1, D) with row k holding the
k-th derivative.
"""

import numpy as np

from ..discretization.bspline import find_span, eval_basis_1d, eval_basis_ders_1d
from ..util import (as_float_array, binomial, cartesian_to_homogeneous,
                    homogeneous_to_cartesian, truncate_homogeneous)


def curve_point(u: float, degree: int, knots, control_points) -> np.ndarray:
    """
    Evaluate a point on a non-rational curve.

    Parameters:
        u: Parameter value
        degree: Degree of the curve
        knots: Knot vector
        control_points: Array of shape (n, D)

    Returns:
        Point as (D,) array
    """
    P = as_float_array(control_points)

    span = find_span(degree, knots, u)
    N = eval_basis_1d(degree, span, knots, u).astype(P.dtype)

    return N @ P[span - degree:span + 1]


def rational_curve_point(u: float, degree: int, knots, control_points,
                         weights) -> np.ndarray:
    """
    Evaluate a point on a rational (NURBS) curve.

    Weights are assumed strictly positive.

    Parameters:
        u: Parameter value
        degree: Degree of the curve
        knots: Knot vector
        control_points: Array of shape (n, D)
        weights: Array of shape (n,)

    Returns:
        Point as (D,) array
    """
    Pw = cartesian_to_homogeneous(control_points, weights)
    pointw = curve_point(u, degree, knots, Pw)
    return homogeneous_to_cartesian(pointw)


def curve_derivatives(u: float, degree: int, knots, control_points,
                      num_ders: int) -> np.ndarray:
    """
    Evaluate derivatives of a non-rational curve.

    Parameters:
        u: Parameter value
        degree: Degree of the curve
        knots: Knot vector
        control_points: Array of shape (n, D)
        num_ders: Highest derivative order

    Returns:
        Array of shape (num_ders+1, D); row k is the k-th derivative.
        Rows k > degree are zero.
    """
    if num_ders < 0:
        raise ValueError(f"num_ders must be non-negative, got {num_ders}")

    P = as_float_array(control_points)
    curve_ders = np.zeros((num_ders + 1, P.shape[-1]), dtype=P.dtype)

    span = find_span(degree, knots, u)
    ders = eval_basis_ders_1d(degree, span, knots, u, num_ders).astype(P.dtype)

    du = min(degree, num_ders)
    P_local = P[span - degree:span + 1]
    for k in range(du + 1):
        curve_ders[k] = ders[k] @ P_local

    return curve_ders


def rational_curve_derivatives(u: float, degree: int, knots, control_points,
                               weights, num_ders: int) -> np.ndarray:
    """
    Evaluate derivatives of a rational (NURBS) curve.

    With A(u) the cartesian part and w(u) the weight of the homogeneous
    curve, C = A / w and Leibniz' rule gives (Piegl & Tiller, Eq. 4.8)

        C^(k) = (A^(k) - sum_{i=1}^{k} C(k,i) * w^(i) * C^(k-i)) / w

    which is solved for increasing k.

    Parameters:
        u: Parameter value
        degree: Degree of the curve
        knots: Knot vector
        control_points: Array of shape (n, D)
        weights: Array of shape (n,), all > 0
        num_ders: Highest derivative order

    Returns:
        Array of shape (num_ders+1, D); row k is the k-th derivative
    """
    Pw = cartesian_to_homogeneous(control_points, weights)
    Cw_ders = curve_derivatives(u, degree, knots, Pw, num_ders)

    A_ders = truncate_homogeneous(Cw_ders)
    w_ders = Cw_ders[:, -1]

    curve_ders = np.zeros_like(A_ders)
    for k in range(num_ders + 1):
        v = A_ders[k].copy()
        for i in range(1, k + 1):
            v -= binomial(k, i) * w_ders[i] * curve_ders[k - i]
        curve_ders[k] = v / w_ders[0]

    return curve_ders
