"""
Point and derivative evaluation on B-spline and NURBS surfaces.

A tensor-product surface of bidegree (p, q) is

    S(u, v) = sum_i sum_j N_{i,p}(u) * N_{j,q}(v) * P_{i,j}

Control points are passed as a grid of shape (n_u, n_v, D), with the
first index running along u. At a given (u, v) only the
(p+1) x (q+1) block starting at (span_u - p, span_v - q) contributes.
The block is always contracted against the u-basis first and the
v-basis second.

Derivative tables have shape (num_ders+1, num_ders+1, D); entry [k, l]
is d^{k+l} S / du^k dv^l. Entries with k + l > num_ders are left zero.
"""

import numpy as np

from ..discretization.bspline import find_span, eval_basis_1d, eval_basis_ders_1d
from ..util import (as_float_array, binomial, cartesian_to_homogeneous,
                    homogeneous_to_cartesian, truncate_homogeneous)


def _local_block(P, span_u, span_v, degree_u, degree_v):
    return P[span_u - degree_u:span_u + 1, span_v - degree_v:span_v + 1]


def surface_point(u: float, v: float, degree_u: int, degree_v: int,
                  knots_u, knots_v, control_points) -> np.ndarray:
    """
    Evaluate a point on a non-rational surface.

    Parameters:
        u, v: Parameter values
        degree_u, degree_v: Degrees in u and v
        knots_u, knots_v: Knot vectors in u and v
        control_points: Grid of shape (n_u, n_v, D)

    Returns:
        Point as (D,) array
    """
    P = as_float_array(control_points)

    span_u = find_span(degree_u, knots_u, u)
    span_v = find_span(degree_v, knots_v, v)
    Nu = eval_basis_1d(degree_u, span_u, knots_u, u).astype(P.dtype)
    Nv = eval_basis_1d(degree_v, span_v, knots_v, v).astype(P.dtype)

    block = _local_block(P, span_u, span_v, degree_u, degree_v)

    # (q+1, D) intermediate points, one per column of the block
    temp = np.tensordot(Nu, block, axes=(0, 0))
    return Nv @ temp


def rational_surface_point(u: float, v: float, degree_u: int, degree_v: int,
                           knots_u, knots_v, control_points,
                           weights) -> np.ndarray:
    """
    Evaluate a point on a rational (NURBS) surface.

    Parameters:
        u, v: Parameter values
        degree_u, degree_v: Degrees in u and v
        knots_u, knots_v: Knot vectors in u and v
        control_points: Grid of shape (n_u, n_v, D)
        weights: Grid of shape (n_u, n_v), all > 0

    Returns:
        Point as (D,) array
    """
    Pw = cartesian_to_homogeneous(control_points, weights)
    pointw = surface_point(u, v, degree_u, degree_v, knots_u, knots_v, Pw)
    return homogeneous_to_cartesian(pointw)


def surface_derivatives(u: float, v: float, degree_u: int, degree_v: int,
                        knots_u, knots_v, control_points,
                        num_ders: int) -> np.ndarray:
    """
    Evaluate mixed partial derivatives of a non-rational surface.

    Only orders k + l <= num_ders are computed. Entries with
    k > degree_u or l > degree_v are zero.

    Parameters:
        u, v: Parameter values
        degree_u, degree_v: Degrees in u and v
        knots_u, knots_v: Knot vectors in u and v
        control_points: Grid of shape (n_u, n_v, D)
        num_ders: Highest total derivative order

    Returns:
        Array of shape (num_ders+1, num_ders+1, D)
    """
    if num_ders < 0:
        raise ValueError(f"num_ders must be non-negative, got {num_ders}")

    P = as_float_array(control_points)
    surf_ders = np.zeros((num_ders + 1, num_ders + 1, P.shape[-1]), dtype=P.dtype)

    span_u = find_span(degree_u, knots_u, u)
    span_v = find_span(degree_v, knots_v, v)
    ders_u = eval_basis_ders_1d(degree_u, span_u, knots_u, u, num_ders).astype(P.dtype)
    ders_v = eval_basis_ders_1d(degree_v, span_v, knots_v, v, num_ders).astype(P.dtype)

    block = _local_block(P, span_u, span_v, degree_u, degree_v)

    du = min(degree_u, num_ders)
    dv = min(degree_v, num_ders)

    for k in range(du + 1):
        temp = np.tensordot(ders_u[k], block, axes=(0, 0))

        dd = min(num_ders - k, dv)
        for l in range(dd + 1):
            surf_ders[k, l] = ders_v[l] @ temp

    return surf_ders


def rational_surface_derivatives(u: float, v: float, degree_u: int,
                                 degree_v: int, knots_u, knots_v,
                                 control_points, weights,
                                 num_ders: int) -> np.ndarray:
    """
    Evaluate mixed partial derivatives of a rational (NURBS) surface.

    With A the cartesian part and w the weight of the homogeneous
    surface, S = A / w. Inverting the two-variable Leibniz rule
    (Piegl & Tiller, Eq. 4.20) gives

        S_{k,l} = (A_{k,l}
                   - sum_{j=1}^{l} C(l,j) w_{0,j} S_{k,l-j}
                   - sum_{i=1}^{k} C(k,i) w_{i,0} S_{k-i,l}
                   - sum_{i=1}^{k} C(k,i) sum_{j=1}^{l} C(l,j) w_{i,j} S_{k-i,l-j}
                  ) / w_{0,0}

    evaluated for increasing k, then l. The base weight w_{0,0} is
    assumed non-zero, which holds for strictly positive weights.

    Parameters:
        u, v: Parameter values
        degree_u, degree_v: Degrees in u and v
        knots_u, knots_v: Knot vectors in u and v
        control_points: Grid of shape (n_u, n_v, D)
        weights: Grid of shape (n_u, n_v), all > 0
        num_ders: Highest total derivative order

    Returns:
        Array of shape (num_ders+1, num_ders+1, D)
    """
    Pw = cartesian_to_homogeneous(control_points, weights)
    homo_ders = surface_derivatives(u, v, degree_u, degree_v, knots_u, knots_v,
                                    Pw, num_ders)

    A_ders = truncate_homogeneous(homo_ders)
    w_ders = homo_ders[..., -1]

    surf_ders = np.zeros_like(A_ders)
    for k in range(num_ders + 1):
        for l in range(num_ders - k + 1):
            der = A_ders[k, l].copy()

            for j in range(1, l + 1):
                der -= binomial(l, j) * w_ders[0, j] * surf_ders[k, l - j]

            for i in range(1, k + 1):
                der -= binomial(k, i) * w_ders[i, 0] * surf_ders[k - i, l]

                tmp = np.zeros_like(der)
                for j in range(1, l + 1):
                    tmp += binomial(l, j) * w_ders[i, j] * surf_ders[k - i, l - j]

                der -= binomial(k, i) * tmp

            surf_ders[k, l] = der / w_ders[0, 0]

    return surf_ders
