"""
Homogeneous-coordinate helpers and small numeric utilities.

A weighted control point (P, w) in R^D is lifted to the homogeneous
point Pw = (w*P, w) in R^{D+1}. Rational curves and surfaces are then
evaluated as ordinary B-splines in D+1 dimensions and projected back.
"""

import math
import numpy as np


def as_float_array(a) -> np.ndarray:
    """
    Convert input to a floating point array.

    Floating dtypes (float32, float64, ...) are preserved; anything else
    is promoted to float64.
    """
    a = np.asarray(a)
    if not np.issubdtype(a.dtype, np.floating):
        a = a.astype(np.float64)
    return a


def cartesian_to_homogeneous(point, weight) -> np.ndarray:
    """
    Lift cartesian point(s) to homogeneous coordinates.

    Works on a single point of shape (D,) with a scalar weight, or on
    any array of points of shape (..., D) with weights of shape (...).

    Returns:
        Array of shape (..., D+1) holding (w*x_1, ..., w*x_D, w)
    """
    point = as_float_array(point)
    weight = np.asarray(weight, dtype=point.dtype)
    return np.concatenate([point * weight[..., np.newaxis],
                           weight[..., np.newaxis]], axis=-1)


def homogeneous_to_cartesian(pointw) -> np.ndarray:
    """Project homogeneous point(s) back by dividing by the last component."""
    pointw = np.asarray(pointw)
    return pointw[..., :-1] / pointw[..., -1:]


def truncate_homogeneous(pointw) -> np.ndarray:
    """
    Drop the last homogeneous component without dividing.

    Used on derivatives of homogeneous points, whose last component is
    a derivative of the weight function rather than a divisor.
    """
    return np.asarray(pointw)[..., :-1]


def binomial(n: int, k: int) -> int:
    """Binomial coefficient C(n, k) for 0 <= k <= n."""
    return math.comb(n, k)
