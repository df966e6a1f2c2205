"""
Consistency checks for curve and surface descriptions.

The evaluators in nurbsEval.evaluate index control points directly from
the knot span and assume

    num_knots == num_ctrl_pts + degree + 1

in every parametric direction. Nothing in the evaluation loops checks
this. Call check_curve / check_surface (or use the geometry handles,
which do so at construction) before evaluating untrusted input.
"""

import logging
import numpy as np

from .exceptions import InvalidRelationError

logger = logging.getLogger(__name__)


def is_valid_relation(degree: int, num_knots: int, num_ctrl_pts: int) -> bool:
    """Check that num_knots == num_ctrl_pts + degree + 1."""
    return num_knots == num_ctrl_pts + degree + 1


def _check_direction(degree, knots, num_ctrl_pts, direction=""):
    if degree < 0:
        raise ValueError(f"Degree must be non-negative, got {degree}")

    knots = np.asarray(knots, dtype=np.float64)
    if knots.ndim != 1:
        raise ValueError("Knot vector must be one-dimensional")

    if not is_valid_relation(degree, len(knots), num_ctrl_pts):
        logger.debug("Relation check failed%s: p=%d, m=%d, n=%d",
                     f" ({direction})" if direction else "",
                     degree, len(knots), num_ctrl_pts)
        raise InvalidRelationError(degree, len(knots), num_ctrl_pts, direction)

    if np.any(np.diff(knots) < 0):
        raise ValueError("Knot vector must be non-decreasing")

    if num_ctrl_pts < degree + 1:
        raise ValueError(
            f"Need at least {degree + 1} control points for degree {degree}, "
            f"got {num_ctrl_pts}"
        )


def _check_weights(weights, expected_shape):
    weights = np.asarray(weights, dtype=np.float64)
    if weights.shape != expected_shape:
        raise ValueError(
            f"Weights shape {weights.shape} doesn't match control points {expected_shape}"
        )
    if np.any(weights <= 0):
        raise ValueError("All weights must be positive")


def check_curve(degree: int, knots, control_points, weights=None) -> None:
    """
    Validate a curve description.

    Parameters:
        degree: Polynomial degree
        knots: Knot vector
        control_points: Array of shape (n, D)
        weights: Optional array of shape (n,)

    Raises:
        InvalidRelationError: If the degree/knot/control point relation fails
        ValueError: For other malformed input (decreasing knots, bad weights)
    """
    control_points = np.asarray(control_points)
    if control_points.ndim != 2:
        raise ValueError(
            f"Curve control points must have shape (n, D), got {control_points.shape}"
        )

    _check_direction(degree, knots, control_points.shape[0])

    if weights is not None:
        _check_weights(weights, control_points.shape[:1])


def check_surface(degree_u: int, degree_v: int, knots_u, knots_v,
                  control_points, weights=None) -> None:
    """
    Validate a surface description.

    Parameters:
        degree_u, degree_v: Degrees in u and v
        knots_u, knots_v: Knot vectors in u and v
        control_points: Grid of shape (n_u, n_v, D)
        weights: Optional grid of shape (n_u, n_v)

    Raises:
        InvalidRelationError: If either direction fails the relation check
        ValueError: For other malformed input
    """
    control_points = np.asarray(control_points)
    if control_points.ndim != 3:
        raise ValueError(
            f"Surface control points must have shape (n_u, n_v, D), "
            f"got {control_points.shape}"
        )

    n_u, n_v = control_points.shape[:2]
    _check_direction(degree_u, knots_u, n_u, "u")
    _check_direction(degree_v, knots_v, n_v, "v")

    if weights is not None:
        _check_weights(weights, (n_u, n_v))
