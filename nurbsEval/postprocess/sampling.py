"""
Batch sampling of curves and surfaces on uniform parameter grids.

Each sample is an independent call into the evaluators, so sampling has
no state beyond the output arrays.

Key functions:
- sample_curve: Points (and optionally derivatives) along a curve
- sample_surface: Points on a (n_u, n_v) parameter grid
"""

import logging
import numpy as np
from typing import Optional, Tuple

from ..config import settings
from ..geometry.nurbs import NURBSCurve, NURBSSurface

logger = logging.getLogger(__name__)


def sample_curve(curve: NURBSCurve,
                 n: Optional[int] = None,
                 n_ders: int = 0) -> Tuple[np.ndarray, np.ndarray]:
    """
    Sample a curve at uniformly spaced parameters over its domain.

    Parameters:
        curve: Curve to sample
        n: Number of samples (defaults to settings.default_samples)
        n_ders: If > 0, also return derivatives up to this order

    Returns:
        (params, values) where params has shape (n,) and values has
        shape (n, d) for n_ders == 0, or (n, n_ders+1, d) otherwise
    """
    if n is None:
        n = settings.default_samples
    if n < 2:
        raise ValueError("Need at least 2 samples")

    u0, u1 = curve.domain
    params = np.linspace(u0, u1, n)
    logger.debug("Sampling curve at %d parameters (n_ders=%d)", n, n_ders)

    if n_ders == 0:
        values = np.array([curve.eval_point(u) for u in params])
    else:
        values = np.array([curve.eval_derivatives(u, n_ders) for u in params])

    return params, values


def sample_surface(surface: NURBSSurface,
                   n_u: Optional[int] = None,
                   n_v: Optional[int] = None) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Sample a surface on a uniform grid in parametric space.

    Parameters:
        surface: Surface to sample
        n_u: Number of samples in u (defaults to settings.default_samples)
        n_v: Number of samples in v (defaults to n_u)

    Returns:
        (U, V, points) where U and V have shape (n_u, n_v) and points
        has shape (n_u, n_v, d)
    """
    if n_u is None:
        n_u = settings.default_samples
    if n_v is None:
        n_v = n_u
    if n_u < 2 or n_v < 2:
        raise ValueError("Need at least 2 samples per direction")

    (u0, u1), (v0, v1) = surface.domain
    u_vals = np.linspace(u0, u1, n_u)
    v_vals = np.linspace(v0, v1, n_v)
    U, V = np.meshgrid(u_vals, v_vals, indexing='ij')

    logger.debug("Sampling surface on %dx%d grid", n_u, n_v)

    # Stacking the evaluated points keeps their dtype (float32 stays float32)
    points = np.array([[surface.eval_point((u, v)) for v in v_vals]
                       for u in u_vals])

    return U, V, points
