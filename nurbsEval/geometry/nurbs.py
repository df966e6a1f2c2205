"""
Validated B-spline/NURBS curve and surface handles.

NURBS extend B-splines by introducing weights for each control point,
enabling exact representation of conic sections (circles, ellipses, etc.).

A NURBS curve point is computed as:

    C(u) = sum_i (N_i(u) * w_i * P_i) / sum_i (N_i(u) * w_i)

The free functions in nurbsEval.evaluate assume a consistent
degree/knot/control point relation and positive weights. The handles
here check both once, at construction, and then dispatch to the
rational or non-rational evaluator.

This module provides:
- NURBSGeometry: Abstract base for curve and surface handles
- NURBSCurve: parametric curves in any dimension
- NURBSSurface: tensor-product surfaces in any dimension
- BSplineCurve / BSplineSurface: non-rational convenience constructors
"""

import logging
import numpy as np
from typing import Tuple, Optional, Union
from abc import ABC, abstractmethod

from ..config import settings
from ..discretization.knot_vector import KnotVector
from ..evaluate import (
    curve_point, rational_curve_point,
    curve_derivatives, rational_curve_derivatives,
    surface_point, rational_surface_point,
    surface_derivatives, rational_surface_derivatives,
)
from ..util import as_float_array
from ..validation import check_curve, check_surface

logger = logging.getLogger(__name__)


class NURBSGeometry(ABC):
    """
    Abstract base class for curve and surface handles.

    Key responsibilities:
    - Store knot vectors, control points and (optional) weights
    - Enforce the structural invariants once, at construction
    - Evaluate points and derivatives at parameter values
    """

    @property
    @abstractmethod
    def n_dim_parametric(self) -> int:
        """Number of parametric dimensions (1=curve, 2=surface)."""
        pass

    @property
    @abstractmethod
    def n_dim_physical(self) -> int:
        """Number of physical/spatial dimensions."""
        pass

    @property
    @abstractmethod
    def control_points(self) -> np.ndarray:
        pass

    @property
    @abstractmethod
    def weights(self) -> Optional[np.ndarray]:
        """Weights, or None for a non-rational geometry."""
        pass

    @property
    def is_rational(self) -> bool:
        return self.weights is not None

    @abstractmethod
    def eval_point(self, xi: Union[float, Tuple[float, float]]) -> np.ndarray:
        """Evaluate geometry at a parameter value."""
        pass

    @abstractmethod
    def eval_derivatives(self, xi: Union[float, Tuple[float, float]],
                         n_ders: int = 1) -> np.ndarray:
        """Evaluate geometry and derivatives at a parameter value."""
        pass


def _check_parameter(kv: KnotVector, u: float, name: str = "u") -> None:
    if settings.check_domain and not kv.contains(u, settings.domain_tol):
        raise ValueError(f"Parameter {name}={u} outside domain {kv.domain}")


class NURBSCurve(NURBSGeometry):
    """
    B-spline or NURBS curve in arbitrary dimensional space.

    A curve C(u) is defined by:
    - Knot vector defining the parametric domain and degree
    - Control points P_i in R^d
    - Optional weights w_i > 0 (None means non-rational)
    """

    def __init__(self, knot_vector: KnotVector,
                 control_points: np.ndarray,
                 weights: Optional[np.ndarray] = None):
        """
        Parameters:
            knot_vector: KnotVector defining the basis
            control_points: Array of shape (n, d) where n = knot_vector.n_basis
            weights: Array of shape (n,), or None for a B-spline curve

        Raises:
            InvalidRelationError: If the number of control points does not
                match the knot vector and degree
            ValueError: For bad weights
        """
        control_points = as_float_array(control_points)
        if control_points.ndim == 1:
            control_points = control_points[:, np.newaxis]

        check_curve(knot_vector.degree, knot_vector.knots, control_points, weights)

        self._knot_vector = knot_vector
        self._control_points = control_points.copy()
        self._weights = None if weights is None else as_float_array(weights).copy()

        logger.debug("Created %s curve: degree=%d, n=%d, dim=%d",
                     "rational" if self.is_rational else "non-rational",
                     self.degree, len(self._control_points), self.n_dim_physical)

    @property
    def n_dim_parametric(self) -> int:
        return 1

    @property
    def n_dim_physical(self) -> int:
        return self._control_points.shape[1]

    @property
    def n_control_points(self) -> int:
        return self._control_points.shape[0]

    @property
    def control_points(self) -> np.ndarray:
        return self._control_points.copy()

    @property
    def weights(self) -> Optional[np.ndarray]:
        return None if self._weights is None else self._weights.copy()

    @property
    def knot_vector(self) -> KnotVector:
        return self._knot_vector

    @property
    def knots(self) -> np.ndarray:
        return self._knot_vector.knots.copy()

    @property
    def degree(self) -> int:
        return self._knot_vector.degree

    @property
    def domain(self) -> Tuple[float, float]:
        return self._knot_vector.domain

    def eval_point(self, u: float) -> np.ndarray:
        """
        Evaluate curve at parameter value.

        Parameters:
            u: Parameter value

        Returns:
            Point coordinates as (d,) array
        """
        _check_parameter(self._knot_vector, u)
        knots = self._knot_vector.knots

        if self._weights is None:
            return curve_point(u, self.degree, knots, self._control_points)
        return rational_curve_point(u, self.degree, knots, self._control_points,
                                    self._weights)

    def eval_derivatives(self, u: float, n_ders: int = 1) -> np.ndarray:
        """
        Evaluate curve and derivatives at parameter value.

        Parameters:
            u: Parameter value
            n_ders: Highest derivative order

        Returns:
            Array of shape (n_ders+1, d): C, dC/du, d²C/du², ...
        """
        _check_parameter(self._knot_vector, u)
        knots = self._knot_vector.knots

        if self._weights is None:
            return curve_derivatives(u, self.degree, knots, self._control_points,
                                     n_ders)
        return rational_curve_derivatives(u, self.degree, knots,
                                          self._control_points, self._weights,
                                          n_ders)

    def tangent(self, u: float) -> np.ndarray:
        """Unit tangent vector at u."""
        d = self.eval_derivatives(u, 1)[1]
        return d / np.linalg.norm(d)

    def __repr__(self) -> str:
        return (f"NURBSCurve(degree={self.degree}, n={self.n_control_points}, "
                f"dim={self.n_dim_physical}, rational={self.is_rational})")


class NURBSSurface(NURBSGeometry):
    """
    B-spline or NURBS tensor-product surface.

    A surface S(u, v) is defined by:
    - Two knot vectors (u and v directions)
    - Control points P_{i,j} arranged in an (n_u, n_v) grid
    - Optional weights w_{i,j} > 0 (None means non-rational)

    The surface point is:
    S(u, v) = sum_{i,j} R_{i,j}(u, v) * P_{i,j}
    """

    def __init__(self,
                 knot_vector_u: KnotVector,
                 knot_vector_v: KnotVector,
                 control_points: np.ndarray,
                 weights: Optional[np.ndarray] = None):
        """
        Parameters:
            knot_vector_u: KnotVector for u direction
            knot_vector_v: KnotVector for v direction
            control_points: Grid of shape (n_u, n_v, d), or a flat
                (n_u * n_v, d) array with the v index running fastest
            weights: Array of shape (n_u, n_v) or (n_u * n_v,), or None

        Raises:
            InvalidRelationError: If either direction is inconsistent
            ValueError: For bad weights
        """
        n_u = knot_vector_u.n_basis
        n_v = knot_vector_v.n_basis

        control_points = as_float_array(control_points)
        if control_points.ndim == 2:
            if control_points.shape[0] != n_u * n_v:
                raise ValueError(
                    f"Number of control points ({control_points.shape[0]}) "
                    f"must equal n_u * n_v ({n_u * n_v})"
                )
            control_points = control_points.reshape(n_u, n_v, -1)

        if weights is not None:
            weights = as_float_array(weights)
            if weights.ndim == 1 and weights.size == n_u * n_v:
                weights = weights.reshape(n_u, n_v)

        check_surface(knot_vector_u.degree, knot_vector_v.degree,
                      knot_vector_u.knots, knot_vector_v.knots,
                      control_points, weights)

        self._kv_u = knot_vector_u
        self._kv_v = knot_vector_v
        self._control_points = control_points.copy()
        self._weights = None if weights is None else weights.copy()

        logger.debug("Created %s surface: degrees=%s, grid=%s, dim=%d",
                     "rational" if self.is_rational else "non-rational",
                     self.degrees, self.n_control_points_per_dir,
                     self.n_dim_physical)

    @property
    def n_dim_parametric(self) -> int:
        return 2

    @property
    def n_dim_physical(self) -> int:
        return self._control_points.shape[2]

    @property
    def n_control_points(self) -> int:
        n_u, n_v = self.n_control_points_per_dir
        return n_u * n_v

    @property
    def n_control_points_per_dir(self) -> Tuple[int, int]:
        """Number of control points in each direction (n_u, n_v)."""
        return self._control_points.shape[:2]

    @property
    def control_points(self) -> np.ndarray:
        """Control points as (n_u, n_v, d) grid."""
        return self._control_points.copy()

    @property
    def weights(self) -> Optional[np.ndarray]:
        """Weights as (n_u, n_v) grid, or None."""
        return None if self._weights is None else self._weights.copy()

    @property
    def knot_vectors(self) -> Tuple[KnotVector, KnotVector]:
        return (self._kv_u, self._kv_v)

    @property
    def degrees(self) -> Tuple[int, int]:
        return (self._kv_u.degree, self._kv_v.degree)

    @property
    def domain(self) -> Tuple[Tuple[float, float], Tuple[float, float]]:
        """Parametric domain as ((u_min, u_max), (v_min, v_max))."""
        return (self._kv_u.domain, self._kv_v.domain)

    def _args(self):
        p_u, p_v = self.degrees
        return (p_u, p_v, self._kv_u.knots, self._kv_v.knots, self._control_points)

    def eval_point(self, xi: Tuple[float, float]) -> np.ndarray:
        """
        Evaluate surface at parameter values.

        Parameters:
            xi: Parameter values (u, v)

        Returns:
            Point coordinates as (d,) array
        """
        u, v = xi
        _check_parameter(self._kv_u, u, "u")
        _check_parameter(self._kv_v, v, "v")

        if self._weights is None:
            return surface_point(u, v, *self._args())
        return rational_surface_point(u, v, *self._args(), self._weights)

    def eval_derivatives(self, xi: Tuple[float, float],
                         n_ders: int = 1) -> np.ndarray:
        """
        Evaluate surface point and mixed partial derivatives.

        Parameters:
            xi: Parameter values (u, v)
            n_ders: Highest total derivative order

        Returns:
            Array of shape (n_ders+1, n_ders+1, d) where [k, l] is
            d^{k+l} S / du^k dv^l (zero for k + l > n_ders)
        """
        u, v = xi
        _check_parameter(self._kv_u, u, "u")
        _check_parameter(self._kv_v, v, "v")

        if self._weights is None:
            return surface_derivatives(u, v, *self._args(), n_ders)
        return rational_surface_derivatives(u, v, *self._args(), self._weights,
                                            n_ders)

    def normal(self, xi: Tuple[float, float]) -> np.ndarray:
        """Unit normal at (u, v). Only defined for surfaces in 3D."""
        if self.n_dim_physical != 3:
            raise ValueError("Surface normals require 3D control points")
        ders = self.eval_derivatives(xi, 1)
        n = np.cross(ders[1, 0], ders[0, 1])
        return n / np.linalg.norm(n)

    def __repr__(self) -> str:
        return (f"NURBSSurface(degrees={self.degrees}, "
                f"grid={self.n_control_points_per_dir}, "
                f"dim={self.n_dim_physical}, rational={self.is_rational})")


def BSplineCurve(knot_vector: KnotVector, control_points: np.ndarray) -> NURBSCurve:
    """Create a non-rational curve."""
    return NURBSCurve(knot_vector, control_points)


def BSplineSurface(knot_vector_u: KnotVector, knot_vector_v: KnotVector,
                   control_points: np.ndarray) -> NURBSSurface:
    """Create a non-rational surface."""
    return NURBSSurface(knot_vector_u, knot_vector_v, control_points)
