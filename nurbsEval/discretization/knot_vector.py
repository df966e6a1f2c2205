"""
Knot vector utilities.

A knot vector is a non-decreasing sequence of real numbers that defines
the parametric domain and basis function support for B-splines/NURBS.

Mathematical background:
- Open (clamped) knot vectors have p+1 repeated knots at each end,
  which makes the curve interpolate its first and last control points
- The number of basis functions n = len(knots) - p - 1
- Knot spans are intervals [u_i, u_{i+1}]; only those with u_i < u_{i+1}
  have non-zero measure
"""

import numpy as np
from typing import List, Tuple
from dataclasses import dataclass


@dataclass
class KnotVector:
    """
    Represents a univariate knot vector.

    Attributes:
        knots: The knot values (non-decreasing sequence)
        degree: Polynomial degree p

    Properties computed:
        n_basis: Number of basis functions (= number of control points)
        n_spans: Number of non-zero measure knot spans
        domain: Valid parametric interval [u_p, u_n]
    """
    knots: np.ndarray
    degree: int

    def __post_init__(self):
        self.knots = np.asarray(self.knots, dtype=np.float64)
        self.degree = int(self.degree)
        self._validate()

    def _validate(self):
        """Validate knot vector properties."""
        if self.degree < 0:
            raise ValueError(f"Degree must be non-negative, got {self.degree}.")
        if self.knots.ndim != 1:
            raise ValueError("Knot vector must be one-dimensional.")
        if len(self.knots) < 2 * (self.degree + 1):
            raise ValueError(
                f"Knot vector too short for degree {self.degree}. "
                f"Need at least {2 * (self.degree + 1)} knots, got {len(self.knots)}."
            )
        if not np.all(np.diff(self.knots) >= 0):
            raise ValueError("Knot vector must be non-decreasing.")

    @property
    def n_basis(self) -> int:
        """Number of basis functions."""
        return len(self.knots) - self.degree - 1

    @property
    def unique_knots(self) -> np.ndarray:
        """Unique knot values (breakpoints)."""
        return np.unique(self.knots)

    @property
    def spans(self) -> List[Tuple[float, float]]:
        """Non-zero measure knot spans inside the domain."""
        a, b = self.domain
        breaks = self.unique_knots
        breaks = breaks[(breaks >= a) & (breaks <= b)]
        return [(breaks[i], breaks[i + 1]) for i in range(len(breaks) - 1)]

    @property
    def n_spans(self) -> int:
        return len(self.spans)

    @property
    def domain(self) -> Tuple[float, float]:
        """Parametric domain (u_p, u_n)."""
        return (float(self.knots[self.degree]), float(self.knots[self.n_basis]))

    @property
    def is_clamped(self) -> bool:
        """True if the first and last knots are repeated p+1 times."""
        p = self.degree
        return bool(np.all(self.knots[:p + 1] == self.knots[0]) and
                    np.all(self.knots[-(p + 1):] == self.knots[-1]))

    def contains(self, u: float, tol: float = 0.0) -> bool:
        """Check whether u lies inside the domain (with optional tolerance)."""
        a, b = self.domain
        return a - tol <= u <= b + tol

    def find_span(self, u: float) -> int:
        """
        Find the knot span index containing parameter value u.

        See nurbsEval.discretization.bspline.find_span for the convention used.
        """
        from .bspline import find_span
        return find_span(self.degree, self.knots, u)

    def multiplicity(self, u: float, tol: float = 1e-14) -> int:
        """Number of times u appears in the knot vector."""
        return int(np.sum(np.abs(self.knots - u) < tol))

    def greville_abscissae(self) -> np.ndarray:
        """
        Compute Greville abscissae (nodal parameters for basis functions).

        The i-th Greville abscissa is the average of p consecutive knots:
        u_i = (u_{i+1} + u_{i+2} + ... + u_{i+p}) / p

        For degree 0 the span midpoints are returned instead.

        Returns:
            Array of n Greville abscissae
        """
        p = self.degree
        n = self.n_basis

        if p == 0:
            return 0.5 * (self.knots[:n] + self.knots[1:n + 1])

        greville = np.zeros(n)
        for i in range(n):
            greville[i] = np.sum(self.knots[i + 1:i + p + 1]) / p

        return greville


def make_open_knot_vector(n_basis: int, degree: int,
                          domain: Tuple[float, float] = (0.0, 1.0)) -> KnotVector:
    """
    Create an open (clamped) uniform knot vector.

    Parameters:
        n_basis: Number of basis functions (control points) desired
        degree: Polynomial degree p
        domain: Parametric domain (start, end)

    Returns:
        KnotVector with uniform internal knots
    """
    p = degree
    n_knots = n_basis + p + 1
    n_internal = n_knots - 2 * (p + 1)

    if n_internal < 0:
        raise ValueError(
            f"Cannot create knot vector: n_basis={n_basis} too small for degree={degree}"
        )

    a, b = domain

    knots = [a] * (p + 1)
    if n_internal > 0:
        internal = np.linspace(a, b, n_internal + 2)[1:-1]
        knots.extend(internal)
    knots.extend([b] * (p + 1))

    return KnotVector(np.array(knots), degree)
