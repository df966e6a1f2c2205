"""
B-spline basis function evaluation.

B-splines are piecewise polynomial functions defined by:
1. A knot vector (non-decreasing sequence of parametric values)
2. A polynomial degree p

The i-th B-spline basis function of degree p is defined recursively:

    N_{i,0}(u) = 1 if u_i <= u < u_{i+1}, else 0

    N_{i,p}(u) = (u - u_i)/(u_{i+p} - u_i) * N_{i,p-1}(u)
               + (u_{i+p+1} - u)/(u_{i+p+1} - u_{i+1}) * N_{i+1,p-1}(u)

Properties:
- Partition of unity: sum of all basis functions = 1
- Non-negativity: N_{i,p}(u) >= 0
- Local support: N_{i,p} is non-zero only on [u_i, u_{i+p+1})

Only the p+1 functions that are non-zero on the span containing u are
ever computed. The evaluators in nurbsEval.evaluate combine them with
the control points P_{span-p}, ..., P_{span}.
"""

import numpy as np
from typing import Sequence


def find_span(degree: int, knots: Sequence[float], u: float) -> int:
    """
    Find the knot span index containing parameter value u.

    For u in [u_i, u_{i+1}), returns i. The last non-empty span is
    treated as closed so that u at the upper end of the domain maps to
    it. Values outside the domain get the first/last non-empty span.

    Parameters:
        degree: Polynomial degree p
        knots: Knot vector
        u: Parameter value

    Returns:
        Span index i such that u in [u_i, u_{i+1})
    """
    p = degree
    n = len(knots) - p - 1

    if u >= knots[n]:
        # Skip zero-length spans at the end (end knot repeated > p+1 times)
        span = n - 1
        while span > p and knots[span] >= knots[span + 1]:
            span -= 1
        return span
    if u <= knots[p]:
        # Skip zero-length spans at the start
        span = p
        while span < n - 1 and knots[span + 1] <= u:
            span += 1
        return span

    low = p
    high = n
    mid = (low + high) // 2

    while u < knots[mid] or u >= knots[mid + 1]:
        if u < knots[mid]:
            high = mid
        else:
            low = mid
        mid = (low + high) // 2

    return mid


def eval_basis_1d(degree: int, span: int, knots: Sequence[float],
                  u: float) -> np.ndarray:
    """
    Evaluate all non-zero B-spline basis functions at a parameter value.

    Cox-de Boor triangle (Piegl & Tiller, Algorithm A2.2).

    Returns:
        Array of shape (p+1,) containing N_{span-p,p}(u) to N_{span,p}(u)
    """
    p = degree

    N = np.zeros(p + 1)
    N[0] = 1.0

    left = np.zeros(p + 1)
    right = np.zeros(p + 1)

    for j in range(1, p + 1):
        left[j] = u - knots[span + 1 - j]
        right[j] = knots[span + j] - u

        saved = 0.0
        for r in range(j):
            temp = N[r] / (right[r + 1] + left[j - r])
            N[r] = saved + right[r + 1] * temp
            saved = left[j - r] * temp
        N[j] = saved

    return N


def eval_basis_ders_1d(degree: int, span: int, knots: Sequence[float],
                       u: float, n_ders: int) -> np.ndarray:
    """
    Evaluate B-spline basis functions and derivatives at a parameter value.

    Uses the algorithm from Piegl & Tiller "The NURBS Book" (Algorithm A2.3).

    Parameters:
        degree: Polynomial degree p
        span: Knot span index (from find_span)
        knots: Knot vector
        u: Parameter value
        n_ders: Highest derivative order (0 = just values)

    Returns:
        Array of shape (n_ders+1, p+1) where result[k, j] is the k-th
        derivative of N_{span-p+j, p}. Rows k > p are zero.
    """
    p = degree

    ders = np.zeros((n_ders + 1, p + 1))
    # Derivatives above the degree vanish
    n = min(n_ders, p)

    # ndu[j][r]: basis functions (lower triangle), knot differences (upper)
    ndu = np.zeros((p + 1, p + 1))
    ndu[0, 0] = 1.0

    left = np.zeros(p + 1)
    right = np.zeros(p + 1)

    for j in range(1, p + 1):
        left[j] = u - knots[span + 1 - j]
        right[j] = knots[span + j] - u

        saved = 0.0
        for r in range(j):
            ndu[j, r] = right[r + 1] + left[j - r]
            temp = ndu[r, j - 1] / ndu[j, r]

            ndu[r, j] = saved + right[r + 1] * temp
            saved = left[j - r] * temp

        ndu[j, j] = saved

    for j in range(p + 1):
        ders[0, j] = ndu[j, p]

    a = np.zeros((2, p + 1))

    for r in range(p + 1):
        s1, s2 = 0, 1
        a[0, 0] = 1.0

        for k in range(1, n + 1):
            d = 0.0
            rk = r - k
            pk = p - k

            if r >= k:
                a[s2, 0] = a[s1, 0] / ndu[pk + 1, rk]
                d = a[s2, 0] * ndu[rk, pk]

            j1 = 1 if rk >= -1 else -rk
            j2 = k - 1 if r - 1 <= pk else p - r

            for j in range(j1, j2 + 1):
                a[s2, j] = (a[s1, j] - a[s1, j - 1]) / ndu[pk + 1, rk + j]
                d += a[s2, j] * ndu[rk + j, pk]

            if r <= pk:
                a[s2, k] = -a[s1, k - 1] / ndu[pk + 1, r]
                d += a[s2, k] * ndu[r, pk]

            ders[k, r] = d
            s1, s2 = s2, s1

    # Multiply by p! / (p-k)!
    r = p
    for k in range(1, n + 1):
        ders[k, :] *= r
        r *= (p - k)

    return ders
