"""
Unit tests for curve/surface handles and primitive geometries.
"""

import pytest
import numpy as np
from numpy.testing import assert_array_almost_equal, assert_allclose

from nurbsEval.config import settings
from nurbsEval.discretization.knot_vector import KnotVector, make_open_knot_vector
from nurbsEval.exceptions import InvalidRelationError
from nurbsEval.evaluate import rational_surface_derivatives
from nurbsEval.geometry.nurbs import (
    NURBSCurve, NURBSSurface, BSplineCurve, BSplineSurface
)
from nurbsEval.geometry.primitives import (
    make_nurbs_line, make_nurbs_circle, make_nurbs_arc,
    make_bilinear_patch, make_nurbs_unit_square, make_nurbs_cylinder_patch
)


class TestNURBSCurve:
    """Tests for curve handles."""

    def test_bspline_curve_endpoints(self):
        """Test that B-spline curve interpolates endpoints."""
        kv = make_open_knot_vector(n_basis=4, degree=2, domain=(0.0, 1.0))
        control_points = np.array([
            [0.0, 0.0],
            [0.5, 1.0],
            [1.0, 1.0],
            [1.5, 0.0]
        ])

        curve = BSplineCurve(kv, control_points)

        assert not curve.is_rational
        assert curve.weights is None
        assert_array_almost_equal(curve.eval_point(0.0), [0.0, 0.0])
        assert_array_almost_equal(curve.eval_point(1.0), [1.5, 0.0])

    def test_scenario_parabola(self):
        kv = KnotVector([0, 0, 0, 1, 1, 1], 2)
        P = [[0, 0], [1, 2], [2, 0]]

        curve = NURBSCurve(kv, P)
        rational = NURBSCurve(kv, P, weights=[1, 1, 1])

        assert rational.is_rational
        assert_array_almost_equal(curve.eval_point(0.5), [1.0, 1.0])
        assert_array_almost_equal(rational.eval_point(0.5), [1.0, 1.0])
        assert_array_almost_equal(curve.eval_derivatives(0.5, 2),
                                  rational.eval_derivatives(0.5, 2))

    def test_nurbs_curve_with_weights(self):
        """Higher weight at middle pushes curve toward middle control point."""
        kv = make_open_knot_vector(n_basis=3, degree=2, domain=(0.0, 1.0))
        control_points = np.array([
            [0.0, 0.0],
            [0.5, 0.5],
            [1.0, 0.0]
        ])
        curve = NURBSCurve(kv, control_points, np.array([1.0, 2.0, 1.0]))

        p = curve.eval_point(0.5)
        assert p[1] > 0.25  # B-spline would give 0.25 here

    def test_relation_mismatch(self):
        kv = KnotVector([0, 0, 0, 1, 1, 1], 2)
        with pytest.raises(InvalidRelationError):
            NURBSCurve(kv, np.zeros((4, 2)))

    def test_invalid_weights(self):
        kv = KnotVector([0, 0, 0, 1, 1, 1], 2)
        with pytest.raises(ValueError, match="positive"):
            NURBSCurve(kv, np.zeros((3, 2)), [1.0, 0.0, 1.0])

    def test_scalar_control_points(self):
        """1D control point arrays are treated as points in R^1."""
        curve = NURBSCurve(KnotVector([0, 0, 0, 1, 1, 1], 2), [0.0, 1.0, 4.0])
        assert curve.n_dim_physical == 1
        assert curve.eval_point(0.5)[0] == pytest.approx(1.5)

    def test_control_points_are_copies(self):
        P = np.array([[0.0, 0.0], [1.0, 2.0], [2.0, 0.0]])
        curve = NURBSCurve(KnotVector([0, 0, 0, 1, 1, 1], 2), P)

        P[1] = [100.0, 100.0]
        curve.control_points[1] = [100.0, 100.0]

        assert_array_almost_equal(curve.eval_point(0.5), [1.0, 1.0])

    def test_domain_check(self):
        curve = make_nurbs_line([0, 0], [1, 1])

        # Unchecked by default: the last span is extrapolated
        assert_array_almost_equal(curve.eval_point(1.5), [1.5, 1.5])

        settings.check_domain = True
        with pytest.raises(ValueError, match="outside domain"):
            curve.eval_point(1.5)
        with pytest.raises(ValueError, match="outside domain"):
            curve.eval_derivatives(-0.1)
        curve.eval_point(1.0)

    def test_repeated_end_knot(self):
        """An end knot repeated p+2 times still evaluates at the upper end."""
        kv = KnotVector([0, 0, 0, 1, 1, 1, 1], 2)
        P = np.array([[0.0, 0.0], [1.0, 2.0], [2.0, 0.0], [3.0, 3.0]])

        curve = NURBSCurve(kv, P)
        rational = NURBSCurve(kv, P, weights=[1.0, 2.0, 1.0, 1.0])

        assert_array_almost_equal(curve.eval_point(1.0), [2.0, 0.0])
        assert_array_almost_equal(rational.eval_point(1.0), [2.0, 0.0])
        assert np.all(np.isfinite(curve.eval_derivatives(1.0, 2)))

    def test_tangent(self):
        curve = make_nurbs_line([0, 0], [3, 4], degree=3)
        assert_allclose(curve.tangent(0.3), [0.6, 0.8])


class TestNURBSSurface:
    """Tests for surface handles."""

    def test_bilinear_corners(self):
        surface = make_bilinear_patch([0, 0, 0], [1, 0, 0], [0, 1, 0], [1, 1, 1])

        assert_array_almost_equal(surface.eval_point((0.0, 0.0)), [0, 0, 0])
        assert_array_almost_equal(surface.eval_point((1.0, 0.0)), [1, 0, 0])
        assert_array_almost_equal(surface.eval_point((0.0, 1.0)), [0, 1, 0])
        assert_array_almost_equal(surface.eval_point((1.0, 1.0)), [1, 1, 1])

    def test_flat_control_points(self):
        """Flat (n_u * n_v, d) input is reshaped with v running fastest."""
        kv = KnotVector([0, 0, 1, 1], 1)
        flat = np.array([[0, 0], [0, 1], [1, 0], [1, 1]], dtype=float)

        surface = NURBSSurface(kv, kv, flat, weights=np.ones(4))

        assert surface.n_control_points_per_dir == (2, 2)
        assert surface.weights.shape == (2, 2)
        assert_array_almost_equal(surface.eval_point((1.0, 0.0)), [1.0, 0.0])

    def test_flat_control_points_wrong_count(self):
        kv = KnotVector([0, 0, 1, 1], 1)
        with pytest.raises(ValueError):
            NURBSSurface(kv, kv, np.zeros((5, 2)))

    def test_relation_mismatch(self):
        kv_u = KnotVector([0, 0, 1, 1], 1)
        kv_v = KnotVector([0, 0, 0, 1, 1, 1], 2)
        with pytest.raises(InvalidRelationError):
            NURBSSurface(kv_u, kv_v, np.zeros((2, 2, 3)))

    def test_unit_square_identity_mapping(self):
        """Test that unit square maps identity: (u, v) -> (u, v)."""
        surface = make_nurbs_unit_square(p=2, n_elem_u=2, n_elem_v=3)

        for u in [0.0, 0.25, 0.5, 0.75, 1.0]:
            for v in [0.0, 0.3, 1.0]:
                assert_array_almost_equal(surface.eval_point((u, v)), [u, v])

    def test_unit_square_jacobian(self):
        surface = make_nurbs_unit_square(p=3, n_elem_u=2, n_elem_v=2)

        ders = surface.eval_derivatives((0.4, 0.7), n_ders=2)

        assert_array_almost_equal(ders[1, 0], [1.0, 0.0])
        assert_array_almost_equal(ders[0, 1], [0.0, 1.0])
        assert_array_almost_equal(ders[1, 1], [0.0, 0.0])

    def test_surface_properties(self):
        surface = make_nurbs_unit_square(p=2, n_elem_u=4, n_elem_v=3)

        assert surface.n_dim_parametric == 2
        assert surface.n_dim_physical == 2
        assert surface.degrees == (2, 2)
        assert surface.n_control_points_per_dir == (6, 5)
        assert surface.n_control_points == 30
        assert surface.domain == ((0.0, 1.0), (0.0, 1.0))
        assert not surface.is_rational

    def test_rational_dispatch(self):
        surface = make_nurbs_cylinder_patch(radius=2.0, height=3.0)
        kv_u, kv_v = surface.knot_vectors

        expected = rational_surface_derivatives(
            0.2, 0.6, kv_u.degree, kv_v.degree, kv_u.knots, kv_v.knots,
            surface.control_points, surface.weights, 2)

        assert_allclose(surface.eval_derivatives((0.2, 0.6), 2), expected)

    def test_bspline_surface_factory(self):
        kv = KnotVector([0, 0, 1, 1], 1)
        surface = BSplineSurface(kv, kv, np.zeros((2, 2, 3)))
        assert not surface.is_rational

    def test_normal(self):
        surface = make_nurbs_unit_square(p=2, n_elem_u=2, n_elem_v=2, physical_dim=3)
        assert_allclose(surface.normal((0.3, 0.6)), [0.0, 0.0, 1.0])

        with pytest.raises(ValueError):
            make_nurbs_unit_square(physical_dim=2).normal((0.5, 0.5))


class TestPrimitives:
    """Tests for primitive factories."""

    def test_line(self):
        curve = make_nurbs_line([1, 1, 0], [3, 5, 2], degree=2)
        assert_allclose(curve.eval_point(0.25), [1.5, 2.0, 0.5])

        with pytest.raises(ValueError):
            make_nurbs_line([0, 0], [1, 1], degree=0)

    def test_circle_radius(self):
        circle = make_nurbs_circle(radius=2.0, center=(1.0, -1.0))

        for u in np.linspace(0.0, 1.0, 41):
            point = circle.eval_point(u)
            assert np.linalg.norm(point - [1.0, -1.0]) == pytest.approx(2.0, abs=1e-12)

    def test_circle_quarter_points(self):
        circle = make_nurbs_circle()

        assert_allclose(circle.eval_point(0.25), [0.0, 1.0], atol=1e-12)
        assert_allclose(circle.eval_point(0.5), [-1.0, 0.0], atol=1e-12)
        assert_allclose(circle.eval_point(1.0), [1.0, 0.0], atol=1e-12)

    def test_circle_tangent(self):
        circle = make_nurbs_circle()
        for u in [0.1, 0.3, 0.6, 0.85]:
            C, dC = circle.eval_derivatives(u, 1)
            assert np.dot(C, dC) == pytest.approx(0.0, abs=1e-10)

    def test_arc(self):
        arc = make_nurbs_arc(radius=1.5, start_angle=np.pi / 6, end_angle=np.pi / 2)

        assert_allclose(arc.eval_point(0.0), 1.5 * np.array([np.cos(np.pi / 6), np.sin(np.pi / 6)]))
        assert_allclose(arc.eval_point(1.0), [0.0, 1.5], atol=1e-12)
        for u in [0.2, 0.5, 0.7]:
            assert np.linalg.norm(arc.eval_point(u)) == pytest.approx(1.5)

    def test_arc_sweep_limit(self):
        with pytest.raises(ValueError):
            make_nurbs_arc(start_angle=0.0, end_angle=np.pi)

    def test_cylinder_patch(self):
        surface = make_nurbs_cylinder_patch(radius=2.0, height=3.0)

        assert surface.is_rational
        assert surface.n_dim_physical == 3
        for u, v in [(0.0, 0.0), (0.4, 0.5), (1.0, 1.0)]:
            point = surface.eval_point((u, v))
            assert np.hypot(point[0], point[1]) == pytest.approx(2.0)
            assert point[2] == pytest.approx(3.0 * v)
