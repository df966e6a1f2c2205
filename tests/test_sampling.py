"""
Unit tests for uniform sampling of curves and surfaces.
"""

import pytest
import numpy as np
from numpy.testing import assert_allclose

from nurbsEval.config import settings
from nurbsEval.discretization.knot_vector import KnotVector
from nurbsEval.geometry.nurbs import BSplineSurface
from nurbsEval.geometry.primitives import (
    make_nurbs_line, make_nurbs_circle, make_nurbs_unit_square
)
from nurbsEval.postprocess.sampling import sample_curve, sample_surface


class TestSampleCurve:
    """Tests for sample_curve."""

    def test_line_points(self):
        curve = make_nurbs_line([0, 0], [2, 4], degree=2)

        params, points = sample_curve(curve, 5)

        assert_allclose(params, [0.0, 0.25, 0.5, 0.75, 1.0])
        assert points.shape == (5, 2)
        assert_allclose(points, np.outer(params, [2.0, 4.0]), atol=1e-12)

    def test_derivatives(self):
        curve = make_nurbs_line([0, 0], [2, 4], degree=2)

        _, values = sample_curve(curve, 4, n_ders=2)

        assert values.shape == (4, 3, 2)
        assert_allclose(values[:, 1], np.tile([2.0, 4.0], (4, 1)), atol=1e-12)
        assert_allclose(values[:, 2], 0.0, atol=1e-12)

    def test_circle_samples_on_circle(self):
        _, points = sample_curve(make_nurbs_circle(radius=3.0), 33)
        assert_allclose(np.linalg.norm(points, axis=1), 3.0)

    def test_default_samples(self):
        curve = make_nurbs_line([0, 0], [1, 0])

        params, _ = sample_curve(curve)
        assert len(params) == settings.default_samples

        settings.default_samples = 7
        params, _ = sample_curve(curve)
        assert len(params) == 7

    def test_too_few_samples(self):
        with pytest.raises(ValueError):
            sample_curve(make_nurbs_line([0, 0], [1, 0]), 1)


class TestSampleSurface:
    """Tests for sample_surface."""

    def test_unit_square_grid(self):
        surface = make_nurbs_unit_square(p=2, n_elem_u=3, n_elem_v=2)

        U, V, points = sample_surface(surface, 4, 6)

        assert U.shape == (4, 6)
        assert V.shape == (4, 6)
        assert points.shape == (4, 6, 2)
        # Identity mapping: sampled points equal their parameters
        assert_allclose(points[..., 0], U, atol=1e-12)
        assert_allclose(points[..., 1], V, atol=1e-12)

    def test_n_v_defaults_to_n_u(self):
        surface = make_nurbs_unit_square(p=1, n_elem_u=1, n_elem_v=1)
        U, _, _ = sample_surface(surface, 3)
        assert U.shape == (3, 3)

    def test_too_few_samples(self):
        surface = make_nurbs_unit_square(p=1, n_elem_u=1, n_elem_v=1)
        with pytest.raises(ValueError):
            sample_surface(surface, 5, 1)

    def test_float32_surface(self):
        """Sampling keeps the precision of the control points."""
        kv = KnotVector([0, 0, 1, 1], 1)
        grid = np.array([[[0, 0, 0], [0, 1, 0]],
                         [[1, 0, 0], [1, 1, 1]]], dtype=np.float32)

        _, _, points = sample_surface(BSplineSurface(kv, kv, grid), 3)

        assert points.dtype == np.float32
        assert_allclose(points[1, 1], [0.5, 0.5, 0.25], rtol=1e-6)
