"""
Pytest configuration and shared fixtures for nurbsEval tests.
"""

import pytest
import numpy as np
import sys
from pathlib import Path

# Add the parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from nurbsEval.config import reset_settings
from nurbsEval.discretization.knot_vector import make_open_knot_vector


@pytest.fixture(autouse=True)
def default_settings():
    """Every test starts and ends with default settings."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def tolerance():
    """Default tolerance for floating point comparisons."""
    return 1e-12


@pytest.fixture
def fd_tolerance():
    """Tolerance for comparisons against central finite differences."""
    return 1e-6


@pytest.fixture
def parabola():
    """Degree-2 Bezier arch with control points (0,0), (1,2), (2,0)."""
    knots = np.array([0.0, 0.0, 0.0, 1.0, 1.0, 1.0])
    control_points = np.array([[0.0, 0.0], [1.0, 2.0], [2.0, 0.0]])
    return 2, knots, control_points


@pytest.fixture
def cubic_curve():
    """Cubic curve in 3D with interior knots."""
    rng = np.random.default_rng(0)
    kv = make_open_knot_vector(n_basis=7, degree=3)
    control_points = rng.uniform(-2.0, 2.0, size=(7, 3))
    weights = rng.uniform(0.5, 2.0, size=7)
    return kv.degree, kv.knots, control_points, weights


@pytest.fixture
def patch():
    """Bidegree-(2, 3) patch in 3D with a 5x5 control grid."""
    rng = np.random.default_rng(1)
    kv_u = make_open_knot_vector(n_basis=5, degree=2)
    kv_v = make_open_knot_vector(n_basis=5, degree=3)
    control_points = rng.uniform(-1.0, 1.0, size=(5, 5, 3))
    weights = rng.uniform(0.5, 2.0, size=(5, 5))
    return (kv_u.degree, kv_v.degree, kv_u.knots, kv_v.knots,
            control_points, weights)
