"""
Exceptions raised by nurbsEval.

Structural problems are ValueError subclasses so callers that already
catch ValueError for bad input keep working.
"""


class NURBSEvalError(Exception):
    """Base class for nurbsEval errors."""


class InvalidRelationError(NURBSEvalError, ValueError):
    """
    Degree, knot count and control point count are inconsistent.

    Raised when num_knots != num_ctrl_pts + degree + 1.
    """

    def __init__(self, degree: int, num_knots: int, num_ctrl_pts: int,
                 direction: str = ""):
        self.degree = degree
        self.num_knots = num_knots
        self.num_ctrl_pts = num_ctrl_pts
        self.direction = direction
        where = f" in {direction}-direction" if direction else ""
        super().__init__(
            f"Invalid relation{where}: {num_knots} knots, {num_ctrl_pts} control "
            f"points and degree {degree} (expected {num_ctrl_pts + degree + 1} knots)"
        )
