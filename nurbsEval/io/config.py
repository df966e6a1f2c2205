"""
Loading curve and surface definitions from JSON.

Example curve file:
    {
      "type": "curve",
      "degree": 2,
      "knots": [0, 0, 0, 1, 1, 1],
      "control_points": [[0, 0], [1, 2], [2, 0]],
      "weights": [1, 1, 1]
    }

Example surface file:
    {
      "type": "surface",
      "degrees": [1, 1],
      "knots_u": [0, 0, 1, 1],
      "knots_v": [0, 0, 1, 1],
      "control_points": [[[0, 0, 0], [0, 1, 0]], [[1, 0, 0], [1, 1, 1]]]
    }

"weights" is optional; without it the geometry is non-rational.
The description is validated when the handle is constructed.
"""

import json
import logging
from typing import Any, Dict, Union

from ..discretization.knot_vector import KnotVector
from ..geometry.nurbs import NURBSCurve, NURBSSurface

logger = logging.getLogger(__name__)


def _require(data: Dict[str, Any], key: str):
    if key not in data:
        raise ValueError(f"Geometry definition missing required key '{key}'")
    return data[key]


def geometry_from_dict(data: Dict[str, Any]) -> Union[NURBSCurve, NURBSSurface]:
    """
    Build a curve or surface handle from a dictionary.

    Parameters:
        data: Definition with keys as described in the module docstring

    Returns:
        NURBSCurve or NURBSSurface
    """
    kind = _require(data, "type")
    weights = data.get("weights")

    if kind == "curve":
        kv = KnotVector(_require(data, "knots"), _require(data, "degree"))
        return NURBSCurve(kv, _require(data, "control_points"), weights)

    if kind == "surface":
        degrees = _require(data, "degrees")
        if len(degrees) != 2:
            raise ValueError(f"Surface needs two degrees, got {degrees}")
        kv_u = KnotVector(_require(data, "knots_u"), degrees[0])
        kv_v = KnotVector(_require(data, "knots_v"), degrees[1])
        return NURBSSurface(kv_u, kv_v, _require(data, "control_points"), weights)

    raise ValueError(f"Unknown geometry type: {kind}")


def load_geometry(filename: str) -> Union[NURBSCurve, NURBSSurface]:
    """
    Load a curve or surface definition from a JSON file.

    Parameters:
        filename: Path to the JSON file

    Returns:
        NURBSCurve or NURBSSurface
    """
    with open(filename) as f:
        data = json.load(f)

    geometry = geometry_from_dict(data)
    logger.debug("Loaded %r from %s", geometry, filename)
    return geometry


def geometry_to_dict(geometry: Union[NURBSCurve, NURBSSurface]) -> Dict[str, Any]:
    """Inverse of geometry_from_dict."""
    if isinstance(geometry, NURBSCurve):
        data = {
            "type": "curve",
            "degree": geometry.degree,
            "knots": geometry.knots.tolist(),
        }
    else:
        kv_u, kv_v = geometry.knot_vectors
        data = {
            "type": "surface",
            "degrees": list(geometry.degrees),
            "knots_u": kv_u.knots.tolist(),
            "knots_v": kv_v.knots.tolist(),
        }

    data["control_points"] = geometry.control_points.tolist()
    if geometry.is_rational:
        data["weights"] = geometry.weights.tolist()
    return data


def save_geometry(geometry: Union[NURBSCurve, NURBSSurface], filename: str) -> None:
    """Write a curve or surface definition to a JSON file."""
    with open(filename, "w") as f:
        json.dump(geometry_to_dict(geometry), f, indent=2)
