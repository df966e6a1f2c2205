"""
Matplotlib plots of sampled curves and surfaces.

matplotlib is imported inside each function, so the rest of the
package works without it.
"""

from typing import TYPE_CHECKING, Optional

from ..postprocess.sampling import sample_curve, sample_surface

if TYPE_CHECKING:
    from ..geometry.nurbs import NURBSCurve, NURBSSurface


def plot_curve(curve: 'NURBSCurve', ax=None, n_samples: Optional[int] = None,
               show_control_polygon: bool = True,
               save_path: Optional[str] = None):
    """
    Plot a 2D or 3D curve.

    Parameters:
        curve: Curve to plot
        ax: Existing matplotlib Axes (created if None)
        n_samples: Number of samples along the curve
        show_control_polygon: Also draw the control polygon
        save_path: If provided, save figure to this path

    Returns:
        matplotlib Axes
    """
    import matplotlib.pyplot as plt

    dim = curve.n_dim_physical
    if dim not in (2, 3):
        raise ValueError(f"Can only plot 2D or 3D curves, got dimension {dim}")

    if ax is None:
        fig = plt.figure()
        ax = fig.add_subplot(111, projection='3d' if dim == 3 else None)

    _, points = sample_curve(curve, n_samples)
    ax.plot(*points.T, '-', label='curve')

    if show_control_polygon:
        cp = curve.control_points
        ax.plot(*cp.T, 'o--', color='gray', label='control polygon')

    if dim == 2:
        ax.set_aspect('equal')
    ax.legend()

    if save_path:
        ax.figure.savefig(save_path, dpi=150, bbox_inches='tight')

    return ax


def plot_surface(surface: 'NURBSSurface', ax=None, n_samples: Optional[int] = None,
                 show_control_net: bool = False,
                 save_path: Optional[str] = None):
    """
    Plot a 3D surface as a wireframe.

    Returns:
        matplotlib Axes
    """
    import matplotlib.pyplot as plt

    if surface.n_dim_physical != 3:
        raise ValueError("Can only plot surfaces with 3D control points")

    if ax is None:
        fig = plt.figure()
        ax = fig.add_subplot(111, projection='3d')

    _, _, points = sample_surface(surface, n_samples)
    ax.plot_wireframe(points[..., 0], points[..., 1], points[..., 2],
                      linewidth=0.5)

    if show_control_net:
        cp = surface.control_points
        ax.plot_wireframe(cp[..., 0], cp[..., 1], cp[..., 2],
                          color='gray', linestyle='--')

    if save_path:
        ax.figure.savefig(save_path, dpi=150, bbox_inches='tight')

    return ax
