"""
Visualization utilities (requires matplotlib).

Usage:
    from nurbsEval.visualization import plot_curve

    ax = plot_curve(curve, save_path="curve.png")
"""

from .plot import plot_curve, plot_surface

__all__ = [
    'plot_curve',
    'plot_surface',
]
