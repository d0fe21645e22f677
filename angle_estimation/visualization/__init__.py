"""
Visualization utilities for state estimation.
"""

from .states import plot_estimates, plot_variances
from .covariances import plot_covariance_ellipse, plot_nis

__all__ = [
    'plot_estimates',
    'plot_variances',
    'plot_covariance_ellipse',
    'plot_nis',
]
