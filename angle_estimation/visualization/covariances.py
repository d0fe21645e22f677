"""
Covariance and uncertainty visualization.

Functions for plotting uncertainty ellipses and consistency tests.
"""

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.patches import Ellipse

from ..metrics.performance import chi2_bounds


def plot_covariance_ellipse(mean, cov, n_std=3.0, ax=None, **kwargs):
    """
    Plot covariance ellipse for a 2D distribution.

    For the angle filter this is the joint (theta, thetad) uncertainty.

    Parameters
    ----------
    mean : array-like
        Mean of distribution [theta, thetad]
    cov : np.ndarray
        2x2 covariance matrix
    n_std : float, optional
        Number of standard deviations for ellipse (default: 3-sigma)
    ax : matplotlib.axes.Axes, optional
        Axes to plot on. If None, uses the current axes.
    **kwargs : dict
        Additional arguments passed to Ellipse patch

    Returns
    -------
    matplotlib.patches.Ellipse
        The ellipse patch object
    """
    if ax is None:
        ax = plt.gca()

    mean = np.asarray(mean)
    cov = np.asarray(cov)

    eigenvalues, eigenvectors = np.linalg.eigh(cov)
    eigenvalues = np.clip(eigenvalues, 0.0, None)

    # Angle of ellipse (first eigenvector)
    angle = np.degrees(np.arctan2(eigenvectors[1, 0], eigenvectors[0, 0]))

    width, height = 2 * n_std * np.sqrt(eigenvalues)

    ellipse = Ellipse(xy=mean, width=width, height=height, angle=angle, **kwargs)
    ax.add_patch(ellipse)

    return ellipse


def plot_nis(time, nis_values, dim_z=1, confidence=0.95,
             title="NIS Consistency Test", figsize=(12, 5),
             save_path=None, show=True):
    """
    Plot Normalized Innovation Squared with chi-square bounds.

    Parameters
    ----------
    time : np.ndarray
        Time of each NIS sample
    nis_values : np.ndarray
        NIS values
    dim_z : int, optional
        Measurement dimension
    confidence : float, optional
        Confidence level of the per-sample bounds

    Returns
    -------
    fig, ax
        Matplotlib figure and axes
    """
    fig, ax = plt.subplots(figsize=figsize)

    lower, upper = chi2_bounds(dim_z, confidence)
    inside = np.mean((nis_values >= lower) & (nis_values <= upper)) * 100 if len(nis_values) else 0.0

    ax.plot(time, nis_values, 'b.', markersize=3, label='NIS')
    ax.axhline(dim_z, color='k', linestyle='--', label=f'Expected ({dim_z})')
    ax.axhline(upper, color='r', linestyle=':', label=f'{confidence:.0%} bounds')
    ax.axhline(lower, color='r', linestyle=':')

    ax.set_xlabel('Time (s)', fontsize=12)
    ax.set_ylabel('NIS', fontsize=12)
    ax.set_title(f"{title} ({inside:.1f}% inside)", fontsize=14)
    ax.legend(fontsize=10)
    ax.grid(True, alpha=0.3)

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=300, bbox_inches='tight')

    if show:
        plt.show()

    return fig, ax
