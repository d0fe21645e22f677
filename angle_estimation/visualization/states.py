"""
State estimate visualization.

Plots the angle and angular rate estimates over time with their
uncertainty bands, and the covariance history.
"""

import numpy as np
import matplotlib.pyplot as plt

STATE_LABELS = [r'$\theta$ [rad]', r'$\dot{\theta}$ [rad/s]']


def plot_estimates(time, estimates, covariances=None, ground_truth=None,
                   measurements=None, n_std=3.0, title="Angle Estimates",
                   figsize=(12, 7), save_path=None, show=True):
    """
    Plot theta and thetad estimates over time.

    Parameters
    ----------
    time : np.ndarray
        Time vector (N,)
    estimates : np.ndarray
        State estimates (N, 2)
    covariances : np.ndarray, optional
        State covariances (N, 2, 2); drawn as ±n_std bands
    ground_truth : np.ndarray, optional
        True states (N, 2)
    measurements : np.ndarray, optional
        Angle measurements (N,), NaN where missing
    n_std : float, optional
        Width of the uncertainty band in standard deviations
    title : str, optional
        Main title for figure
    figsize : tuple, optional
        Figure size
    save_path : str, optional
        Path to save figure
    show : bool, optional
        Whether to display the plot

    Returns
    -------
    fig, axes
        Matplotlib figure and axes array
    """
    fig, axes = plt.subplots(2, 1, figsize=figsize, sharex=True)

    for i, ax in enumerate(axes):
        if i == 0 and measurements is not None:
            ax.plot(time, measurements, '.', color='gray', markersize=3,
                    label='Measurements', alpha=0.5)

        ax.plot(time, estimates[:, i], 'b-', linewidth=2, label='Estimate', alpha=0.8)

        if covariances is not None:
            sigma = np.sqrt(np.clip(covariances[:, i, i], 0.0, None))
            ax.fill_between(time,
                            estimates[:, i] - n_std * sigma,
                            estimates[:, i] + n_std * sigma,
                            color='lightblue', alpha=0.4,
                            label=f'±{n_std:g}σ')

        if ground_truth is not None:
            ax.plot(time, ground_truth[:, i], 'k--', linewidth=1.5,
                    label='Ground Truth', alpha=0.6)

        ax.set_ylabel(STATE_LABELS[i], fontsize=10)
        ax.grid(True, alpha=0.3)
        ax.legend(fontsize=8)

    axes[-1].set_xlabel('Time (s)', fontsize=10)
    fig.suptitle(title, fontsize=14)
    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=300, bbox_inches='tight')

    if show:
        plt.show()

    return fig, axes


def plot_variances(time, covariances, title="Covariance History",
                   figsize=(10, 5), save_path=None, show=True):
    """
    Plot the diagonal and off-diagonal of P over time.

    Variances are drawn on a log scale; the cross-covariance on a
    linear twin axis since it can be negative.
    """
    fig, ax = plt.subplots(figsize=figsize)

    ax.semilogy(time, covariances[:, 0, 0], 'b-', label=r'$P_{00}$')
    ax.semilogy(time, covariances[:, 1, 1], 'r-', label=r'$P_{11}$')
    ax.set_xlabel('Time (s)', fontsize=12)
    ax.set_ylabel('Variance', fontsize=12)
    ax.grid(True, alpha=0.3, which='both')

    ax2 = ax.twinx()
    ax2.plot(time, covariances[:, 0, 1], 'g--', label=r'$P_{01}$', alpha=0.7)
    ax2.set_ylabel('Cross-covariance', fontsize=12)

    lines = ax.get_lines() + ax2.get_lines()
    ax.legend(lines, [line.get_label() for line in lines], fontsize=10)
    ax.set_title(title, fontsize=14)

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=300, bbox_inches='tight')

    if show:
        plt.show()

    return fig, ax
