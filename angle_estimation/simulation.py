"""
Synthetic data for angle tracking.

Generates a constant-rate angle trajectory perturbed by process noise and
a stream of noisy angle measurements with random dropouts, in the format
consumed by :func:`angle_estimation.runner.run_filter`.
"""

import numpy as np

from .exceptions import InvalidParameter


def generate_angle_data(N=1000, dt=0.01, thetad=0.5, theta0=0.0,
                        process_noise_std=None, measurement_noise_std=0.05,
                        dropout=0.0, seed=None):
    """
    Generate a synthetic angle trajectory and measurements.

    Parameters
    ----------
    N : int
        Number of timesteps
    dt : float
        Time step in seconds
    thetad : float
        Nominal angular rate (rad/s)
    theta0 : float
        Initial angle (rad)
    process_noise_std : array_like, optional
        Standard deviation of process noise [theta, thetad] added per step.
        If None, no process noise is added (perfect dynamics)
    measurement_noise_std : float
        Standard deviation of the angle sensor noise
    dropout : float
        Probability in [0, 1) that a sample has no measurement.
        The first sample is always measured.
    seed : int, optional
        Seed for numpy's random generator

    Returns
    -------
    dict
        Dictionary containing:
        - time: (N,) array of timestamps
        - measurements: (N,) noisy angles, NaN where no measurement arrived
        - available: (N,) bool mask of received measurements
        - ground_truth: (N, 2) array of true states [theta, thetad]
        - dt: float, time step
        - measurement_noise_std: noise std used
    """
    if N < 1:
        raise InvalidParameter('N', N, "need at least one sample")
    if dt <= 0:
        raise InvalidParameter('dt', dt, "time step must be positive")
    if not 0.0 <= dropout < 1.0:
        raise InvalidParameter('dropout', dropout, "must be in [0, 1)")
    if measurement_noise_std < 0:
        raise InvalidParameter('measurement_noise_std', measurement_noise_std,
                               "must be non-negative")

    rng = np.random.default_rng(seed)

    # Time vector
    time = np.arange(N) * dt

    # Simulate true dynamics
    x_true = np.zeros((N, 2))
    x_true[0] = [theta0, thetad]

    for k in range(N - 1):
        theta, rate = x_true[k]
        x_clean = np.array([theta + rate * dt, rate])

        if process_noise_std is not None:
            x_true[k + 1] = x_clean + rng.standard_normal(2) * np.asarray(process_noise_std)
        else:
            x_true[k + 1] = x_clean

    # Noisy, intermittent angle measurements
    available = rng.random(N) >= dropout
    available[0] = True

    measurements = x_true[:, 0] + rng.standard_normal(N) * measurement_noise_std
    measurements[~available] = np.nan

    return {
        'time': time,
        'measurements': measurements,
        'available': available,
        'ground_truth': x_true,
        'dt': dt,
        'measurement_noise_std': measurement_noise_std,
    }
