"""
Drive a filter over a recorded or simulated data set.

The loop mirrors an embedded sampling loop: one predict per elapsed
interval and one update per received measurement.
"""

import numpy as np
import pandas as pd

from .utils.logger import get_logger

logger = get_logger(__name__)


def run_filter(kf, data, log_every=0):
    """
    Run a filter over a data record.

    Parameters
    ----------
    kf : KalmanFilter
        Filter to drive. It is advanced in place.
    data : dict
        Record with 'time' (N,) and 'measurements' (N,) keys, NaN marking
        missing measurements, as produced by
        :func:`angle_estimation.simulation.generate_angle_data`
    log_every : int, optional
        Log progress every this many steps (0 disables)

    Returns
    -------
    dict
        Dictionary containing:
        - estimates: (N, 2) state estimates, row 0 is the initial state
        - covariances: (N, 2, 2) state covariances
        - innovations: (N,) innovation y, NaN where no update ran
        - innovation_covariances: (N,) innovation covariance S, NaN where no update ran
        - updated: (N,) bool mask of steps with an update
    """
    time = np.asarray(data['time'], dtype=float)
    measurements = np.asarray(data['measurements'], dtype=float)
    N = len(time)

    estimates = np.zeros((N, 2))
    covariances = np.zeros((N, 2, 2))
    innovations = np.full(N, np.nan)
    innovation_covariances = np.full(N, np.nan)
    updated = np.zeros(N, dtype=bool)

    estimates[0] = kf.x
    covariances[0] = kf.P

    for k in range(N - 1):
        kf.predict(time[k + 1] - time[k])

        z = measurements[k + 1]
        if not np.isnan(z):
            kf.update(z)
            innovations[k + 1] = kf.innovation
            innovation_covariances[k + 1] = kf.innovation_covariance
            updated[k + 1] = True

        estimates[k + 1] = kf.x
        covariances[k + 1] = kf.P

        if log_every and (k + 1) % log_every == 0:
            logger.info("Processed %d/%d steps", k + 1, N - 1)

    logger.debug("Filter run complete: %d steps, %d updates", N - 1, int(updated.sum()))

    return {
        'estimates': estimates,
        'covariances': covariances,
        'innovations': innovations,
        'innovation_covariances': innovation_covariances,
        'updated': updated,
    }


def history_to_frame(history, time):
    """
    Flatten a run history into a DataFrame for CSV export.

    Parameters
    ----------
    history : dict
        Output of :func:`run_filter`
    time : np.ndarray
        Time vector (N,)

    Returns
    -------
    pandas.DataFrame
        Columns: time, theta, thetad, p00, p01, p11, innovation, S, updated
    """
    estimates = history['estimates']
    covariances = history['covariances']

    return pd.DataFrame({
        'time': np.asarray(time, dtype=float),
        'theta': estimates[:, 0],
        'thetad': estimates[:, 1],
        'p00': covariances[:, 0, 0],
        'p01': covariances[:, 0, 1],
        'p11': covariances[:, 1, 1],
        'innovation': history['innovations'],
        'S': history['innovation_covariances'],
        'updated': history['updated'],
    })
