"""
Performance metrics for evaluating state estimation quality.

Includes RMSE, MAE, NEES, and NIS for filter evaluation, plus chi-square
acceptance bounds for the consistency tests.
"""

import numpy as np
from scipy.stats import chi2


def rmse(estimates, ground_truth, axis=0):
    """
    Root Mean Square Error.

    Parameters
    ----------
    estimates : np.ndarray
        Estimated states (N, dim) or (N,)
    ground_truth : np.ndarray
        True states (N, dim) or (N,)
    axis : int, optional
        Axis along which to compute RMSE

    Returns
    -------
    float or np.ndarray
        RMSE value(s)
    """
    estimates = np.asarray(estimates)
    ground_truth = np.asarray(ground_truth)

    squared_errors = (estimates - ground_truth) ** 2
    mean_squared_error = np.mean(squared_errors, axis=axis)

    return np.sqrt(mean_squared_error)


def mae(estimates, ground_truth, axis=0):
    """
    Mean Absolute Error.

    Parameters
    ----------
    estimates : np.ndarray
        Estimated states (N, dim) or (N,)
    ground_truth : np.ndarray
        True states (N, dim) or (N,)
    axis : int, optional
        Axis along which to compute MAE

    Returns
    -------
    float or np.ndarray
        MAE value(s)
    """
    estimates = np.asarray(estimates)
    ground_truth = np.asarray(ground_truth)

    absolute_errors = np.abs(estimates - ground_truth)

    return np.mean(absolute_errors, axis=axis)


def nees(estimates, ground_truth, covariances):
    """
    Normalized Estimation Error Squared (NEES).

    Measures consistency of the estimator. For a consistent filter,
    NEES follows a chi-squared distribution with dim_x degrees of freedom.

    Parameters
    ----------
    estimates : np.ndarray
        Estimated states (N, dim_x)
    ground_truth : np.ndarray
        True states (N, dim_x)
    covariances : np.ndarray
        Estimation error covariances (N, dim_x, dim_x)

    Returns
    -------
    np.ndarray
        NEES values for each time step (N,)
    """
    estimates = np.asarray(estimates, dtype=float)
    ground_truth = np.asarray(ground_truth, dtype=float)
    covariances = np.asarray(covariances, dtype=float)

    errors = estimates - ground_truth
    # Solve instead of inverting; P may be badly conditioned late in a run
    solved = np.linalg.solve(covariances, errors[..., np.newaxis])[..., 0]

    return np.einsum('ij,ij->i', errors, solved)


def nis(innovations, innovation_covariances):
    """
    Normalized Innovation Squared (NIS).

    Steps without an update (NaN innovation) are dropped.

    Parameters
    ----------
    innovations : np.ndarray
        Scalar innovations (N,) or innovation vectors (N, dim_z)
    innovation_covariances : np.ndarray
        Matching variances (N,) or covariances (N, dim_z, dim_z)

    Returns
    -------
    np.ndarray
        NIS values for each updated step
    """
    y = np.asarray(innovations, dtype=float)
    S = np.asarray(innovation_covariances, dtype=float)

    if y.ndim == 1:
        mask = ~np.isnan(y)
        return y[mask] ** 2 / S[mask]

    mask = ~np.any(np.isnan(y), axis=1)
    y, S = y[mask], S[mask]
    solved = np.linalg.solve(S, y[..., np.newaxis])[..., 0]
    return np.einsum('ij,ij->i', y, solved)


def chi2_bounds(dof, confidence=0.95, n_runs=1):
    """
    Two-sided acceptance interval for an averaged NEES or NIS value.

    Parameters
    ----------
    dof : int
        Degrees of freedom of a single sample (dim_x for NEES, dim_z for NIS)
    confidence : float, optional
        Probability mass inside the interval
    n_runs : int, optional
        Number of samples averaged together

    Returns
    -------
    tuple of float
        (lower, upper) bounds
    """
    alpha = 1.0 - confidence
    lower = chi2.ppf(alpha / 2, dof * n_runs) / n_runs
    upper = chi2.ppf(1 - alpha / 2, dof * n_runs) / n_runs
    return float(lower), float(upper)


def compute_all_metrics(estimates, ground_truth, covariances=None,
                        innovations=None, innovation_covariances=None):
    """
    Compute all available metrics.

    Parameters
    ----------
    estimates : np.ndarray
        Estimated states (N, dim_x)
    ground_truth : np.ndarray
        True states (N, dim_x)
    covariances : np.ndarray, optional
        State covariances (N, dim_x, dim_x)
    innovations : np.ndarray, optional
        Innovations (N,) or (N, dim_z)
    innovation_covariances : np.ndarray, optional
        Innovation covariances matching ``innovations``

    Returns
    -------
    dict
        Dictionary with computed metrics
    """
    metrics = {}

    # Basic metrics (always available)
    metrics['rmse'] = rmse(estimates, ground_truth, axis=0)
    metrics['mae'] = mae(estimates, ground_truth, axis=0)
    metrics['rmse_total'] = float(np.mean(metrics['rmse']))
    metrics['mae_total'] = float(np.mean(metrics['mae']))

    # Consistency metrics (require covariances)
    if covariances is not None:
        nees_vals = nees(estimates, ground_truth, covariances)
        metrics['nees'] = nees_vals
        metrics['nees_mean'] = float(np.mean(nees_vals))
        metrics['nees_std'] = float(np.std(nees_vals))

    if innovations is not None and innovation_covariances is not None:
        nis_vals = nis(innovations, innovation_covariances)
        metrics['nis'] = nis_vals
        metrics['nis_mean'] = float(np.mean(nis_vals)) if len(nis_vals) else float('nan')
        metrics['nis_std'] = float(np.std(nis_vals)) if len(nis_vals) else float('nan')

    return metrics


def print_metrics(metrics, filter_name="Filter"):
    """
    Print metrics in a formatted way.

    Parameters
    ----------
    metrics : dict
        Dictionary of metrics from compute_all_metrics
    filter_name : str, optional
        Name of the filter for display
    """
    print(f"\n{filter_name} Performance Metrics")
    print("=" * 50)

    if 'rmse' in metrics:
        print(f"RMSE per dimension: {metrics['rmse']}")
    if 'rmse_total' in metrics:
        print(f"Total RMSE: {metrics['rmse_total']:.6f}")

    if 'mae' in metrics:
        print(f"MAE per dimension: {metrics['mae']}")
    if 'mae_total' in metrics:
        print(f"Total MAE: {metrics['mae_total']:.6f}")

    if 'nees_mean' in metrics:
        print(f"NEES (mean ± std): {metrics['nees_mean']:.2f} ± {metrics['nees_std']:.2f}")

    if 'nis_mean' in metrics:
        print(f"NIS (mean ± std): {metrics['nis_mean']:.2f} ± {metrics['nis_std']:.2f}")

    print("=" * 50)
