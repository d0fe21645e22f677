"""
Parameter validation for the angle estimator.

Checks for noise variances and 2x2 covariance matrices. All checks raise
InvalidParameter on failure and return the validated value on success.
"""

import math

import numpy as np

from ..exceptions import InvalidParameter

# Absolute tolerance for symmetry and semidefiniteness checks
COVARIANCE_TOL = 1e-9


def check_finite(name, value):
    """Return ``value`` as a float, rejecting NaN and infinities."""
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise InvalidParameter(name, value, "must be a real number") from None
    if not math.isfinite(value):
        raise InvalidParameter(name, value, "must be finite")
    return value


def check_non_negative(name, value):
    """
    Validate a noise variance.

    Parameters
    ----------
    name : str
        Parameter name used in the error message
    value : float
        Candidate variance

    Returns
    -------
    float
        The validated variance

    Raises
    ------
    InvalidParameter
        If the value is not finite or is negative
    """
    value = check_finite(name, value)
    if value < 0.0:
        raise InvalidParameter(name, value, "variance must be non-negative")
    return value


def is_symmetric_psd(P, tol=COVARIANCE_TOL):
    """
    Test whether a 2x2 matrix is symmetric positive-semidefinite.

    Both checks are relative to the magnitude of the entries, so small
    covariances are held to the same standard as large ones.

    Parameters
    ----------
    P : array-like
        2x2 matrix
    tol : float, optional
        Relative tolerance

    Returns
    -------
    bool
    """
    P = np.asarray(P, dtype=float)
    if P.shape != (2, 2) or not np.all(np.isfinite(P)):
        return False

    scale = float(np.max(np.abs(P)))
    if scale == 0.0:
        return True

    if abs(P[0, 1] - P[1, 0]) > tol * max(abs(P[0, 1]), abs(P[1, 0])):
        return False

    return float(np.linalg.eigvalsh(P).min()) >= -tol * scale


def check_covariance(name, P, tol=COVARIANCE_TOL):
    """
    Validate and symmetrize a 2x2 covariance matrix.

    Parameters
    ----------
    name : str
        Parameter name used in the error message
    P : array-like
        Candidate 2x2 covariance
    tol : float, optional
        Tolerance passed to :func:`is_symmetric_psd`

    Returns
    -------
    np.ndarray
        A new (2, 2) float array with exactly equal off-diagonal entries

    Raises
    ------
    InvalidParameter
        If P is not a finite, symmetric, positive-semidefinite 2x2 matrix
    """
    try:
        P = np.array(P, dtype=float)
    except (TypeError, ValueError):
        raise InvalidParameter(name, P, "must be a 2x2 real matrix") from None

    if P.shape != (2, 2):
        raise InvalidParameter(name, P.tolist(), f"must be 2x2, got shape {P.shape}")
    if not np.all(np.isfinite(P)):
        raise InvalidParameter(name, P.tolist(), "entries must be finite")
    if not is_symmetric_psd(P, tol=tol):
        raise InvalidParameter(name, P.tolist(), "must be symmetric positive-semidefinite")

    off = 0.5 * (P[0, 1] + P[1, 0])
    P[0, 1] = off
    P[1, 0] = off
    return P
