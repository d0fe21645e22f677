"""
Linear Kalman Filter for angle tracking.

Tracks the state x = [theta, thetad] (angle and angular rate) under a
constant-rate motion model from scalar, possibly intermittent, angle
measurements.

The covariance update uses the Joseph form so that P stays symmetric and
positive-semidefinite over long runs.
"""

import logging
import math

import numpy as np

from ..common.angles import angle_diff, wrap_to_pi
from ..common.validation import check_covariance, check_finite, check_non_negative
from ..config import DEFAULT_P0, DEFAULT_Q_THETA, DEFAULT_Q_THETAD, DEFAULT_R
from ..exceptions import InvalidArgument, NumericalError
from ..presentation import format_filter, snapshot

logger = logging.getLogger(__name__)

# Observation matrix: the sensor measures theta directly
H = np.array([1.0, 0.0])


def _symmetrize(P):
    off = 0.5 * (P[0, 1] + P[1, 0])
    P[0, 1] = off
    P[1, 0] = off
    return P


def _check_result(x, P):
    if not (np.all(np.isfinite(x)) and np.all(np.isfinite(P))):
        logger.warning("Non-finite result x=%r P=%r, step rejected", x.tolist(), P.tolist())
        raise NumericalError(P.tolist(), name='P', reason="result is not finite")


class KalmanFilter:
    """
    Kalman filter for a 2-state angle/angular-rate system.

    The filter is driven by the caller: ``predict(dt)`` once per elapsed
    interval and ``update(z)`` whenever an angle measurement arrives, in
    any order. Every operation either fully applies or raises and leaves
    the filter untouched.

    Instances are not thread-safe. A filter belongs to one control loop;
    callers sharing an instance across threads must serialize calls
    (one lock per instance) or use one filter per thread.

    Attributes
    ----------
    theta : float
        Angle estimate
    thetad : float
        Angular rate estimate
    Q_theta, Q_thetad : float
        Process noise variances, diagonal of Q
    R : float
        Measurement noise variance
    P : np.ndarray
        Copy of the 2x2 state covariance

    Examples
    --------
    >>> kf = KalmanFilter(theta0=0.0, thetad0=0.0, Q_theta=1e-4,
    ...                   Q_thetad=1e-3, R=0.1, P0=np.eye(2))
    >>> kf.predict(0.01)
    >>> kf.update(0.02)
    >>> kf.theta  # doctest: +SKIP
    0.018...
    """

    def __init__(self, theta0=0.0, thetad0=0.0, Q_theta=DEFAULT_Q_THETA,
                 Q_thetad=DEFAULT_Q_THETAD, R=DEFAULT_R, P0=None,
                 scale_process_noise=False, wrap_angle=False):
        """
        Initialize the filter.

        Parameters
        ----------
        theta0 : float, optional
            Initial angle estimate (default: 0)
        thetad0 : float, optional
            Initial angular rate estimate (default: 0)
        Q_theta : float, optional
            Process noise variance of the angle (default: 1e-7)
        Q_thetad : float, optional
            Process noise variance of the rate (default: 1e-5)
        R : float, optional
            Measurement noise variance (default: 2.0)
        P0 : array-like, optional
            Initial 2x2 covariance (default: diag(10, 10))
        scale_process_noise : bool, optional
            If True, predict(dt) adds Q * dt instead of Q (default: False)
        wrap_angle : bool, optional
            If True, theta and the innovation are kept in [-pi, pi)

        Raises
        ------
        InvalidParameter
            On a negative or non-finite noise variance, non-finite initial
            state, or a P0 that is not symmetric positive-semidefinite
        """
        theta0 = check_finite('theta0', theta0)
        thetad0 = check_finite('thetad0', thetad0)

        self._Q_theta = check_non_negative('Q_theta', Q_theta)
        self._Q_thetad = check_non_negative('Q_thetad', Q_thetad)
        self._R = check_non_negative('R', R)

        if P0 is None:
            P0 = DEFAULT_P0
        self._P0 = check_covariance('P0', P0)

        self.scale_process_noise = bool(scale_process_noise)
        self.wrap_angle = bool(wrap_angle)

        if self.wrap_angle:
            theta0 = wrap_to_pi(theta0)

        self._x = np.array([theta0, thetad0])
        self._P = self._P0.copy()

        # Diagnostics of the last update
        self._y = 0.0
        self._S = 0.0
        self._K = np.zeros(2)

    @classmethod
    def from_config(cls, config):
        """
        Build a filter from a :class:`~angle_estimation.config.KalmanConfig`.
        """
        return cls(**config.to_dict())

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    @property
    def theta(self):
        return float(self._x[0])

    @property
    def thetad(self):
        return float(self._x[1])

    @property
    def x(self):
        """Copy of the state vector [theta, thetad]."""
        return self._x.copy()

    @property
    def P(self):
        """Copy of the 2x2 covariance matrix."""
        return self._P.copy()

    def covariance(self):
        """
        Covariance as a flat tuple.

        Returns
        -------
        tuple of float
            (p00, p01, p10, p11), with p01 == p10
        """
        P = self._P
        return (float(P[0, 0]), float(P[0, 1]), float(P[1, 0]), float(P[1, 1]))

    def __getitem__(self, index):
        i, j = index
        return float(self._P[i, j])

    @property
    def innovation(self):
        """Residual y = z - theta of the last update."""
        return self._y

    @property
    def innovation_covariance(self):
        """Innovation covariance S of the last update."""
        return self._S

    @property
    def gain(self):
        """Copy of the Kalman gain [K0, K1] of the last update."""
        return self._K.copy()

    # ------------------------------------------------------------------
    # Noise parameters
    # ------------------------------------------------------------------

    @property
    def Q_theta(self):
        return self._Q_theta

    @Q_theta.setter
    def Q_theta(self, value):
        self._Q_theta = check_non_negative('Q_theta', value)

    @property
    def Q_thetad(self):
        return self._Q_thetad

    @Q_thetad.setter
    def Q_thetad(self, value):
        self._Q_thetad = check_non_negative('Q_thetad', value)

    @property
    def R(self):
        return self._R

    @R.setter
    def R(self, value):
        self._R = check_non_negative('R', value)

    @property
    def Q(self):
        """Process noise covariance diag(Q_theta, Q_thetad)."""
        return np.diag([self._Q_theta, self._Q_thetad])

    # ------------------------------------------------------------------
    # Filter steps
    # ------------------------------------------------------------------

    def predict(self, dt):
        """
        Predict step.

        Propagates the state with F = [[1, dt], [0, 1]] and the covariance
        with P = F P F^T + Q. A zero time step leaves the filter unchanged.

        Parameters
        ----------
        dt : float
            Elapsed time since the previous predict, dt >= 0

        Raises
        ------
        InvalidArgument
            If dt is negative or not finite
        NumericalError
            If the propagated state or covariance overflows
        """
        dt = self._check_dt(dt)
        if dt == 0.0:
            return

        F = np.array([[1.0, dt],
                      [0.0, 1.0]])

        Q = self.Q
        if self.scale_process_noise:
            Q = Q * dt

        with np.errstate(over='ignore', invalid='ignore'):
            # Constant-rate kinematics, x = F x written out
            theta, thetad = self._x
            x = np.array([theta + thetad * dt, thetad])
            P = _symmetrize(F @ self._P @ F.T + Q)
        _check_result(x, P)

        if self.wrap_angle:
            x[0] = wrap_to_pi(x[0])

        self._x = x
        self._P = P

        logger.debug("predict dt=%g theta=%g thetad=%g p00=%g", dt, x[0], x[1], P[0, 0])

    def update(self, z):
        """
        Update step with an angle measurement.

        Parameters
        ----------
        z : float
            Measured angle

        Raises
        ------
        InvalidArgument
            If z is not a finite real number
        NumericalError
            If the innovation covariance S = P[0, 0] + R is not positive and
            finite, or the corrected state or covariance is not finite
        """
        try:
            z = float(z)
        except (TypeError, ValueError):
            raise InvalidArgument('z', z, "measurement must be a real number") from None
        if not math.isfinite(z):
            logger.warning("Rejected non-finite measurement z=%r", z)
            raise InvalidArgument('z', z, "measurement must be finite")

        # Innovation
        if self.wrap_angle:
            y = float(angle_diff(z, self._x[0]))
        else:
            y = z - self._x[0]

        # Innovation covariance (scalar: H P H^T + R)
        with np.errstate(over='ignore'):
            S = float(self._P[0, 0] + self._R)
        if not (S > 0.0 and math.isfinite(S)):
            logger.warning("Innovation covariance S=%r is not positive, update rejected", S)
            raise NumericalError(S)

        with np.errstate(over='ignore', invalid='ignore'):
            # Kalman gain
            K = self._P @ H / S

            # Update state
            x = self._x + K * y

            # Update covariance (Joseph form for numerical stability)
            I_KH = np.eye(2) - np.outer(K, H)
            P = _symmetrize(I_KH @ self._P @ I_KH.T + self._R * np.outer(K, K))
        _check_result(x, P)

        if self.wrap_angle:
            x[0] = wrap_to_pi(x[0])

        self._x = x
        self._P = P
        self._y = float(y)
        self._S = S
        self._K = K

        logger.debug("update z=%g y=%g S=%g theta=%g", z, y, S, x[0])

    def step(self, dt, z=None):
        """
        Predict by ``dt`` then, if a measurement is given, update with it.

        Parameters
        ----------
        dt : float
            Elapsed time, dt >= 0
        z : float or None, optional
            Angle measurement; None when no measurement arrived this cycle

        Returns
        -------
        float
            The new angle estimate
        """
        self.predict(dt)
        if z is not None:
            self.update(z)
        return self.theta

    # ------------------------------------------------------------------
    # Reinitialization
    # ------------------------------------------------------------------

    def set_covariance(self, P):
        """
        Replace the covariance matrix.

        Raises
        ------
        InvalidParameter
            If P is not a symmetric positive-semidefinite 2x2 matrix
        """
        self._P = check_covariance('P', P)

    def reset(self, theta0=0.0, thetad0=0.0, P0=None):
        """
        Reinitialize state and covariance, keeping the noise parameters.

        This is the recovery path after a :class:`NumericalError`.

        Parameters
        ----------
        theta0, thetad0 : float, optional
            New state estimate (default: 0, 0)
        P0 : array-like, optional
            New covariance (default: the covariance given at construction)
        """
        theta0 = check_finite('theta0', theta0)
        thetad0 = check_finite('thetad0', thetad0)
        P = self._P0.copy() if P0 is None else check_covariance('P0', P0)

        if self.wrap_angle:
            theta0 = wrap_to_pi(theta0)

        self._x = np.array([theta0, thetad0])
        self._P = P
        self._y = 0.0
        self._S = 0.0
        self._K = np.zeros(2)

        logger.debug("reset theta=%g thetad=%g", theta0, thetad0)

    def _check_dt(self, dt):
        try:
            dt = float(dt)
        except (TypeError, ValueError):
            raise InvalidArgument('dt', dt, "time step must be a real number") from None
        if not math.isfinite(dt):
            logger.warning("Rejected non-finite time step dt=%r", dt)
            raise InvalidArgument('dt', dt, "time step must be finite")
        if dt < 0.0:
            logger.warning("Rejected negative time step dt=%r", dt)
            raise InvalidArgument('dt', dt, "time step must be non-negative")
        return dt

    def __repr__(self):
        return format_filter(snapshot(self), type_name=type(self).__name__)
