"""
Filter configuration.

Holds the construction parameters of :class:`~angle_estimation.KalmanFilter`
together with their documented defaults. The defaults describe a
gyro-style angle tracker: a confident motion model (tiny process noise),
a noisy angle sensor (R = 2) and a broad initial uncertainty.
"""

from dataclasses import dataclass, asdict, fields

from .exceptions import InvalidParameter

DEFAULT_Q_THETA = 1e-7
DEFAULT_Q_THETAD = 1e-5
DEFAULT_R = 2.0
DEFAULT_P0 = ((10.0, 0.0), (0.0, 10.0))


@dataclass
class KalmanConfig:
    """
    Construction parameters for the angle Kalman filter.

    Attributes:
        theta0: Initial angle estimate
        thetad0: Initial angular rate estimate
        Q_theta: Process noise variance of the angle
        Q_thetad: Process noise variance of the angular rate
        R: Measurement noise variance of the angle sensor
        P0: Initial 2x2 covariance, row-major nested tuple
        scale_process_noise: Add Q * dt instead of Q on every predict
        wrap_angle: Keep theta and the innovation in [-pi, pi)
    """
    theta0: float = 0.0
    thetad0: float = 0.0
    Q_theta: float = DEFAULT_Q_THETA
    Q_thetad: float = DEFAULT_Q_THETAD
    R: float = DEFAULT_R
    P0: tuple = DEFAULT_P0
    scale_process_noise: bool = False
    wrap_angle: bool = False

    @classmethod
    def from_dict(cls, values):
        """Build a config from a mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        for key in values:
            if key not in known:
                raise InvalidParameter(key, values[key], "unknown configuration key")
        data = dict(values)
        if 'P0' in data and data['P0'] is not None:
            data['P0'] = tuple(tuple(float(v) for v in row) for row in data['P0'])
        return cls(**data)

    def to_dict(self):
        return asdict(self)
