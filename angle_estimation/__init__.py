"""
Angle Estimation Library

A linear Kalman filter tracking an angle and its angular rate from noisy,
intermittent angle measurements, with simulation, evaluation metrics and
plotting helpers around it.

License: MIT
"""

__version__ = "1.0.0"

from .config import KalmanConfig
from .exceptions import KalmanError, InvalidParameter, InvalidArgument, NumericalError
from .filters.linear import KalmanFilter
from .presentation import FilterSnapshot, snapshot, format_filter

__all__ = [
    'KalmanFilter',
    'KalmanConfig',
    'KalmanError',
    'InvalidParameter',
    'InvalidArgument',
    'NumericalError',
    'FilterSnapshot',
    'snapshot',
    'format_filter',
]
