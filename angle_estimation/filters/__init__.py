"""
State estimation filters.

This module provides the linear Kalman filter for angle / angular-rate
tracking from scalar angle measurements.
"""

from .linear import KalmanFilter

__all__ = [
    'KalmanFilter',
]
