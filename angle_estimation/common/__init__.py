"""
Common utilities for state estimation.

Includes angle handling and parameter validation.
"""

from .angles import wrap_to_pi, angle_diff
from .validation import (check_finite, check_non_negative, check_covariance,
                         is_symmetric_psd, COVARIANCE_TOL)

__all__ = [
    'wrap_to_pi',
    'angle_diff',
    'check_finite',
    'check_non_negative',
    'check_covariance',
    'is_symmetric_psd',
    'COVARIANCE_TOL',
]
