"""
Angle utilities for state estimation.

Functions for wrapping angles to [-pi, pi], and computing
angle differences correctly across the discontinuity.
"""

import numpy as np


def wrap_to_pi(angle):
    """
    Wrap angle to [-pi, pi) using modulo arithmetic.

    Exact for angles already inside the range, so a measurement inside
    it passes through unchanged.
    """
    angle = np.asarray(angle)
    wrapped = (angle + np.pi) % (2 * np.pi) - np.pi
    if wrapped.ndim == 0:
        return float(wrapped)
    return wrapped


def angle_diff(angle1, angle2):
    """
    Compute the smallest difference between two angles.

    Handles the discontinuity at ±pi correctly.

    Examples
    --------
    >>> round(abs(angle_diff(np.pi, -np.pi)), 12)
    0.0
    >>> round(angle_diff(0.1, -0.1), 12)
    0.2
    """
    return wrap_to_pi(np.asarray(angle1) - np.asarray(angle2))
