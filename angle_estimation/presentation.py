"""
Human-readable rendering of a filter's state.

The formatter works on a :class:`FilterSnapshot` built from the filter's
public read accessors only, so it does not depend on how the filter stores
its state internally.
"""

from typing import NamedTuple, Tuple


class FilterSnapshot(NamedTuple):
    """
    Read-only copy of an angle filter's public state.

    Attributes:
        theta: Angle estimate
        thetad: Angular rate estimate
        Q_theta: Process noise variance of the angle
        Q_thetad: Process noise variance of the rate
        R: Measurement noise variance
        P: Covariance as (p00, p01, p10, p11)
    """
    theta: float
    thetad: float
    Q_theta: float
    Q_thetad: float
    R: float
    P: Tuple[float, float, float, float]


def snapshot(kf) -> FilterSnapshot:
    """Copy the public state of ``kf`` through its read accessors."""
    return FilterSnapshot(
        theta=kf.theta,
        thetad=kf.thetad,
        Q_theta=kf.Q_theta,
        Q_thetad=kf.Q_thetad,
        R=kf.R,
        P=tuple(kf.covariance()),
    )


def format_matrix(P) -> str:
    """Render a flat (p00, p01, p10, p11) covariance as nested rows."""
    p00, p01, p10, p11 = P
    return f"[[{p00!r}, {p01!r}], [{p10!r}, {p11!r}]]"


def format_filter(snap: FilterSnapshot, type_name: str = "KalmanFilter") -> str:
    """
    Render a snapshot as a diagnostic string.

    Examples
    --------
    >>> snap = FilterSnapshot(0.0, 1.0, 1e-07, 1e-05, 2.0, (10.0, 0.0, 0.0, 10.0))
    >>> format_filter(snap)
    '<KalmanFilter theta=0.0 thetad=1.0 Q_theta=1e-07 Q_thetad=1e-05 R=2.0 P=[[10.0, 0.0], [0.0, 10.0]]>'
    """
    return (
        f"<{type_name} "
        f"theta={float(snap.theta)!r} "
        f"thetad={float(snap.thetad)!r} "
        f"Q_theta={float(snap.Q_theta)!r} "
        f"Q_thetad={float(snap.Q_thetad)!r} "
        f"R={float(snap.R)!r} "
        f"P={format_matrix(tuple(float(p) for p in snap.P))}>"
    )
