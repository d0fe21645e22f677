"""
Exceptions raised by the angle estimator.

Every error carries the offending name and value so the caller can
diagnose which input was rejected.
"""


class KalmanError(Exception):
    """Base class for all estimator errors."""


class InvalidParameter(KalmanError, ValueError):
    """
    A noise variance or covariance matrix violates its constraints.

    Raised at construction, on parameter mutation and on covariance reset.
    """

    def __init__(self, name, value, reason):
        self.name = name
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid parameter {name}={value!r}: {reason}")


class InvalidArgument(KalmanError, ValueError):
    """An operation argument (time step, measurement) is out of range."""

    def __init__(self, name, value, reason):
        self.name = name
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid argument {name}={value!r}: {reason}")


class NumericalError(KalmanError, ArithmeticError):
    """
    A computed quantity is not usable: the innovation covariance is not
    strictly positive, or a result overflowed to a non-finite value.

    The filter covariance is invalid or about to become so; reset or rebuild
    the filter.
    """

    def __init__(self, value, name='S', reason=None):
        self.name = name
        self.value = value
        if reason is None:
            reason = "innovation covariance is not positive"
        self.reason = reason
        super().__init__(
            f"Numerical error in {name}={value!r}: {reason}; "
            "the filter must be reset"
        )
