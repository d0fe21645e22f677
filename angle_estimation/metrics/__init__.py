"""
Performance metrics for state estimation evaluation.
"""

from .performance import rmse, mae, nees, nis, chi2_bounds, compute_all_metrics, print_metrics

__all__ = [
    'rmse',
    'mae',
    'nees',
    'nis',
    'chi2_bounds',
    'compute_all_metrics',
    'print_metrics',
]
