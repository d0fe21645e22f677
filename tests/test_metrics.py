"""
Tests for estimation performance metrics.
"""

import numpy as np
import pytest

from angle_estimation.metrics import (chi2_bounds, compute_all_metrics, mae, nees,
                                      nis, print_metrics, rmse)


@pytest.fixture
def run():
    estimates = np.array([[1.0, 0.0], [2.0, 1.0], [3.0, 1.0]])
    truth = np.array([[1.0, 0.0], [1.0, 1.0], [4.0, 3.0]])
    covariances = np.stack([np.eye(2), np.diag([4.0, 1.0]), np.diag([1.0, 4.0])])
    return estimates, truth, covariances


def test_rmse_and_mae(run):
    estimates, truth, _ = run
    np.testing.assert_allclose(rmse(estimates, truth), [np.sqrt(2 / 3), np.sqrt(4 / 3)])
    np.testing.assert_allclose(mae(estimates, truth), [2 / 3, 2 / 3])


def test_nees(run):
    estimates, truth, covariances = run
    np.testing.assert_allclose(nees(estimates, truth, covariances), [0.0, 0.25, 2.0])


def test_nis_scalar_skips_missing_updates():
    y = np.array([np.nan, 1.0, -2.0, np.nan])
    S = np.array([np.nan, 2.0, 4.0, np.nan])
    np.testing.assert_allclose(nis(y, S), [0.5, 1.0])


def test_nis_vector():
    y = np.array([[1.0, 0.0], [1.0, 1.0]])
    S = np.stack([np.eye(2), 2 * np.eye(2)])
    np.testing.assert_allclose(nis(y, S), [1.0, 1.0])


def test_chi2_bounds():
    lower, upper = chi2_bounds(1, 0.95)
    assert lower == pytest.approx(0.000982, rel=1e-3)
    assert upper == pytest.approx(5.0239, rel=1e-3)

    lower_avg, upper_avg = chi2_bounds(1, 0.95, n_runs=100)
    assert lower < lower_avg < 1.0 < upper_avg < upper


def test_compute_all_metrics(run, capsys):
    estimates, truth, covariances = run
    metrics = compute_all_metrics(estimates, truth, covariances,
                                  innovations=np.array([np.nan, 1.0, 1.0]),
                                  innovation_covariances=np.array([np.nan, 1.0, 4.0]))
    assert metrics['nees_mean'] == pytest.approx(0.75)
    assert metrics['nis_mean'] == pytest.approx(0.625)
    assert metrics['rmse_total'] == pytest.approx(np.mean(metrics['rmse']))

    print_metrics(metrics, filter_name="KF")
    out = capsys.readouterr().out
    assert "KF Performance Metrics" in out
    assert "NEES" in out and "NIS" in out


def test_compute_all_metrics_without_covariances(run):
    estimates, truth, _ = run
    metrics = compute_all_metrics(estimates, truth)
    assert 'nees' not in metrics
    assert 'nis' not in metrics
