"""
Tests for synthetic data generation and the filter run loop.
"""

import numpy as np
import pytest

from angle_estimation import InvalidParameter, KalmanFilter
from angle_estimation.runner import history_to_frame, run_filter
from angle_estimation.simulation import generate_angle_data


@pytest.fixture
def data():
    return generate_angle_data(N=500, dt=0.01, thetad=0.5, measurement_noise_std=0.02,
                               process_noise_std=[0.0, 1e-3], dropout=0.4, seed=3)


class TestSimulation:

    def test_shapes_and_mask(self, data):
        assert data['time'].shape == (500,)
        assert data['measurements'].shape == (500,)
        assert data['ground_truth'].shape == (500, 2)
        assert data['available'][0]
        np.testing.assert_array_equal(np.isnan(data['measurements']), ~data['available'])

    def test_dropout_rate_is_plausible(self, data):
        assert 0.5 < data['available'].mean() < 0.7

    def test_seed_is_reproducible(self):
        a = generate_angle_data(N=50, seed=9, dropout=0.2)
        b = generate_angle_data(N=50, seed=9, dropout=0.2)
        np.testing.assert_array_equal(a['measurements'], b['measurements'])

    def test_noise_free_trajectory_is_linear(self):
        d = generate_angle_data(N=11, dt=0.1, thetad=2.0, theta0=1.0,
                                measurement_noise_std=0.0, seed=0)
        np.testing.assert_allclose(d['ground_truth'][:, 0], 1.0 + 2.0 * d['time'])
        np.testing.assert_allclose(d['ground_truth'][:, 1], 2.0)
        np.testing.assert_allclose(d['measurements'], d['ground_truth'][:, 0])

    @pytest.mark.parametrize("kwargs", [
        {'N': 0},
        {'dt': 0.0},
        {'dropout': 1.0},
        {'measurement_noise_std': -0.1},
    ])
    def test_invalid_arguments(self, kwargs):
        with pytest.raises(InvalidParameter):
            generate_angle_data(**kwargs)


class TestRunner:

    def test_history_shapes_and_update_mask(self, data):
        kf = KalmanFilter(Q_theta=1e-8, Q_thetad=1e-6, R=0.02 ** 2, P0=np.eye(2))
        history = run_filter(kf, data)

        assert history['estimates'].shape == (500, 2)
        assert history['covariances'].shape == (500, 2, 2)
        np.testing.assert_array_equal(history['updated'][1:], data['available'][1:])
        assert not history['updated'][0]
        np.testing.assert_array_equal(np.isnan(history['innovations']), ~history['updated'])

    def test_first_row_is_initial_state_and_last_row_is_final(self, data):
        kf = KalmanFilter(theta0=0.1, P0=np.eye(2))
        history = run_filter(kf, data)
        np.testing.assert_array_equal(history['estimates'][0], [0.1, 0.0])
        np.testing.assert_array_equal(history['covariances'][0], np.eye(2))
        np.testing.assert_array_equal(history['estimates'][-1], kf.x)
        np.testing.assert_array_equal(history['covariances'][-1], kf.P)

    def test_covariances_stay_symmetric(self, data):
        history = run_filter(KalmanFilter(R=0.02 ** 2, P0=np.eye(2)), data)
        P = history['covariances']
        np.testing.assert_array_equal(P[:, 0, 1], P[:, 1, 0])
        assert np.all(P[:, 0, 0] >= 0)

    def test_estimate_follows_truth(self, data):
        kf = KalmanFilter(Q_theta=1e-8, Q_thetad=1e-6, R=0.02 ** 2, P0=np.eye(2))
        history = run_filter(kf, data)
        error = history['estimates'][-100:, 0] - data['ground_truth'][-100:, 0]
        assert np.sqrt(np.mean(error ** 2)) < 0.05

    def test_progress_logging(self, data, caplog):
        with caplog.at_level("INFO", logger="angle_estimation.runner"):
            run_filter(KalmanFilter(), data, log_every=100)
        assert "Processed 100/499 steps" in caplog.text

    def test_history_to_frame(self, data):
        history = run_filter(KalmanFilter(P0=np.eye(2)), data)
        frame = history_to_frame(history, data['time'])
        assert list(frame.columns) == ['time', 'theta', 'thetad', 'p00', 'p01', 'p11',
                                       'innovation', 'S', 'updated']
        assert len(frame) == 500
        assert frame['updated'].sum() == history['updated'].sum()
