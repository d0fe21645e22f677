"""
Kalman Filter Example - Angle Tracking

This example demonstrates how to use the angle Kalman filter to track
an angle and its angular rate from noisy, intermittent angle measurements.

State: x = [theta, thetad]
Measurement: z = theta (+ noise), missing on dropped samples
"""

from pathlib import Path

import matplotlib.pyplot as plt

from angle_estimation import KalmanConfig, KalmanFilter
from angle_estimation.metrics import compute_all_metrics, nis, print_metrics
from angle_estimation.runner import history_to_frame, run_filter
from angle_estimation.simulation import generate_angle_data
from angle_estimation.utils import setup_logger
from angle_estimation.visualization import plot_estimates, plot_nis, plot_variances

# ============================================================================
# CONFIGURATION
# ============================================================================
N_POINTS = 2000  # Number of samples
DT = 0.01  # Time step in seconds
TRUE_RATE = 0.8  # True angular rate (rad/s)
MEASUREMENT_NOISE_STD = 0.05  # Angle sensor noise (rad)
PROCESS_NOISE_STD = [1e-4, 2e-3]  # [theta, thetad] per step
DROPOUT = 0.3  # Probability of a missing measurement
SEED = 42

FILTER_CONFIG = KalmanConfig(
    theta0=0.0,
    thetad0=0.0,
    Q_theta=PROCESS_NOISE_STD[0] ** 2,
    Q_thetad=PROCESS_NOISE_STD[1] ** 2,
    R=MEASUREMENT_NOISE_STD ** 2,
    P0=((1.0, 0.0), (0.0, 1.0)),
)

SHOW_PLOTS = False
RESULTS_PATH = Path(__file__).parent.parent / 'results' / 'angle_tracking'
# ============================================================================


def run_angle_example():
    """Run the Kalman filter on synthetic angle data."""
    logger = setup_logger(level="INFO")
    logger.info("Kalman Filter Example - Angle Tracking")

    data = generate_angle_data(
        N=N_POINTS, dt=DT, thetad=TRUE_RATE,
        process_noise_std=PROCESS_NOISE_STD,
        measurement_noise_std=MEASUREMENT_NOISE_STD,
        dropout=DROPOUT, seed=SEED,
    )
    logger.info("Generated %d samples, %d measurements",
                N_POINTS, int(data['available'].sum()))

    kf = KalmanFilter.from_config(FILTER_CONFIG)
    logger.info("Initial filter: %r", kf)

    history = run_filter(kf, data, log_every=500)
    logger.info("Final filter: %r", kf)

    metrics = compute_all_metrics(
        estimates=history['estimates'],
        ground_truth=data['ground_truth'],
        covariances=history['covariances'],
        innovations=history['innovations'],
        innovation_covariances=history['innovation_covariances'],
    )
    print_metrics(metrics, filter_name="KF")

    results_dir = RESULTS_PATH
    results_dir.mkdir(parents=True, exist_ok=True)

    frame = history_to_frame(history, data['time'])
    csv_path = results_dir / 'kf_history.csv'
    frame.to_csv(csv_path, index=False)
    logger.info("Saved: %s", csv_path)

    time = data['time']
    plot_estimates(time, history['estimates'], history['covariances'],
                   ground_truth=data['ground_truth'],
                   measurements=data['measurements'],
                   save_path=results_dir / 'kf_estimates.png', show=SHOW_PLOTS)
    plot_variances(time, history['covariances'],
                   save_path=results_dir / 'kf_covariance.png', show=SHOW_PLOTS)
    plot_nis(time[history['updated']],
             nis(history['innovations'], history['innovation_covariances']),
             save_path=results_dir / 'kf_nis.png', show=SHOW_PLOTS)
    plt.close('all')

    logger.info("Plots saved to %s", results_dir)
    return kf, history, metrics


if __name__ == "__main__":
    run_angle_example()
