"""Calculate the signal magnitude area of the acceleration."""

import numpy as np
from scipy import integrate

from icumotion.core import computations, config, models

logger = config.get_logger()


def signal_magnitude_area(
    acceleration: models.MaskedMeasurement,
    sampling_rate: float = 10.0,
    window_length: float = 5.0,
) -> models.WindowedSMA:
    """Compute the signal magnitude area (SMA) of disjoint windows.

    The acceleration is split in consecutive windows of round(window_length *
    sampling_rate) samples, a trailing partial window is discarded. For each window,
    the sum of the absolute values of the three axes is integrated over the sample
    times with the trapezoidal rule and divided by window_length. Since the
    integration runs from the first to the last sample of a window, a constant
    magnitude c yields c * (N - 1) / N for windows of N samples.

    A window that contains any masked sample is invalid, its SMA is NaN.

    Args:
        acceleration: The filtered and masked three-dimensional acceleration.
        sampling_rate: Sampling rate of the acceleration in Hz.
        window_length: Length of a window in seconds.

    Returns:
        The SMA per window, timestamped with the first sample of each window, and
        the validity of each window.

    References:
        Bouten, C. V., et al. A triaxial accelerometer and portable data processing
            unit for the assessment of daily physical activity. IEEE Transactions
            on Biomedical Engineering, 44(3), 136-147 (1997).
            https://doi.org/10.1109/10.554760.
    """
    window_samples = round(window_length * sampling_rate)
    logger.debug("Computing SMA over windows of %s samples.", window_samples)

    magnitude = np.where(
        acceleration.valid,
        np.abs(np.nan_to_num(acceleration.acceleration.measurements)).sum(axis=1),
        0.0,
    )
    magnitude_windows = computations.disjoint_windows(magnitude, window_samples)
    valid = computations.disjoint_windows(acceleration.valid, window_samples).all(
        axis=1
    )

    sma = (
        integrate.trapezoid(magnitude_windows, dx=1 / sampling_rate, axis=1)
        / window_length
    )
    sma[~valid] = np.nan

    window_starts = np.arange(len(sma)) * window_samples
    return models.WindowedSMA(
        values=sma,
        time=acceleration.acceleration.time.gather(window_starts),
        valid=valid,
    )
