"""Filters applied to the raw acceleration."""

import numpy as np
from scipy import signal

from icumotion.core import config, models

logger = config.get_logger()


def high_pass_filter(
    acceleration: models.Measurement,
    sampling_rate: float = 10.0,
    cutoff: float = 0.2,
    order: int = 4,
) -> models.Measurement:
    """Apply a causal Butterworth high-pass filter to each axis.

    Removes gravity and slow drift from the acceleration. The filter runs forward
    only, starting from zero initial conditions, so its output is not zero-phase.

    Args:
        acceleration: Acceleration data to be filtered.
        sampling_rate: Sampling rate of acceleration data in Hz.
        cutoff: Cutoff frequency of the filter in Hz.
        order: Order of the filter, defaults to 4th order.

    Returns:
        Acceleration Measurement of filtered data.

    Raises:
        ValueError: If the cutoff is not between 0 and the Nyquist frequency.
    """
    nyquist = sampling_rate * 0.5
    if not 0 < cutoff < nyquist:
        raise ValueError(
            f"Cutoff must be between 0 and the Nyquist frequency ({nyquist} Hz)."
        )
    logger.debug("High-pass filtering at %s Hz, order %s.", cutoff, order)

    b, a = signal.butter(N=order, Wn=cutoff / nyquist, btype="highpass")

    filtered_data = [
        signal.lfilter(b=b, a=a, x=column) for column in acceleration.measurements.T
    ]

    return models.Measurement(
        measurements=np.column_stack(filtered_data), time=acceleration.time
    )
