"""This module contains windowing and resampling functions for the sensor data."""

import numpy as np
import polars as pl

from icumotion.core import models


def disjoint_windows(array: np.ndarray, window_samples: int) -> np.ndarray:
    """Split an array into consecutive, non-overlapping windows.

    Any trailing samples that do not fill a complete window are discarded.

    Args:
        array: The data to split, windows are taken along the first axis.
        window_samples: The number of samples per window.

    Returns:
        A view of the data with shape (n_windows, window_samples, ...), where
        n_windows is floor(len(array) / window_samples).

    Raises:
        ValueError: If window_samples is smaller than 1.
    """
    if window_samples < 1:
        raise ValueError("Window must contain at least one sample.")

    n_windows = len(array) // window_samples
    return array[: n_windows * window_samples].reshape(
        (n_windows, window_samples) + array.shape[1:]
    )


def resample(measurement: models.Measurement, delta_t: float) -> models.Measurement:
    """Resamples a measurement to a regular grid by linear interpolation.

    The new grid starts at the first timestamp of the measurement and has a constant
    step of delta_t; it ends at the last grid point not after the last timestamp.

    Args:
        measurement: The measurement to resample.
        delta_t: The new time step, in seconds. This will be rounded to the nearest
            nanosecond.

    Returns:
        The resampled measurement, with the shape and time zone of the input.

    Raises:
        ValueError: Raised for non-positive delta_t.
    """
    if delta_t <= 0:
        msg = "delta_t must be positive."
        raise ValueError(msg)

    n_nanoseconds_in_second = 1_000_000_000
    requested_delta_t = round(delta_t * n_nanoseconds_in_second)

    time_ns = measurement.time.dt.cast_time_unit("ns").to_physical().to_numpy()
    n_samples = (time_ns[-1] - time_ns[0]) // requested_delta_t + 1
    offsets = np.arange(n_samples, dtype=np.int64) * requested_delta_t
    new_time_ns = time_ns[0] + offsets

    # interpolate on offsets, epoch nanoseconds exceed float64 precision
    values = measurement.measurements.reshape((len(time_ns), -1))
    new_values = np.column_stack(
        [np.interp(offsets, time_ns - time_ns[0], column) for column in values.T]
    )

    new_time = pl.from_epoch(pl.Series(new_time_ns), time_unit="ns").alias("time")
    # epoch values are UTC, convert back to the zone of the input
    time_zone = measurement.time.dtype.time_zone
    if time_zone is not None:
        new_time = new_time.dt.replace_time_zone("UTC").dt.convert_time_zone(
            time_zone
        )

    return models.Measurement(
        measurements=new_values.reshape(
            (len(new_time_ns),) + measurement.measurements.shape[1:]
        ),
        time=new_time,
    )
