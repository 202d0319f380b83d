"""Classify activity, find activity bouts and describe their distribution."""

from typing import List, Sequence, Tuple, Union

import numpy as np

from icumotion.core import config, models

logger = config.get_logger()

MIN_FIT_SAMPLES = 3


def classify_activity(
    sma: models.WindowedSMA, threshold: float = 0.135
) -> np.ndarray:
    """Label each window as active or inactive.

    A window is active when it is valid and its SMA strictly exceeds the threshold.
    Invalid windows are therefore always inactive, which also makes them count as
    inactive in the activity percentage.

    Args:
        sma: The windowed signal magnitude area.
        threshold: The SMA level above which a window is active.

    Returns:
        A boolean array with one label per window.
    """
    logger.debug("Classifying activity, threshold: %s", threshold)
    above_threshold = np.greater(
        np.nan_to_num(sma.values, nan=-np.inf), threshold
    )
    return np.logical_and(sma.valid, above_threshold)


def find_bouts(
    active: np.ndarray, sma: models.WindowedSMA, window_length: float = 5.0
) -> List[models.Bout]:
    """Group consecutive active windows into bouts.

    The labels are padded with an inactive window on both ends. A bout starts at
    every inactive to active transition and ends at the window before the next
    active to inactive transition.

    Args:
        active: The activity label of every window.
        sma: The windowed signal magnitude area the labels were derived from.
        window_length: Length of a window in seconds.

    Returns:
        The bouts in chronological order, each with the SMA values of its windows.
        The list is empty when no window is active.
    """
    padded = np.concatenate(([False], np.asarray(active, dtype=bool), [False]))
    starts = np.flatnonzero(padded[1:] & ~padded[:-1])
    stops = np.flatnonzero(~padded[1:] & padded[:-1])

    bouts = [
        models.Bout(
            start_index=int(start),
            intensities=sma.values[start:stop],
            window_length=window_length,
        )
        for start, stop in zip(starts, stops)
    ]
    logger.debug("Found %s bouts.", len(bouts))
    return bouts


def fit_lognormal(values: Union[Sequence[float], np.ndarray]) -> Tuple[float, float]:
    """Fit a log-normal distribution by maximum likelihood.

    The maximum likelihood estimates of a log-normal distribution are the mean and
    the uncorrected standard deviation of the log-transformed values.

    Args:
        values: Positive values, e.g. bout intensities or durations.

    Returns:
        The mean and standard deviation of the underlying normal distribution. Both
        are NaN when fewer than three values are given.

    Raises:
        ValueError: If any value is not positive.
    """
    values = np.asarray(values, dtype=float)
    if len(values) < MIN_FIT_SAMPLES:
        logger.debug("Only %s values, skipping log-normal fit.", len(values))
        return np.nan, np.nan
    if not np.all(values > 0):
        raise ValueError("Log-normal fit requires positive values.")

    log_values = np.log(values)
    return float(np.mean(log_values)), float(np.std(log_values))
