"""Compute the motion features of a single recording."""

from typing import Optional

import numpy as np

from icumotion.core import config, models
from icumotion.processing import analytics, filters, masking, metrics

logger = config.get_logger()

SECONDS_PER_HOUR = 3600


def compute_features(
    acceleration: models.Measurement,
    settings: Optional[config.Settings] = None,
    events: Optional[models.EventList] = None,
) -> models.FeatureVector:
    """Run the feature extraction pipeline on a resampled recording.

    The acceleration is high-pass filtered, clipped and masked according to the
    events, reduced to the SMA of disjoint windows, and thresholded into activity
    bouts. Bout intensities and durations are summarized by a log-normal fit.

    The two availability corrections differ: the activity percentage divides by
    the rounded number of available windows, the bout rate by the available hours.
    Divisions by zero yield NaN or inf rather than an error.

    Args:
        acceleration: Three-dimensional acceleration sampled at
            settings.sampling_rate.
        settings: The processing constants. Defaults to config.Settings().
        events: Optional event intervals delimiting and masking the recording.

    Returns:
        The nine motion features of the recording.

    Raises:
        MalformedEventsError: If the events are malformed.
    """
    settings = settings or config.Settings()
    sampling_rate = settings.sampling_rate

    filtered = filters.high_pass_filter(
        acceleration,
        sampling_rate=sampling_rate,
        cutoff=settings.cutoff_frequency,
        order=settings.filter_order,
    )
    masked = masking.mask_events(filtered, events)
    sma = metrics.signal_magnitude_area(
        masked, sampling_rate=sampling_rate, window_length=settings.window_length
    )
    active = analytics.classify_activity(sma, settings.activity_threshold)
    bouts = analytics.find_bouts(active, sma, settings.window_length)

    availability = masked.availability
    recording_duration = masked.total_samples / sampling_rate / SECONDS_PER_HOUR
    cut_duration = masked.invalid_samples / sampling_rate / SECONDS_PER_HOUR

    intensity_general = (
        float(np.mean(sma.values[sma.valid])) if sma.valid.any() else np.nan
    )
    # round half away from zero, the operand is never negative
    available_windows = np.floor(availability * len(sma) + 0.5)
    with np.errstate(divide="ignore", invalid="ignore"):
        activity_percentage = 100 * np.float64(np.count_nonzero(active)) / (
            available_windows
        )
        active_bouts_per_hour = np.float64(len(bouts)) / (
            availability * recording_duration
        )

    intensity_log_mean, intensity_variability = analytics.fit_lognormal(
        [bout.mean_intensity for bout in bouts]
    )
    duration_log_mean, duration_variability = analytics.fit_lognormal(
        [bout.duration for bout in bouts]
    )

    logger.debug(
        "%s bouts in %.2f hours, %.2f%% active.",
        len(bouts),
        recording_duration,
        activity_percentage,
    )
    return models.FeatureVector(
        recording_duration=recording_duration,
        cut_duration=cut_duration,
        intensity_general=intensity_general,
        activity_percentage=float(activity_percentage),
        active_bouts_per_hour=float(active_bouts_per_hour),
        intensity_active_log_mean=intensity_log_mean,
        intensity_active_variability=intensity_variability,
        duration_active_log_mean=duration_log_mean,
        duration_active_variability=duration_variability,
    )
