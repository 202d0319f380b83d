"""Exclude periods of a recording based on event intervals."""

from typing import Optional

import numpy as np

from icumotion.core import config, exceptions, models

logger = config.get_logger()


def mask_events(
    acceleration: models.Measurement, events: Optional[models.EventList] = None
) -> models.MaskedMeasurement:
    """Clip the acceleration to the event span and mask the interior events.

    The start of the first event and the end of the last event delimit the part of
    the recording that is kept. Samples inside any event between the first and the
    last one are flagged invalid and set to NaN. Both bounds of every interval are
    inclusive.

    Args:
        acceleration: The (filtered) acceleration data.
        events: The event intervals. If None, the acceleration is returned as is,
            with every sample valid.

    Returns:
        A MaskedMeasurement with the clipped acceleration, a validity flag per
        sample, and the number of samples before clipping. Its availability is
        1 - (masked samples / samples before clipping).

    Raises:
        MalformedEventsError: If the events are malformed or the event span does
            not contain any sample of the recording.
    """
    total_samples = len(acceleration.time)
    if events is None:
        logger.debug("No events given, all %s samples are kept.", total_samples)
        return models.MaskedMeasurement(
            acceleration=acceleration,
            valid=np.ones(total_samples, dtype=bool),
            total_samples=total_samples,
        )

    events.check_intervals()

    keep = acceleration.time.is_between(
        events.start[0], events.end[-1], closed="both"
    ).to_numpy()
    if not keep.any():
        raise exceptions.MalformedEventsError(
            "The event span does not overlap with the recording."
        )
    clipped_time = acceleration.time.filter(keep)
    clipped_values = acceleration.measurements[keep].astype(float)

    valid = np.ones(len(clipped_time), dtype=bool)
    n_interior = len(events) - 2
    for start, end in zip(
        events.start.slice(1, n_interior), events.end.slice(1, n_interior)
    ):
        valid &= ~clipped_time.is_between(start, end, closed="both").to_numpy()
    clipped_values[~valid] = np.nan

    logger.debug(
        "Kept %s of %s samples, %s of them masked.",
        len(clipped_time),
        total_samples,
        np.count_nonzero(~valid),
    )
    return models.MaskedMeasurement(
        acceleration=models.Measurement(measurements=clipped_values, time=clipped_time),
        valid=valid,
        total_samples=total_samples,
    )
