"""Internal data model."""

import dataclasses
from typing import List, Optional

import numpy as np
import polars as pl
import pydantic
from pydantic import BaseModel, field_validator

from icumotion.core import config, exceptions

logger = config.get_logger()


class Measurement(BaseModel):
    """A single measurement of a sensor and its corresponding time."""

    model_config = pydantic.ConfigDict(arbitrary_types_allowed=True)

    measurements: np.ndarray
    time: pl.Series

    @field_validator("measurements")
    def validate_measurements_not_empty(cls, v: np.ndarray) -> np.ndarray:
        """Validate that the measurements array is not empty.

        Args:
            cls: The class.
            v: The measurements array to validate.

        Returns:
            v: The measurements array if it is not empty.

        Raises:
            ValueError: If the measurements array is empty.
        """
        if v.size == 0:
            raise ValueError("measurements array must not be empty")
        return v

    @field_validator("time")
    def validate_time(cls, v: pl.Series) -> pl.Series:
        """Validate the time series.

        Check that the time series is a datetime series, contains only unque entries,
        and is sorted.

        Args:
            cls: The class.
            v: The time series to validate.

        Returns:
            v: The time series if it is valid.

        Raises:
            ValueError: If the time series is not a datetime series or is not sorted,
            or is empty.
        """
        if not isinstance(v.dtype, pl.datatypes.Datetime):
            raise ValueError("Time must be a datetime series")
        if not v.is_unique().all():
            raise ValueError("Time series must contain unique entries")
        if not v.is_sorted():
            raise ValueError("Time series must be sorted")
        if v.is_empty():
            raise ValueError("Time series cannot be empty")
        return v


class Recording(BaseModel):
    """A regularly sampled accelerometer recording from one thigh sensor.

    It must not be mutated during processing.
    """

    acceleration: Measurement
    sampling_rate: float = pydantic.Field(gt=0)

    @field_validator("acceleration")
    def validate_acceleration(cls, v: Measurement) -> Measurement:
        """Validate the acceleration data.

        Ensure that the acceleration data is a 2D array with 3 columns.

        Args:
            cls: The class.
            v: The acceleration data to validate.

        Returns:
            v: The acceleration data if it is valid.

        Raises:
            ValueError: If the acceleration data is not a 2D array with 3 columns.
        """
        if v.measurements.ndim != 2 or v.measurements.shape[1] != 3:
            raise ValueError("acceleration must be a 2D array with 3 columns")
        return v


class EventList(BaseModel):
    """Intervals, ordered by start time, used to exclude parts of a recording.

    The start of the first event and the end of the last event delimit the retained
    part of the recording. Every event in between marks an interval to mask.
    """

    model_config = pydantic.ConfigDict(arbitrary_types_allowed=True)

    start: pl.Series
    end: pl.Series

    @classmethod
    def from_data_frame(cls, data_frame: pl.DataFrame) -> "EventList":
        """Creates an event list from the second and third column of a DataFrame.

        Args:
            data_frame: The events table. The first column usually holds a label,
                the second and third the start and end timestamps.

        Returns:
            The validated event list.

        Raises:
            MalformedEventsError: If the table has fewer than three columns, fewer
                than two rows, or an event that ends before it starts.
        """
        if data_frame.width < 3:
            raise exceptions.MalformedEventsError(
                "Events table must have start and end times in its second and "
                f"third column, found {data_frame.width} columns."
            )
        events = EventList(
            start=data_frame.to_series(1).alias("start"),
            end=data_frame.to_series(2).alias("end"),
        )
        events.check_intervals()
        return events

    def check_intervals(self) -> None:
        """Check that the events delimit a span and are internally consistent.

        Raises:
            MalformedEventsError: If there are fewer than two events, the start and
                end columns differ in length, or any event ends before it starts.
        """
        if len(self.start) != len(self.end):
            raise exceptions.MalformedEventsError(
                "Every event must have both a start and an end time."
            )
        if len(self.start) < 2:
            raise exceptions.MalformedEventsError(
                f"At least two events are required, found {len(self.start)}."
            )
        if (self.start > self.end).any():
            raise exceptions.MalformedEventsError(
                "Every event must start before it ends."
            )

    @field_validator("start", "end")
    def validate_time(cls, v: pl.Series) -> pl.Series:
        """Validate that the event bounds are datetimes.

        Args:
            cls: The class.
            v: The event bounds to validate.

        Returns:
            v: The event bounds if they are valid.

        Raises:
            ValueError: If the series is not a datetime series.
        """
        if not isinstance(v.dtype, pl.datatypes.Datetime):
            raise ValueError("Event times must be a datetime series")
        return v

    def __len__(self) -> int:
        """Number of events."""
        return len(self.start)


class MaskedMeasurement(BaseModel):
    """Acceleration clipped to the event span, with a validity flag per sample.

    Masked samples hold NaN in `acceleration`, but downstream processing reads
    validity from `valid` only.
    """

    model_config = pydantic.ConfigDict(arbitrary_types_allowed=True)

    acceleration: Measurement
    valid: np.ndarray
    total_samples: int

    @property
    def invalid_samples(self) -> int:
        """Number of masked samples in the clipped acceleration."""
        return int(np.count_nonzero(~self.valid))

    @property
    def availability(self) -> float:
        """Fraction of the unclipped recording that was not masked."""
        return 1 - self.invalid_samples / self.total_samples


class WindowedSMA(BaseModel):
    """Signal magnitude area of disjoint windows and their validity.

    The time of each window is the time of its first sample. Invalid windows hold
    NaN in `values`.
    """

    model_config = pydantic.ConfigDict(arbitrary_types_allowed=True)

    values: np.ndarray
    time: pl.Series
    valid: np.ndarray

    @pydantic.model_validator(mode="after")
    def validate_lengths(self) -> "WindowedSMA":
        """Validate that values, times and validity flags line up."""
        if not len(self.values) == len(self.time) == len(self.valid):
            raise ValueError("values, time and valid must have the same length")
        return self

    def __len__(self) -> int:
        """Number of windows."""
        return len(self.values)


@dataclasses.dataclass
class Bout:
    """A maximal run of consecutive active windows.

    Attributes:
        start_index: Index of the first window of the bout.
        intensities: SMA values of the member windows, in order.
        window_length: Length of one window in seconds.
    """

    start_index: int
    intensities: np.ndarray
    window_length: float

    @property
    def duration(self) -> float:
        """Duration of the bout in seconds."""
        return len(self.intensities) * self.window_length

    @property
    def mean_intensity(self) -> float:
        """Mean SMA of the bout."""
        return float(np.mean(self.intensities))


FEATURE_NAMES = (
    "RecordingDuration",
    "CutDuration",
    "IntensityGeneral",
    "ActivityPercentage",
    "ActiveBoutsPerHour",
    "IntensityActiveLogMean",
    "IntensityActiveVariability",
    "DurationActiveLogMean",
    "DurationActiveVariability",
)


class FeatureVector(BaseModel):
    """Summary motion features of a single recording.

    Attributes:
        recording_duration: Duration of the recording before clipping, in hours.
        cut_duration: Duration of the masked samples, in hours.
        intensity_general: Mean SMA over all valid windows.
        activity_percentage: Percentage of available windows that are active.
        active_bouts_per_hour: Number of bouts per available hour.
        intensity_active_log_mean: Log-domain mean of the mean bout intensities.
        intensity_active_variability: Log-domain standard deviation of the mean
            bout intensities.
        duration_active_log_mean: Log-domain mean of the bout durations.
        duration_active_variability: Log-domain standard deviation of the bout
            durations.
    """

    model_config = pydantic.ConfigDict(frozen=True)

    recording_duration: float
    cut_duration: float
    intensity_general: float
    activity_percentage: float
    active_bouts_per_hour: float
    intensity_active_log_mean: float
    intensity_active_variability: float
    duration_active_log_mean: float
    duration_active_variability: float

    def as_list(self) -> List[float]:
        """Return the features in their export order."""
        return [value for _, value in self]


class RecordingResult(BaseModel):
    """Outcome of processing a single recording.

    Exactly one of `features` and `error` is set.
    """

    identifier: str
    leg_side: str
    input_file: str
    features: Optional[FeatureVector] = None
    error: Optional[str] = None

    @pydantic.model_validator(mode="after")
    def validate_outcome(self) -> "RecordingResult":
        """Validate that the result holds either features or an error."""
        if (self.features is None) == (self.error is None):
            raise ValueError("Exactly one of features and error must be set")
        return self

    @property
    def succeeded(self) -> bool:
        """Whether features were computed for the recording."""
        return self.features is not None
