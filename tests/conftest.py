"""Fixtures used by pytest."""

import pathlib
from datetime import datetime, timedelta
from typing import Callable, Sequence, Tuple

import numpy as np
import polars as pl
import pytest

from icumotion.core import models

SAMPLING_RATE = 10
START_TIME = datetime(2024, 5, 2)
ONE_HOUR_SAMPLES = 3600 * SAMPLING_RATE


def time_axis(n_samples: int, sampling_rate: int = SAMPLING_RATE) -> pl.Series:
    """Regular time axis starting at START_TIME."""
    step = timedelta(microseconds=1_000_000 // sampling_rate)
    return pl.Series("time", [START_TIME + i * step for i in range(n_samples)])


def burst_acceleration(
    bursts: Sequence[Tuple[float, float]],
    n_samples: int = ONE_HOUR_SAMPLES,
    frequency: float = 2.0,
) -> models.Measurement:
    """Acceleration that is zero except for cosine bursts on the x axis.

    Args:
        bursts: Start and duration, in seconds, of every burst.
        n_samples: Length of the recording in samples.
        frequency: Frequency of the bursts in Hz.
    """
    values = np.zeros((n_samples, 3))
    for start, duration in bursts:
        first = round(start * SAMPLING_RATE)
        n_burst = round(duration * SAMPLING_RATE)
        burst_time = np.arange(n_burst) / SAMPLING_RATE
        values[first : first + n_burst, 0] = np.cos(
            2 * np.pi * frequency * burst_time
        )
    return models.Measurement(measurements=values, time=time_axis(n_samples))


@pytest.fixture
def create_acceleration() -> models.Measurement:
    """Fixture to create a constant acceleration to be used in multiple tests."""
    return models.Measurement(
        measurements=np.ones((1000, 3)), time=time_axis(1000)
    )


@pytest.fixture
def single_burst_acceleration() -> models.Measurement:
    """One hour of acceleration with a 30 s burst centered in the recording."""
    return burst_acceleration([(1785, 30)])


@pytest.fixture
def three_burst_acceleration() -> models.Measurement:
    """One hour of acceleration with bursts of 10 s, 20 s and 30 s."""
    return burst_acceleration([(600, 10), (1800, 20), (3000, 30)])


def write_recording_csv(path: pathlib.Path, acceleration: models.Measurement) -> None:
    """Write acceleration in the headerless time, z, x, y format."""
    pl.DataFrame(
        {
            "time": acceleration.time.dt.strftime("%Y-%m-%d %H:%M:%S%.3f"),
            "z": acceleration.measurements[:, 2],
            "x": acceleration.measurements[:, 0],
            "y": acceleration.measurements[:, 1],
        }
    ).write_csv(path, include_header=False)


def _timestamp(offset: float) -> str:
    """Timestamp `offset` seconds after START_TIME, with milliseconds."""
    return (START_TIME + timedelta(seconds=offset)).isoformat(
        sep=" ", timespec="milliseconds"
    )


def write_events_csv(
    path: pathlib.Path, intervals: Sequence[Tuple[float, float]]
) -> None:
    """Write events given as start and end offsets, in seconds, from START_TIME."""
    lines = ["Event,Start,End"] + [
        f"event{index},{_timestamp(start)},{_timestamp(end)}"
        for index, (start, end) in enumerate(intervals)
    ]
    path.write_text("\n".join(lines) + "\n")


@pytest.fixture
def recording_directory(tmp_path: pathlib.Path) -> pathlib.Path:
    """Directory with two participants, one of them with an events file."""
    short_samples = 600 * SAMPLING_RATE
    write_recording_csv(
        tmp_path / "P01_left.csv",
        burst_acceleration([(100, 30)], n_samples=short_samples),
    )
    write_recording_csv(
        tmp_path / "P01_right.csv",
        burst_acceleration([(200, 20)], n_samples=short_samples),
    )
    write_events_csv(tmp_path / "P01_events.csv", [(0, 1), (300, 310), (590, 599)])
    write_recording_csv(
        tmp_path / "P02_right.csv",
        burst_acceleration([(50, 10)], n_samples=short_samples),
    )
    (tmp_path / "notes.txt").write_text("not a recording")
    return tmp_path


@pytest.fixture
def make_time_axis() -> Callable[..., pl.Series]:
    """Factory of regular time axes."""
    return time_axis


@pytest.fixture
def make_burst_acceleration() -> Callable[..., models.Measurement]:
    """Factory of acceleration with cosine bursts."""
    return burst_acceleration


@pytest.fixture
def recording_csv_writer() -> Callable[[pathlib.Path, models.Measurement], None]:
    """Writer of recordings in the Axivity csv format."""
    return write_recording_csv


@pytest.fixture
def events_csv_writer() -> Callable[..., None]:
    """Writer of events files."""
    return write_events_csv
