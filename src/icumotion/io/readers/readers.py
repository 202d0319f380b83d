"""Functions to find and read accelerometer recordings and event files."""

import dataclasses
import pathlib
import re
from typing import List, Optional, Union

import polars as pl

from icumotion.core import computations, config, exceptions, models

logger = config.get_logger()

RECORDING_COLUMNS = ("time", "z", "x", "y")
LEG_SIDES = ("left", "right")
FILE_NAME_PATTERN = re.compile(r"^([^_]+)_.*\.csv$")


@dataclasses.dataclass
class RecordingFile:
    """Location of a recording and of the event file that belongs to it.

    Attributes:
        identifier: The participant identifier, the file name up to the first '_'.
        leg_side: The leg the sensor was attached to.
        path: Path to the recording.
        events_path: Path where the event file of the participant would be. The
            file need not exist.
    """

    identifier: str
    leg_side: str
    path: pathlib.Path
    events_path: pathlib.Path


def find_recordings(directory: Union[pathlib.Path, str]) -> List[RecordingFile]:
    """Find all recordings in a directory.

    Recordings are named '<ID>_<leg side>.csv', events '<ID>_events.csv'. Every
    identifier is checked for a recording of the left and of the right leg.

    Args:
        directory: The directory to search, subdirectories are not searched.

    Returns:
        The recordings sorted by identifier, left leg first.
    """
    directory = pathlib.Path(directory)
    identifiers = sorted(
        {
            match.group(1)
            for file in directory.iterdir()
            if (match := FILE_NAME_PATTERN.match(file.name))
        }
    )

    recordings = [
        RecordingFile(
            identifier=identifier,
            leg_side=leg_side,
            path=directory / f"{identifier}_{leg_side}.csv",
            events_path=directory / f"{identifier}_events.csv",
        )
        for identifier in identifiers
        for leg_side in LEG_SIDES
        if (directory / f"{identifier}_{leg_side}.csv").is_file()
    ]
    logger.debug("Found %s recordings in %s.", len(recordings), directory)
    return recordings


def read_recording(
    file_name: Union[pathlib.Path, str], sampling_rate: float = 10.0
) -> models.Recording:
    """Read a recording and resample it to a regular sampling rate.

    The file has no header and the columns time, z, x, y, as exported by the
    Axivity software. The axes are linearly interpolated onto a grid of
    1 / sampling_rate seconds starting at the first timestamp.

    Args:
        file_name: The csv file to read.
        sampling_rate: The sampling rate in Hz to resample to.

    Returns:
        The resampled recording, with the axes in x, y, z order.

    Raises:
        ValueError: If the file is not a .csv file.
    """
    file_name = pathlib.Path(file_name)
    if file_name.suffix != ".csv":
        raise ValueError(f"File type {file_name.suffix} is not supported.")
    logger.debug("Reading recording: %s", file_name)

    data = pl.read_csv(
        file_name,
        has_header=False,
        new_columns=list(RECORDING_COLUMNS),
        try_parse_dates=True,
    )
    data = data.select(
        _as_datetime(data["time"]),
        pl.col("x", "y", "z").cast(pl.Float64),
    ).sort("time")

    raw = models.Measurement(
        measurements=data.select("x", "y", "z").to_numpy(), time=data["time"]
    )
    return models.Recording(
        acceleration=computations.resample(raw, 1 / sampling_rate),
        sampling_rate=sampling_rate,
    )


def read_events(file_name: Union[pathlib.Path, str]) -> Optional[models.EventList]:
    """Read the events of a participant, if there are any.

    The file has a header; the second and third columns hold the start and end of
    each event.

    Args:
        file_name: The csv file to read.

    Returns:
        The events, or None if the file does not exist.

    Raises:
        MalformedEventsError: If the file has fewer than two events, or an event
            that ends before it starts.
    """
    file_name = pathlib.Path(file_name)
    if not file_name.is_file():
        logger.debug("No events file at %s.", file_name)
        return None
    logger.debug("Reading events: %s", file_name)

    data = pl.read_csv(file_name, try_parse_dates=True)
    if data.width < 3:
        raise exceptions.MalformedEventsError(
            f"Events file {file_name} must have at least three columns."
        )
    if data.height < 2:
        raise exceptions.MalformedEventsError(
            f"Events file {file_name} must contain at least two events."
        )
    data = data.with_columns(
        _as_datetime(data.to_series(1)), _as_datetime(data.to_series(2))
    )
    return models.EventList.from_data_frame(data)


def _as_datetime(series: pl.Series) -> pl.Series:
    """Convert a column to datetime if the csv reader did not parse it."""
    if isinstance(series.dtype, pl.datatypes.Datetime):
        return series
    if series.dtype == pl.Date:
        return series.cast(pl.Datetime)
    return series.cast(pl.Utf8).str.to_datetime()
