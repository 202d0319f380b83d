"""Python based runner."""

import logging
import pathlib
from typing import List, Optional, Union

from rich import progress

from icumotion.core import config, exceptions, models
from icumotion.io.readers import readers
from icumotion.io.writers import writers
from icumotion.processing import features

logger = config.get_logger()


def run(
    input: Union[pathlib.Path, str],
    output: Optional[Union[pathlib.Path, str]] = None,
    settings: Optional[config.Settings] = None,
    verbosity: int = logging.WARNING,
) -> writers.FeatureTable:
    """Computes the motion features of a single recording or a directory.

    When the input path points to a file, it must be named '<ID>_<leg side>.csv';
    the events are read from '<ID>_events.csv' next to it, if that exists. When the
    input path points to a directory, every recording in it is processed. A
    recording that fails is reported in the results and does not stop the others.

    Args:
        input: Path to a recording or to a directory of recordings.
        output: Path of the feature table to save, ending in .csv or .parquet. A
            JSON file with the processing parameters is saved next to it.
        settings: The processing constants. Defaults to config.Settings().
        verbosity: The logging level for the logger.

    Returns:
        The features of all processed recordings.

    Raises:
        InvalidFileTypeError: If the output is not a .csv or .parquet file.
        EmptyDirectoryError: If the input directory contains no recordings.
    """
    logger.setLevel(verbosity)
    settings = settings or config.Settings()

    input = pathlib.Path(input)
    output = pathlib.Path(output) if output is not None else None
    if output is not None:
        writers.FeatureTable.validate_output(output=output)

    if input.is_file():
        identifier, _, leg_side = input.stem.partition("_")
        recording_files = [
            readers.RecordingFile(
                identifier=identifier,
                leg_side=leg_side,
                path=input,
                events_path=input.parent / f"{identifier}_events.csv",
            )
        ]
    else:
        recording_files = readers.find_recordings(input)
        if not recording_files:
            raise exceptions.EmptyDirectoryError(
                f"Directory {input} contains no '<ID>_<leg side>.csv' recordings."
            )

    results = _run_recordings(recording_files, settings)

    feature_table = writers.FeatureTable(
        results=results,
        processing_params={
            "input": str(input),
            **settings.model_dump(),
        },
    )
    if output is not None:
        try:
            feature_table.save_results(output=output)
        except (PermissionError, FileExistsError) as exc_info:
            # Allowed to pass to recover in Jupyter Notebook scenarios.
            logger.error(
                "Could not save output due to: %s. Call save_results on the output "
                "object with a correct filename to save these results.",
                exc_info,
            )
    logger.info(
        "Processed %s recordings, %s failed.",
        len(results),
        len(feature_table.failures),
    )
    return feature_table


def _run_recordings(
    recording_files: List[readers.RecordingFile], settings: config.Settings
) -> List[models.RecordingResult]:
    """Process recordings one after the other, with a progress bar."""
    results = []
    with progress.Progress(
        progress.SpinnerColumn(),
        progress.TextColumn("[progress.description]{task.description}"),
        progress.BarColumn(),
        progress.TaskProgressColumn(),
        console=None,
    ) as progress_bar:
        task = progress_bar.add_task(
            "[cyan]Processing recordings...", total=len(recording_files)
        )
        for recording_file in recording_files:
            results.append(process_recording(recording_file, settings))
            progress_bar.update(task, advance=1)
    return results


def process_recording(
    recording_file: readers.RecordingFile, settings: config.Settings
) -> models.RecordingResult:
    """Read a recording and compute its features.

    Any error raised while reading or processing is turned into a failed result,
    so that a batch can continue with the next recording.

    Args:
        recording_file: The recording and the location of its events.
        settings: The processing constants.

    Returns:
        The features of the recording, or the reason it could not be processed.
    """
    logger.debug("Processing: %s", recording_file.path)
    try:
        recording = readers.read_recording(
            recording_file.path, sampling_rate=settings.sampling_rate
        )
        events = readers.read_events(recording_file.events_path)
        feature_vector = features.compute_features(
            recording.acceleration, settings=settings, events=events
        )
    except Exception as e:
        logger.warning("Failed to process file %s: %s", recording_file.path, e)
        return models.RecordingResult(
            identifier=recording_file.identifier,
            leg_side=recording_file.leg_side,
            input_file=str(recording_file.path),
            error=str(e) or type(e).__name__,
        )

    logger.info("Processing for %s completed successfully.", recording_file.path.stem)
    return models.RecordingResult(
        identifier=recording_file.identifier,
        leg_side=recording_file.leg_side,
        input_file=str(recording_file.path),
        features=feature_vector,
    )
