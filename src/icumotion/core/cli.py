"""CLI for icumotion."""

import logging
import pathlib

import pydantic
import typer

from icumotion.core import config, exceptions

logger = config.get_logger()
app = typer.Typer(
    help="Compute motion features from thigh-worn accelerometer recordings.",
)


def version_check(version: bool) -> None:
    """Print the current version of icumotion and exit."""
    if version:
        typer.echo(f"icumotion version: {config.get_version()}")
        raise typer.Exit()


@app.command()
def main(
    input: pathlib.Path = typer.Argument(
        ...,
        help="Path to a '<ID>_<leg side>.csv' recording or a directory of recordings.",
        exists=True,
    ),
    output: pathlib.Path = typer.Option(
        None,
        "-o",
        "--output",
        help="Path where the feature table will be saved. "
        "Supports .csv and .parquet formats.",
    ),
    sampling_rate: float = typer.Option(
        10.0,
        "-s",
        "--sampling-rate",
        help="Sampling rate, in Hz, the recordings are resampled to.",
    ),
    window_length: float = typer.Option(
        5.0,
        "-w",
        "--window-length",
        help="Length, in seconds, of the signal magnitude area windows.",
    ),
    activity_threshold: float = typer.Option(
        0.135,
        "-t",
        "--activity-threshold",
        help="Signal magnitude area, in g, above which a window is active.",
    ),
    verbosity: bool = typer.Option(
        False,
        "-v",
        "--verbosity",
        help="Determines the level of verbosity. Use -v for DEBUG. "
        "Defaults to INFO if not included.",
    ),
    version: bool = typer.Option(
        False,
        "-V",
        "--version",
        help="Print the current version of icumotion and exit.",
        is_eager=True,
        callback=version_check,
    ),
) -> None:
    """Run the icumotion orchestrator with command line arguments."""
    from icumotion.core import orchestrator

    log_level = logging.INFO
    if verbosity:
        log_level = logging.DEBUG
    logger.setLevel(log_level)

    try:
        settings = config.Settings(
            sampling_rate=sampling_rate,
            window_length=window_length,
            activity_threshold=activity_threshold,
        )
    except pydantic.ValidationError as e:
        raise typer.BadParameter(str(e))

    logger.debug("Running icumotion. arguments given: %s", locals())
    try:
        orchestrator.run(
            input=input,
            output=output,
            settings=settings,
            verbosity=log_level,
        )
    except (exceptions.EmptyDirectoryError, exceptions.InvalidFileTypeError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
