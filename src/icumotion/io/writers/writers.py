"""Module containing the output classes for writing data to files."""

import datetime
import json
import pathlib
from typing import Any, Dict, List, Optional

import polars as pl
import pydantic

from icumotion.core import config, exceptions, models

VALID_FILE_TYPES = (".csv", ".parquet")

logger = config.get_logger()


class FeatureTable(pydantic.BaseModel):
    """Dataclass containing the results of orchestrator.run()."""

    results: List[models.RecordingResult]
    processing_params: Optional[Dict[str, Any]] = None

    @property
    def failures(self) -> List[models.RecordingResult]:
        """Recordings for which no features could be computed."""
        return [result for result in self.results if not result.succeeded]

    def to_data_frame(self) -> pl.DataFrame:
        """Tabulate the features of all successfully processed recordings.

        Returns:
            One row per recording with the columns ID, LegSide and the features in
            their export order.
        """
        rows = [
            [result.identifier, result.leg_side, *result.features.as_list()]
            for result in self.results
            if result.features is not None
        ]
        schema = {"ID": pl.Utf8, "LegSide": pl.Utf8} | {
            name: pl.Float64 for name in models.FEATURE_NAMES
        }
        return pl.DataFrame(rows, schema=schema, orient="row")

    def save_results(self, output: pathlib.Path) -> None:
        """Save the feature table as a csv or parquet file.

        Args:
            output: The path and file name of the data to be saved. as either a csv or
                parquet files.

        """
        logger.debug("Saving results.")
        self.validate_output(output=output)
        output.parent.mkdir(parents=True, exist_ok=True)

        results_dataframe = self.to_data_frame()

        if output.suffix == ".csv":
            results_dataframe.write_csv(output, separator=",")
        elif output.suffix == ".parquet":
            results_dataframe.write_parquet(output)

        logger.info("Results saved in: %s", output)

        if self.processing_params:
            self.save_config_as_json(output)

    def save_config_as_json(self, output_path: pathlib.Path) -> None:
        """Save processing parameters as a JSON configuration file.

        Args:
            output_path: Path where the data file was saved. The JSON file will use
                the same name but with .json extension.
        """
        if not self.processing_params:
            logger.warning("No processing parameters to save as JSON")
            return

        config_data = {
            "processing_time": datetime.datetime.now().isoformat(timespec="seconds"),
            "icumotion_version": config.get_version(),
            "processing_parameters": self.processing_params,
            "failed_recordings": {
                result.input_file: result.error for result in self.failures
            },
        }

        config_path = output_path.with_suffix(".json")

        with open(config_path, "w") as f:
            json.dump(config_data, f, indent=4)

        logger.debug("Configuration saved in: %s", config_path)

    @classmethod
    def validate_output(cls, output: pathlib.Path) -> None:
        """Validates that the output path is a valid format.

        Args:
            output: the name of the file to be saved, and the directory it will
                be saved in. Must be a .csv or .parquet file.

        Raises:
            InvalidFileTypeError:If the output file path ends with any extension other
                    than csv or parquet.
        """
        if output.suffix not in VALID_FILE_TYPES:
            raise exceptions.InvalidFileTypeError(
                f"The extension: {output.suffix} is not supported."
                "Please save the file as .csv or .parquet",
            )
