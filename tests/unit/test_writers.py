"""Test the writers module."""

import json
import logging
import pathlib

import numpy as np
import polars as pl
import pytest

from icumotion.core import exceptions, models
from icumotion.io.writers import writers


@pytest.fixture
def dummy_results() -> writers.FeatureTable:
    """Makes a results object for the purpose of testing."""
    feature_vector = models.FeatureVector(
        recording_duration=24.0,
        cut_duration=1.5,
        intensity_general=0.05,
        activity_percentage=2.5,
        active_bouts_per_hour=4.0,
        intensity_active_log_mean=-1.2,
        intensity_active_variability=0.4,
        duration_active_log_mean=2.7,
        duration_active_variability=np.nan,
    )
    return writers.FeatureTable(
        results=[
            models.RecordingResult(
                identifier="P01",
                leg_side="left",
                input_file="P01_left.csv",
                features=feature_vector,
            ),
            models.RecordingResult(
                identifier="P01",
                leg_side="right",
                input_file="P01_right.csv",
                error="Every event must start before it ends.",
            ),
        ],
        processing_params={"window_length": 5.0},
    )


def test_to_data_frame(dummy_results: writers.FeatureTable) -> None:
    """Test that only successful recordings are tabulated, in export order."""
    data_frame = dummy_results.to_data_frame()

    assert data_frame.columns == ["ID", "LegSide", *models.FEATURE_NAMES]
    assert data_frame.height == 1
    assert data_frame.row(0)[:4] == ("P01", "left", 24.0, 1.5)


def test_failures(dummy_results: writers.FeatureTable) -> None:
    """Test that failed recordings are listed."""
    assert [result.input_file for result in dummy_results.failures] == [
        "P01_right.csv"
    ]


@pytest.mark.parametrize("file_name", ["features.csv", "features.parquet"])
def test_save_results(
    dummy_results: writers.FeatureTable, tmp_path: pathlib.Path, file_name: str
) -> None:
    """Test saving the table and its processing parameters."""
    output = tmp_path / "nested" / file_name

    dummy_results.save_results(output)

    assert output.exists()
    config_data = json.loads(output.with_suffix(".json").read_text())
    assert config_data["processing_parameters"] == {"window_length": 5.0}
    assert config_data["failed_recordings"] == {
        "P01_right.csv": "Every event must start before it ends."
    }


def test_save_results_csv_content(
    dummy_results: writers.FeatureTable, tmp_path: pathlib.Path
) -> None:
    """Test the header and values of the csv file."""
    output = tmp_path / "features.csv"

    dummy_results.save_results(output)
    saved = pl.read_csv(output)

    assert saved.columns[:3] == ["ID", "LegSide", "RecordingDuration"]
    assert saved["ActiveBoutsPerHour"].to_list() == [4.0]


def test_validate_output_invalid_file_type(tmp_path: pathlib.Path) -> None:
    """Test when a bad extention is given."""
    with pytest.raises(exceptions.InvalidFileTypeError):
        writers.FeatureTable.validate_output(tmp_path / "bad_file.oops")


def test_empty_params(
    dummy_results: writers.FeatureTable, caplog: pytest.LogCaptureFixture
) -> None:
    """Test empty params raises logger warning."""
    caplog.set_level(logging.WARNING)
    dummy_results.processing_params = {}

    dummy_results.save_config_as_json(pathlib.Path("test_output.csv"))

    assert "No processing parameters to save as JSON" in caplog.text
