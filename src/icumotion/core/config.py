"""Configuration module for icumotion."""

import logging
from importlib import metadata

import pydantic


def get_version() -> str:
    """Return icumotion version."""
    try:
        return metadata.version("icumotion")
    except metadata.PackageNotFoundError:
        return "Version unknown"


def get_logger() -> logging.Logger:
    """Gets the icumotion logger."""
    logger = logging.getLogger("icumotion")
    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)s - %(funcName)s - %(message)s",  # noqa: E501
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    return logger


class Settings(pydantic.BaseModel):
    """Processing constants for the feature extraction pipeline.

    Attributes:
        sampling_rate: The rate, in Hz, the recordings are resampled to.
        window_length: Length of the disjoint SMA windows in seconds.
        activity_threshold: SMA level, in g, above which a window is active.
        filter_order: Order of the Butterworth high-pass filter.
        cutoff_frequency: Cutoff frequency of the high-pass filter in Hz.
    """

    model_config = pydantic.ConfigDict(frozen=True)

    sampling_rate: float = pydantic.Field(default=10.0, gt=0)
    window_length: float = pydantic.Field(default=5.0, gt=0)
    activity_threshold: float = pydantic.Field(default=0.135, ge=0)
    filter_order: int = pydantic.Field(default=4, ge=1)
    cutoff_frequency: float = pydantic.Field(default=0.2, gt=0)

    @pydantic.model_validator(mode="after")
    def validate_cutoff_below_nyquist(self) -> "Settings":
        """Validate that the filter cutoff lies below the Nyquist frequency.

        Returns:
            The validated settings.

        Raises:
            ValueError: If the cutoff frequency is not below half the sampling rate.
        """
        if self.cutoff_frequency >= self.sampling_rate / 2:
            raise ValueError(
                "cutoff_frequency must be below the Nyquist frequency "
                f"({self.sampling_rate / 2} Hz)."
            )
        return self
