"""Custom exceptions for icumotion."""

from icumotion.core import config

logger = config.get_logger()


class LoggedException(Exception):
    """Base class that automatically logs messages."""

    def __init__(self, message: str) -> None:
        """Initialize a new instance of the LoggedException class.

        Args:
            message: The message to display.
        """
        logger.exception(message)
        super().__init__(message)


class MalformedEventsError(LoggedException):
    """The event intervals are insufficient or inconsistent."""

    pass


class InvalidFileTypeError(LoggedException):
    """icumotion did not expect this file extension."""

    pass


class EmptyDirectoryError(LoggedException):
    """No accelerometer recordings were found in the directory."""

    pass
