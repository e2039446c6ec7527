"""Application exception classes."""


class ConfigError(Exception):
    """Raised when configuration is invalid or incomplete."""


class JournalError(Exception):
    """Raised when writing to journal files fails."""


class WeatherChangeError(Exception):
    """Base class for failures while classifying a pair of observations."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class InputDecodeError(WeatherChangeError):
    """Raised when an observation record is missing fields or has mistyped fields."""


class DateParseError(WeatherChangeError):
    """Raised when an observation date is not a valid YYYY-MM-DD calendar date."""

    def __init__(self, message: str, *, field: str | None = None, value: str = "") -> None:
        super().__init__(message, field=field)
        self.value = value


class InputFileError(Exception):
    """Raised when the CLI pairs input cannot be read or has the wrong shape."""
