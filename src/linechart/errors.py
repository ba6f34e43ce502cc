"""Error taxonomy shared by the core and the CLI driver."""
from __future__ import annotations


class LineChartError(Exception):
    """Base class for every failure the driver reports to the user."""


class InputDecodeError(LineChartError):
    """Raised when the chart source cannot be decoded into a ChartInput."""


class LayoutError(LineChartError):
    """Raised when sample values cannot produce a well-formed axis."""


class SourceError(LineChartError):
    """Raised when the input stream cannot be opened."""


class SinkError(LineChartError):
    """Raised when the output destination cannot be created or written."""


class ConfigError(LineChartError):
    """Raised when the settings file is missing or invalid."""
