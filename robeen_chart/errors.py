from __future__ import annotations


class ChartError(Exception):
    """Base class for chart setup and ingestion failures."""


class InvalidConfiguration(ChartError, ValueError):
    """Chart configuration cannot produce a valid chart; fatal to setup."""


class SurfaceUnavailable(ChartError, RuntimeError):
    """The render surface cannot report its dimensions yet."""


class MeasurementDataError(ChartError, ValueError):
    """A measurement record is malformed."""
