"""
Error types raised while turning a test report into stored points.

Every error aborts the request that raised it; nothing is retried.
The message names the stage that failed.
"""

from __future__ import annotations


class IngestError(Exception):
    """Base class for all request-level failures."""

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class InputError(IngestError):
    """Empty body or a body that is not a JSON object."""


class TimestampError(IngestError):
    """``Summary.Timestamp`` is present but not ``YYYYMMDDhhmmss``."""


class BackendConnectionError(IngestError):
    """The InfluxDB client could not be created."""


class BackendBatchError(IngestError):
    """The write batch could not be created."""


class PointConstructionError(IngestError):
    """A measurement point failed validation."""


class BackendWriteError(IngestError):
    """The batch write to InfluxDB failed."""
