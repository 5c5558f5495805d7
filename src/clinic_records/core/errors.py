"""
Error types raised inside the persistence layer.

The repository never lets these escape; they travel to callers inside a
``Failure`` result.
"""


class ClinicError(Exception):
    """Base class for clinic records errors."""


class SchemaError(ClinicError):
    """Table creation failed. The process keeps running in degraded mode."""


class PersistenceError(ClinicError):
    """A single repository call was rejected by the storage engine."""

    def __init__(self, operation: str, detail: str):
        super().__init__(f"{operation} failed: {detail}")
        self.operation = operation
        self.detail = detail


class ReferentialIntegrityError(PersistenceError):
    """A delete was refused because other rows still reference the target."""
