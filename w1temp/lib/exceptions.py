"""Custom exceptions for the w1temp logger.

Sensor errors are split by how the acquisition loop reacts to them:
transient errors are retried, a missing device is skipped for the run.
Store errors are split the same way: a store that cannot be opened is
fatal, everything else is reported per row.
"""


class W1TempError(Exception):
    """Base exception for all application errors."""


class SensorError(W1TempError):
    """Base exception for one-wire sensor read errors."""


class DeviceNotFoundError(SensorError):
    """Raised when a sensor's status file cannot be opened."""


class TransientReadError(SensorError):
    """Raised when a reading is incomplete or corrupted and should be retried."""


class ChecksumError(TransientReadError):
    """Raised when the driver flags the reading with a failed CRC."""


class AcquisitionCancelledError(W1TempError):
    """Raised when the shutdown token fires while sensors are still being read."""


class DatabaseError(W1TempError):
    """Base exception for database-related errors."""


class DatabaseNotConnectedError(DatabaseError):
    """Raised when attempting database operations without a connection."""

    def __init__(self, message: str = "Database not connected") -> None:
        super().__init__(message)


class StoreOpenError(DatabaseError):
    """Raised when a configured store path cannot be opened."""

    def __init__(self, path: str, reason: object) -> None:
        super().__init__(f"Cannot open store {path}: {reason}")
        self.path = path
