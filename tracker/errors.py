"""Exceptions raised by the tracker."""

from typing import Optional


class TrackerError(Exception):
    """Base exception for tracker errors."""


class InvalidArgument(TrackerError, ValueError):
    """Raised when a swap quote is requested for a non-positive amount."""


class TransientFetchError(TrackerError):
    """Network failure, timeout or non-success response from the data source."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class PoolNotFound(TrackerError):
    """Expected pool is missing from a fetched pool set."""

    def __init__(self, address: str):
        super().__init__(f"Pool {address} not found")
        self.address = address


class ParseError(TrackerError):
    """Payload from the data source could not be decoded."""


class NotificationError(TrackerError):
    """Notification sink failed to deliver a message."""


class MonitorStopped(TrackerError):
    """Raised from a clock sleep once shutdown has been requested."""
