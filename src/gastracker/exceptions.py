"""Custom exceptions for the gas price tracker.

Source and chart errors live here so the tracker, the chart helpers
and the dashboard can share them without importing each other.
"""


class TrackerError(Exception):
    """Base exception for all tracker errors."""


class SourceUnavailableError(TrackerError):
    """Raised when a gas price source cannot produce a usable price.

    Covers transport failures, undecodable payloads and non-success
    statuses. The tracker recovers from it by substituting a fallback
    price, so it never reaches the dashboard.
    """


class EmptyInputError(TrackerError, ValueError):
    """Raised when a price range is requested for an empty series."""
