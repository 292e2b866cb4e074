"""
Error types raised by the SkyTracker core.

Every error wraps its underlying cause via exception chaining. None of
them is retried internally; callers decide what to do.
"""


class SkyTrackerError(Exception):
    """Base class for all SkyTracker errors."""


class AuthFailure(SkyTrackerError):
    """Could not obtain an access token from the credential endpoint."""


class UpstreamUnavailable(SkyTrackerError):
    """Transport failure or non-2xx status from an upstream service."""


class UpstreamResponseInvalid(SkyTrackerError):
    """Upstream answered, but the body could not be decoded."""


class DecodeError(SkyTrackerError):
    """A single state vector row could not be turned into a FlightState."""


class ResultTooLarge(SkyTrackerError):
    """
    A bulk query returned more rows than a client can reasonably consume.

    Carries the actual row count and the configured ceiling.
    """

    def __init__(self, count: int, max_results: int):
        super().__init__(
            f'Query returned {count} flights, which exceeds the maximum '
            f'allowed limit of {max_results} flights'
        )
        self.count = count
        self.max_results = max_results
