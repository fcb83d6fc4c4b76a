"""Error taxonomy for the fare-estimation pipeline.

- ``LocationNotFound``: a resolver exhausted both the live geocoder and the gazetteer.
- ``InvalidLocation``: user-facing, reported as a client error naming the input.
- ``TransientUpstreamFailure``: geocoder/router unreachable; always absorbed.
- ``InternalRecoveryFailure``: the last-resort recovery stage could not help.
"""
from __future__ import annotations

from typing import Optional


class FareCompareError(Exception):
    """Base class for every error raised by fare_compare."""


class LocationNotFound(FareCompareError):
    def __init__(self, query: str):
        super().__init__(f"No coordinate found for '{query}'")
        self.query = query


class InvalidLocation(FareCompareError):
    def __init__(self, message: str, query: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.query = query

    @classmethod
    def blank(cls) -> "InvalidLocation":
        return cls("Please select valid pickup/drop location.")

    @classmethod
    def not_found(cls, query: str) -> "InvalidLocation":
        return cls(
            f"Could not find location: {query}. Please try a more specific address.",
            query=query,
        )


class TransientUpstreamFailure(FareCompareError):
    def __init__(self, service: str, reason: str):
        super().__init__(f"{service}: {reason}")
        self.service = service
        self.reason = reason


class InternalRecoveryFailure(FareCompareError):
    def __init__(
        self,
        message: str = (
            "Unable to determine locations. Please use more specific addresses or city names."
        ),
    ):
        super().__init__(message)
        self.message = message
