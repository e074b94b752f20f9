"""Custom exception hierarchy for pyswapi."""

from __future__ import annotations


class SwapiError(Exception):
    """Base exception for all pyswapi errors."""


class SwapiConfigError(SwapiError):
    """Invalid or missing configuration."""


class SwapiTransportError(SwapiError):
    """HTTP-level failure (network, non-2xx, invalid JSON).

    This is the only error kind resource fetches produce.  Timeouts, DNS
    failures, 404s and server errors all collapse into it; the message is
    the API's ``detail`` field when the server supplied one.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str = "",
    ) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message)
