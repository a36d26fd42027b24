"""
Exceptions raised by the remote service client.

Every error derives from :class:`MaskitServiceError`, so callers can catch a
single class and still tell transport problems from bad responses.
"""
from typing import Optional


class MaskitServiceError(Exception):
    """Base class for failures talking to the MasKIT / SouDeC services."""

    def __init__(self, message: str, status_code: Optional[int] = None, response_text: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_text = response_text


class ServiceUnavailableError(MaskitServiceError):
    """The service could not be reached (connection error or timeout)."""


class ServiceResponseError(MaskitServiceError):
    """The service answered with an error status or a body that is not JSON."""
