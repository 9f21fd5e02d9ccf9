"""Exceptions raised by the MFWS client.

All errors derive from :class:`MFWSError` and propagate to the caller
unmodified; nothing in this package retries or reports partial success.
"""

from __future__ import annotations


class MFWSError(Exception):
    """Base class for all errors raised by this package."""

    def __init__(self, message: str | None = None):
        if not message:
            message = "Unspecified problem accessing the M-Files Web Service"
        super().__init__(message)


class InvalidArgumentError(MFWSError, ValueError):
    """A required argument was absent or malformed.

    Always raised before any request is sent.
    """


class TransportError(MFWSError):
    """The service answered with a non-success status or could not be reached."""

    def __init__(
        self,
        message: str | None = None,
        *,
        url: str | None = None,
        status_code: int = 0,
        body: str | None = None,
    ):
        """Create the exception.

        Args:
            message: An explanation of the failure; built from the other
                fields if omitted.
            url: The endpoint that was being accessed.
            status_code: The HTTP status returned, or 0 if the service never
                responded.
            body: The response body as text, when one was received.
        """
        if not message:
            message = "Error accessing the M-Files Web Service"
            if url:
                message += f" at {url}"
            if status_code:
                message += f" ({status_code})"
            if body:
                message += f": {body}"
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.body = body


class CancellationError(MFWSError):
    """The caller's cancellation token fired while an operation was in flight."""

    def __init__(self, message: str | None = None):
        super().__init__(message or "The operation was cancelled")
