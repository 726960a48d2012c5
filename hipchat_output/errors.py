"""Errors raised by the HipChat output plugin."""

from typing import Optional


class HipchatOutputError(Exception):
    """Base class for every error the output reports."""


class ConfigurationError(HipchatOutputError):
    """Invalid plugin configuration. Fatal at startup."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"{field}: {reason}")


class SerializationError(HipchatOutputError):
    """The message could not be serialized to JSON."""


class TransportError(HipchatOutputError):
    """The request never got a response (connection error, timeout)."""


class RemoteStatusError(HipchatOutputError):
    """HipChat answered with one of the documented error statuses."""

    def __init__(self, status_code: int, cause: str):
        self.status_code = status_code
        self.cause = cause
        super().__init__(f"HipChat returned {status_code}: {cause}")


class ResponseDecodeError(HipchatOutputError):
    """The response body was not the expected JSON document."""


class NotSentError(HipchatOutputError):
    """HipChat accepted the request but did not report the message as sent."""

    def __init__(self, status: Optional[str]):
        self.status = status
        super().__init__(f"Status response was not sent (got {status!r})")
