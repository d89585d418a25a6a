"""Exceptions raised while gating a request."""

from typing import Optional


class ConfigurationError(RuntimeError):
    """The gate is not configured correctly."""


class ClientAuthorizationError(ValueError):
    """The request does not carry the required credential headers."""


class UpstreamTransportError(IOError):
    """Could not complete a round trip to the verification endpoint."""


class UpstreamRejection(RuntimeError):
    """The verification endpoint responded with a non-success status."""

    def __init__(self, status_code: int, body: bytes,
                 content_type: Optional[str] = None) -> None:
        super(UpstreamRejection, self).__init__(
            f'Verification endpoint responded with {status_code}'
        )
        self.status_code = status_code
        self.body = body
        self.content_type = content_type


class ResponseDecodeError(ValueError):
    """The verification endpoint responded with something we can't read."""
