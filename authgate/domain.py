"""Defines the values that flow through the gate for a single request."""

from typing import Any, Mapping, NamedTuple, Optional

from werkzeug.http import dump_cookie

from .exceptions import ResponseDecodeError

DEFAULT_TIMEOUT = 30.0
"""Seconds to wait on the verification endpoint when no timeout is set."""

API_KEY_HEADER = 'x-api-key'
ACCOUNT_HEADER = 'x-account'


class GateConfig(NamedTuple):
    """Configuration for a :class:`.RequestGate`."""

    endpoint: str
    """Absolute URL of the verification endpoint."""

    timeout: Optional[float] = DEFAULT_TIMEOUT
    """Bound on the outbound call, in seconds."""

    @property
    def resolved_timeout(self) -> float:
        """The timeout to use; unset, zero or negative means the default."""
        if not self.timeout or self.timeout <= 0:
            return DEFAULT_TIMEOUT
        return float(self.timeout)


def default_config() -> GateConfig:
    """Get a config with no endpoint and the default timeout."""
    return GateConfig(endpoint='', timeout=DEFAULT_TIMEOUT)


class VerificationRequest(NamedTuple):
    """Credentials taken from an inbound request."""

    api_key: str
    account: str

    @property
    def is_complete(self) -> bool:
        """Both credentials are present and non-empty."""
        return bool(self.api_key) and bool(self.account)

    @property
    def headers(self) -> dict:
        """Headers to send to the verification endpoint."""
        return {API_KEY_HEADER: self.api_key, ACCOUNT_HEADER: self.account}

    @classmethod
    def from_environ(cls, environ: Mapping[str, Any]) \
            -> 'VerificationRequest':
        """Read the credential headers from a WSGI environ."""
        return cls(api_key=environ.get('HTTP_X_API_KEY', ''),
                   account=environ.get('HTTP_X_ACCOUNT', ''))


class VerificationResponse(NamedTuple):
    """What the verification endpoint tells us about a successful check."""

    access_token: str = ''

    @classmethod
    def from_data(cls, data: Any) -> 'VerificationResponse':
        """
        Interpret decoded JSON from the verification endpoint.

        A missing or ``null`` ``accessToken`` yields an empty token. The
        member name is matched exactly first, then without regard to case.

        Raises
        ------
        :class:`.ResponseDecodeError`
            If ``data`` is not an object (or ``null``), or the token is not a
            string.

        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ResponseDecodeError(
                f'Expected an object, got {type(data).__name__}'
            )
        token = data.get('accessToken')
        if 'accessToken' not in data:
            for key, value in data.items():
                if key.lower() == 'accesstoken':
                    token = value
                    break
        if token is None:
            return cls()
        if not isinstance(token, str):
            raise ResponseDecodeError('accessToken is not a string')
        return cls(access_token=token)


class SessionCookie(NamedTuple):
    """The cookie issued to the client after a successful verification."""

    value: str
    name: str = 'token'
    path: str = '/'
    http_only: bool = True
    secure: bool = True

    @classmethod
    def from_response(cls, response: VerificationResponse) -> 'SessionCookie':
        """Build a session cookie carrying the access token."""
        return cls(value=response.access_token)

    def dump(self) -> str:
        """Render the value of a ``Set-Cookie`` header."""
        return dump_cookie(self.name, self.value, path=self.path,
                           secure=self.secure, httponly=self.http_only)
