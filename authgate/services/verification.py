"""
Integration with the remote verification endpoint.

The endpoint is treated as a black box: it receives the client's credential
headers on a ``GET`` and, if it likes them, responds ``200`` with a JSON body
of the form ``{"accessToken": "..."}``.
"""

import json
import re
import time
from typing import Any, Tuple
from urllib.parse import urlsplit

import requests
from urllib3 import Timeout

from .. import logging
from ..domain import VerificationRequest, VerificationResponse
from ..exceptions import ConfigurationError, UpstreamTransportError, \
    UpstreamRejection, ResponseDecodeError

logger = logging.getLogger(__name__)

READ_CHUNK_SIZE = 1
"""One byte per read, so the deadline is checked as each byte arrives."""

CONTROL_CHARACTERS = re.compile(r'[\x00-\x1f\x7f]')
HOST = re.compile(r"^[A-Za-z0-9\-._~!$&'()*+,;=:\[\]%]+$")
BAD_ESCAPE = re.compile(r'%(?![0-9A-Fa-f]{2})')


def _reject_constant(name: str) -> Any:
    raise ValueError(f'{name} is not valid JSON')


def parse_endpoint(endpoint: str) -> Tuple[str, str]:
    """
    Get the host and path of the verification endpoint URL.

    Parameters
    ----------
    endpoint : str
        An absolute URL, e.g. ``http://auth-service/verify``.

    Returns
    -------
    tuple
        Host (including any port) and path. The scheme, query and fragment
        are discarded.

    Raises
    ------
    :class:`.ConfigurationError`
        If ``endpoint`` is empty or is not a valid absolute URL.

    """
    if not endpoint:
        raise ConfigurationError('Verification endpoint cannot be empty')
    if CONTROL_CHARACTERS.search(endpoint):
        raise ConfigurationError(
            'Verification endpoint has control characters'
        )
    try:
        parts = urlsplit(endpoint)
        parts.port      # Raises ValueError if the port is garbage.
    except ValueError as e:
        raise ConfigurationError(f'Invalid verification endpoint: {e}') from e
    if not parts.scheme or not parts.netloc or not parts.hostname:
        raise ConfigurationError(
            f'Verification endpoint must be an absolute URL: {endpoint}'
        )
    if not HOST.match(parts.netloc.rpartition('@')[2]):
        raise ConfigurationError(f'Invalid host in endpoint: {endpoint}')
    if BAD_ESCAPE.search(parts.path):
        raise ConfigurationError(f'Invalid escape in endpoint: {endpoint}')
    return parts.netloc, parts.path


class VerificationService(object):
    """
    Calls the verification endpoint on behalf of an inbound request.

    Instances hold only immutable configuration; each call to
    :meth:`verify` makes a fresh, independent round trip, so a single
    instance can be shared between threads.
    """

    def __init__(self, host: str, path: str, timeout: float) -> None:
        self.host = host
        self.path = path
        self.timeout = timeout

    @property
    def url(self) -> str:
        """Outbound URL. Always plain HTTP, whatever the configured scheme."""
        return f'http://{self.host}{self.path}'

    def verify(self, credentials: VerificationRequest) \
            -> VerificationResponse:
        """
        Ask the verification endpoint about a set of credentials.

        Parameters
        ----------
        credentials : :class:`.VerificationRequest`

        Returns
        -------
        :class:`.VerificationResponse`

        Raises
        ------
        :class:`.UpstreamTransportError`
            If the endpoint can't be reached, doesn't respond in time, or the
            response body can't be read.
        :class:`.UpstreamRejection`
            If the endpoint responds with anything other than ``200``.
        :class:`.ResponseDecodeError`
            If the endpoint responds ``200`` with a body we can't interpret.

        """
        logger.debug('Verifying credentials at %s', self.url)
        deadline = time.monotonic() + self.timeout
        try:
            response = requests.get(self.url, headers=credentials.headers,
                                    timeout=Timeout(total=self.timeout),
                                    stream=True)
        except requests.exceptions.RequestException as e:
            raise UpstreamTransportError(f'Request failed: {e}') from e

        try:
            body = self._read(response, deadline)
        except requests.exceptions.RequestException as e:
            raise UpstreamTransportError(f'Could not read body: {e}') from e
        finally:
            response.close()

        if response.status_code != requests.codes.ok:
            logger.debug('Endpoint responded with status %i',
                         response.status_code)
            raise UpstreamRejection(response.status_code, body,
                                    response.headers.get('Content-Type'))
        try:
            data = json.loads(body, parse_constant=_reject_constant)
        except ValueError as e:     # Includes bad encodings.
            raise ResponseDecodeError(f'Not valid JSON: {e}') from e
        return VerificationResponse.from_data(data)

    @staticmethod
    def _read(response: requests.Response, deadline: float) -> bytes:
        """Read the whole body, giving up once ``deadline`` has passed."""
        chunks = []
        for chunk in response.iter_content(chunk_size=READ_CHUNK_SIZE):
            if time.monotonic() > deadline:
                raise UpstreamTransportError('Timed out reading body')
            chunks.append(chunk)
        return b''.join(chunks)
