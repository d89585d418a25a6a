"""Flask configuration for the gate."""

import os

from authgate.exceptions import ConfigurationError

AUTH_ENDPOINT = os.environ.get('AUTH_ENDPOINT', '')
"""Absolute URL of the verification endpoint. Required."""

AUTH_TIMEOUT = os.environ.get('AUTH_TIMEOUT', '30')
"""Seconds to wait for the verification endpoint."""

try:
    AUTH_TIMEOUT = float(AUTH_TIMEOUT)
except ValueError as e:
    raise ConfigurationError(
        f'AUTH_TIMEOUT must be a number of seconds: {e}'
    ) from e

GATE_NAME = os.environ.get('GATE_NAME', 'auth_cookie')
