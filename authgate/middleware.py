"""
WSGI middleware that gates requests on a remote verification check.

The gate sits in front of another WSGI application. For each request it
reads the ``x-api-key`` and ``x-account`` headers, asks the verification
endpoint about them, and only if the endpoint is satisfied does it hand the
request on, setting a ``token`` cookie on the way out:

.. code-block:: python

   from flask import Flask
   from authgate.domain import GateConfig
   from authgate.middleware import RequestGate

   app = Flask('someapp')
   config = GateConfig(endpoint='http://auth-service/verify', timeout=5)
   app.wsgi_app = RequestGate(app.wsgi_app, config, 'auth_cookie')

Every failure is answered by the gate itself; the wrapped application is
never called for a request that did not verify.
"""

import json
from http import HTTPStatus
from typing import Callable, Iterable, Optional

from flask import Flask
from werkzeug.wrappers import Response

from . import logging
from .domain import GateConfig, VerificationRequest, SessionCookie
from .exceptions import ClientAuthorizationError, UpstreamTransportError, \
    UpstreamRejection, ResponseDecodeError
from .services.verification import VerificationService, parse_endpoint

logger = logging.getLogger(__name__)

WSGIApp = Callable[[dict, Callable], Iterable[bytes]]


def _error(message: str, status: int) -> Response:
    return Response(json.dumps({'error': message}), status=status,
                    mimetype='application/json')


class RequestGate(object):
    """
    Verifies credential headers with a remote endpoint before passing on.

    Parameters
    ----------
    wsgi_app : callable
        The next WSGI application; called only for verified requests.
    config : :class:`.GateConfig`
    name : str
        Label for this gate, used in log messages.

    Raises
    ------
    :class:`.ConfigurationError`
        If the configured endpoint is empty or not a valid URL.

    """

    def __init__(self, wsgi_app: WSGIApp, config: GateConfig,
                 name: str = '') -> None:
        host, path = parse_endpoint(config.endpoint)
        self.wsgi_app = wsgi_app
        self.config = config
        self.name = name
        self.verifier = VerificationService(host, path,
                                            config.resolved_timeout)
        logger.debug('Gate %s will verify at %s', name, self.verifier.url)

    def __call__(self, environ: dict, start_response: Callable) \
            -> Iterable[bytes]:
        """Handle a single request."""
        try:
            cookie = self.authorize(environ)
        except ClientAuthorizationError as e:
            logger.info('%s: %s', self.name, e)
            response = _error('Unauthorized', HTTPStatus.UNAUTHORIZED)
        except UpstreamTransportError as e:
            logger.error('%s: verification failed: %s', self.name, e)
            response = _error('Internal error',
                              HTTPStatus.INTERNAL_SERVER_ERROR)
        except UpstreamRejection as e:
            logger.info('%s: %s', self.name, e)
            response = Response(e.body, status=e.status_code,
                                content_type=e.content_type)
        except ResponseDecodeError as e:
            logger.error('%s: bad verification response: %s', self.name, e)
            response = _error('Internal error',
                              HTTPStatus.INTERNAL_SERVER_ERROR)
        else:
            return self.wsgi_app(environ,
                                 self._with_cookie(start_response, cookie))
        return response(environ, start_response)

    def authorize(self, environ: dict) -> SessionCookie:
        """
        Verify the credentials on a request, and get a session cookie.

        Raises
        ------
        :class:`.ClientAuthorizationError`
            If either credential header is missing or empty.
        :class:`.UpstreamTransportError`
        :class:`.UpstreamRejection`
        :class:`.ResponseDecodeError`
            See :meth:`.VerificationService.verify`.

        """
        credentials = VerificationRequest.from_environ(environ)
        if not credentials.is_complete:
            raise ClientAuthorizationError('Missing credential headers')
        return SessionCookie.from_response(self.verifier.verify(credentials))

    @staticmethod
    def _with_cookie(start_response: Callable,
                     cookie: SessionCookie) -> Callable:
        """Wrap ``start_response`` so that the cookie goes out with it."""
        def start_response_with_cookie(status: str, headers: list,
                                       exc_info: Optional[tuple] = None):
            headers = list(headers) + [('Set-Cookie', cookie.dump())]
            return start_response(status, headers, exc_info)
        return start_response_with_cookie


def create_gate(config: GateConfig, next_app: WSGIApp,
                name: str = '') -> RequestGate:
    """Build a gate in front of ``next_app``."""
    return RequestGate(next_app, config, name)


def init_app(app: Flask) -> None:
    """
    Install a gate in front of a Flask application.

    Uses ``AUTH_ENDPOINT``, ``AUTH_TIMEOUT`` and ``GATE_NAME`` from the
    application config.

    Parameters
    ----------
    app : :class:`Flask`

    """
    config = GateConfig(endpoint=app.config.get('AUTH_ENDPOINT', ''),
                        timeout=app.config.get('AUTH_TIMEOUT'))
    name = app.config.get('GATE_NAME', app.name)
    app.wsgi_app = create_gate(config, app.wsgi_app, name)
