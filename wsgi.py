"""Web Server Gateway Interface entry-point."""

import os

from authgate.factory import create_app

__flask_app__ = None


def application(environ, start_response):
    """WSGI application factory."""
    for key, value in environ.items():
        if key in ('AUTH_ENDPOINT', 'AUTH_TIMEOUT', 'GATE_NAME', 'LOGLEVEL'):
            os.environ[key] = str(value)
    global __flask_app__
    if __flask_app__ is None:
        __flask_app__ = create_app()
    return __flask_app__(environ, start_response)
