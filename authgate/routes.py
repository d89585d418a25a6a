"""Downstream routes, reached only by requests that pass the gate."""

from flask import Blueprint

METHODS = ['GET', 'HEAD', 'POST', 'PUT', 'PATCH', 'DELETE', 'OPTIONS']

blueprint = Blueprint('downstream', __name__, url_prefix='')


@blueprint.route('/', defaults={'path': ''}, methods=METHODS)
@blueprint.route('/<path:path>', methods=METHODS)
def downstream(path: str) -> str:
    """Acknowledge a verified request."""
    return 'OK'
