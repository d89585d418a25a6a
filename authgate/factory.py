"""Provides an app factory for the gate."""

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from . import routes, middleware


def jsonify_exception(error: HTTPException):
    exc_resp = error.get_response()
    response = jsonify(error=error.description)
    response.status_code = exc_resp.status_code
    return response


def create_app() -> Flask:
    """Initialize a gated application."""
    app = Flask('authgate')
    app.config.from_pyfile('config.py')

    app.register_blueprint(routes.blueprint)
    app.errorhandler(HTTPException)(jsonify_exception)

    middleware.init_app(app)
    return app
