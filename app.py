"""Flask API + static file server for the demo application.

Run:
  pip install -e .
  python -m main serve

The app serves static files from `web/` and exposes three JSON endpoints under `/api/`.
There is no state between requests: handlers only read the clock and a constant.
"""
from flask import Flask, request, jsonify
from pydantic import ValidationError
from werkzeug.exceptions import BadRequest, InternalServerError

from config import Config
from models import (
    APPLICATION_INFO,
    EchoRequest,
    EchoResponse,
    ErrorResponse,
    HealthStatus,
    utcnow,
)

CORS_ALLOW_METHODS = 'GET,HEAD,PUT,PATCH,POST,DELETE'


def _json(model, status=200):
    return jsonify(model.model_dump(mode='json')), status


def _error(message, status):
    return _json(ErrorResponse(error=message), status)


def create_app(config=None):
    """Build the Flask app for `config` (defaults to Config())."""
    config = config or Config()
    app = Flask(__name__, static_folder=str(config.static_root), static_url_path='')
    app.config['DEMO_CONFIG'] = config

    # CORS: any origin, on every route including static files and errors.
    @app.before_request
    def cors_preflight():
        if request.method == 'OPTIONS':
            return '', 204

    @app.after_request
    def add_cors_headers(response):
        response.headers['Access-Control-Allow-Origin'] = '*'
        if request.method == 'OPTIONS':
            response.headers['Access-Control-Allow-Methods'] = CORS_ALLOW_METHODS
            requested = request.headers.get('Access-Control-Request-Headers')
            if requested:
                response.headers['Access-Control-Allow-Headers'] = requested
                response.vary.add('Access-Control-Request-Headers')
        return response

    @app.route('/')
    def index():
        return app.send_static_file('index.html')

    @app.route('/api/health')
    def api_health():
        return _json(HealthStatus(timestamp=utcnow()))

    @app.route('/api/data')
    def api_data():
        return _json(APPLICATION_INFO)

    @app.route('/api/echo', methods=['POST'])
    def api_echo():
        # malformed JSON raises BadRequest here, before any validation
        data = request.get_json() if request.is_json else None
        if not isinstance(data, dict):
            data = {}
        try:
            body = EchoRequest.model_validate(data)
        except ValidationError:
            app.logger.debug("Rejected echo with non-string message: %r", data.get('message'))
            return _error('Message must be a string', 400)
        # whitespace-only messages pass; the browser client trims, the server does not
        if not body.message:
            app.logger.debug("Rejected echo without message")
            return _error('Message is required', 400)
        return _json(EchoResponse(received=body.message, timestamp=utcnow()))

    @app.errorhandler(BadRequest)
    def handle_bad_request(e):
        if request.path.startswith('/api/'):
            return _error('Malformed JSON body', 400)
        return e

    @app.errorhandler(InternalServerError)
    def handle_internal_error(e):
        # Flask has already logged the original exception with its traceback
        return _error('Internal Server Error', 500)

    return app
