# JSON error responses for API routes

import logging

from flask import jsonify, request
from flask_wtf.csrf import CSRFError
from werkzeug.exceptions import HTTPException, MethodNotAllowed

logger = logging.getLogger(__name__)


def is_api_request():
    return request.path == '/api' or request.path.startswith('/api/')


def get_client_ip():
    # remote_addr already honours ProxyFix when TRUST_PROXY is set
    return request.remote_addr


def register_error_handlers(flask_app):

    @flask_app.errorhandler(CSRFError)
    def handle_csrf_error(e):
        logger.warning("CSRF check failed for %s %s from %s: %s",
                       request.method, request.path, get_client_ip(), e.description)
        return jsonify({'error': 'invalid csrf token'}), 403

    @flask_app.errorhandler(429)
    def handle_rate_limit(e):
        logger.warning("Rate limit exceeded for %s on %s", get_client_ip(), request.path)
        return jsonify({'error': e.description}), 429

    @flask_app.errorhandler(HTTPException)
    def handle_http_error(e):
        if not is_api_request():
            return e
        response = jsonify({'error': e.description})
        response.status_code = e.code
        if isinstance(e, MethodNotAllowed) and e.valid_methods:
            response.headers['Allow'] = ', '.join(e.valid_methods)
        return response

    @flask_app.errorhandler(500)
    def handle_internal_error(e):
        original = getattr(e, 'original_exception', None)
        logger.error("Unhandled error on %s %s", request.method, request.path,
                     exc_info=original or e)
        if not is_api_request():
            return e
        return jsonify({'error': 'internal server error'}), 500
