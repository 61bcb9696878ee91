# Miscellaneous API routes: health check and the /api 404 fallback

from flask import Blueprint, current_app, jsonify, request
from werkzeug.exceptions import HTTPException, MethodNotAllowed

api_bp = Blueprint('api', __name__, url_prefix='/api')

API_METHODS = ['GET', 'HEAD', 'POST', 'PUT', 'PATCH', 'DELETE']


@api_bp.route('/health', methods=['GET'])
def health():
    return jsonify({'status': 'ok'})


def methods_for_path():
    # Methods some other API route accepts for the requested path
    adapter = current_app.url_map.bind_to_environ(request.environ)
    allowed = []
    for method in API_METHODS:
        try:
            endpoint, _ = adapter.match(method=method)
        except HTTPException:
            continue
        if endpoint != request.endpoint:
            allowed.append(method)
    return allowed


# Unknown API paths get a JSON 404 instead of the SPA index page; known
# paths hit with the wrong method get a 405
@api_bp.route('', defaults={'path': ''}, methods=API_METHODS)
@api_bp.route('/<path:path>', methods=API_METHODS)
def not_found(path):
    allowed = methods_for_path()
    if allowed:
        raise MethodNotAllowed(valid_methods=allowed)
    return jsonify({'error': 'not found'}), 404
