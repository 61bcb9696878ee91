# Pre-built frontend bundle with single-page-app fallback

import logging
import os

from flask import Blueprint, abort, current_app, send_from_directory
from werkzeug.utils import safe_join

logger = logging.getLogger(__name__)

frontend_bp = Blueprint('frontend', __name__)

INDEX_FILE = 'index.html'


@frontend_bp.route('/', defaults={'path': ''})
@frontend_bp.route('/<path:path>')
def serve_frontend(path):
    # Existing bundle files are served directly, anything else gets the
    # index page so client-side routing can take over
    dist = current_app.config['FRONTEND_DIST']

    if path:
        candidate = safe_join(dist, path)
        if candidate and os.path.isfile(candidate):
            return send_from_directory(dist, path)

    if not os.path.isfile(os.path.join(dist, INDEX_FILE)):
        logger.error("Frontend bundle index not found in %s", dist)
        abort(404)

    return send_from_directory(dist, INDEX_FILE)
