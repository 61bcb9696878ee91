# Flask application factory

import logging
import os

from flask import Flask, jsonify
from werkzeug.middleware.proxy_fix import ProxyFix

from chatapp.extensions import db, socketio, login_manager

logger = logging.getLogger(__name__)

# Project root (where run.py is located); relative bundle paths resolve from here
ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def create_app(config=None):
    # Create and configure Flask application
    # Socket handlers must be registered before socketio.init_app so every
    # app built by this factory gets them
    import chatapp.sockets  # noqa: F401

    flask_app = Flask(__name__, static_folder=None)

    # Load config: module defaults first, then explicit overrides
    flask_app.config.from_object('config')
    if isinstance(config, dict):
        flask_app.config.from_mapping(config)
    elif config:
        flask_app.config.from_object(config)
    flask_app.config['FRONTEND_DIST'] = os.path.join(ROOT_DIR, flask_app.config['FRONTEND_DIST'])

    if flask_app.config['TRUST_PROXY']:
        hops = flask_app.config['TRUST_PROXY']
        flask_app.wsgi_app = ProxyFix(flask_app.wsgi_app, x_for=hops, x_proto=hops, x_host=hops)

    # Initialize extensions
    db.init_app(flask_app)
    socketio.init_app(
        flask_app,
        async_mode=flask_app.config['SOCKETIO_ASYNC_MODE'],
        cors_allowed_origins=flask_app.config['CORS_ORIGINS']
    )
    login_manager.init_app(flask_app)

    from chatapp.security import init_security
    from chatapp.errors import register_error_handlers
    init_security(flask_app)
    register_error_handlers(flask_app)

    # API clients get a JSON 401 instead of a login redirect
    @login_manager.unauthorized_handler
    def _unauthorized():
        return jsonify({'error': 'unauthorized'}), 401

    @login_manager.user_loader
    def load_user(user_id):
        from chatapp.models import User
        return db.session.get(User, int(user_id))

    # Register blueprints; the SPA catch-all goes last
    from chatapp.routes import auth_bp, messages_bp, users_bp, api_bp, frontend_bp
    flask_app.register_blueprint(auth_bp)
    flask_app.register_blueprint(messages_bp)
    flask_app.register_blueprint(users_bp)
    flask_app.register_blueprint(api_bp)
    flask_app.register_blueprint(frontend_bp)

    from chatapp.database import connect_to_database
    with flask_app.app_context():
        connect_to_database()

    return flask_app
