# Authentication routes

import logging
import re

from flask import Blueprint, request, jsonify
from flask_login import login_user, logout_user, current_user, login_required
from flask_wtf.csrf import generate_csrf
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.security import generate_password_hash, check_password_hash

from chatapp.errors import get_client_ip
from chatapp.extensions import db
from chatapp.models import User
from chatapp.routes.users import user_payload

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__, url_prefix='/api/auth')


def validate_username(username):
    # Validate username format and length
    if not username or len(username) < 3:
        return False, "user name should be at least 3 characters long"

    if len(username) > 30:
        return False, "user name should be less than 30 characters long"

    # Only alphanumeric, hyphens, underscores
    if not re.match(r'^[a-zA-Z0-9_-]+$', username):
        return False, "user name can only contain letters, numbers, hyphens, and underscores"

    return True, ""


def validate_password(password):
    # Validate password strength
    if not password or len(password) < 8:
        return False, "password should be at least 8 characters long"

    if len(password) > 100:
        return False, "password should be less than 100 characters long"

    has_upper = any(c.isupper() for c in password)
    has_lower = any(c.islower() for c in password)
    has_digit = any(c.isdigit() for c in password)

    if not (has_upper and has_lower and has_digit):
        return False, "password should contain at least one uppercase letter, one lowercase letter, and one digit"

    return True, ""


@auth_bp.route('/csrf-token', methods=['GET'])
def csrf_token():
    # Hand the SPA a token bound to its session cookie
    return jsonify({'csrf_token': generate_csrf()})


@auth_bp.route('/signup', methods=['POST'])
def signup():
    data = request.get_json(silent=True) or {}
    full_name = (data.get('full_name') or '').strip()
    username = (data.get('username') or '').strip()
    password = data.get('password') or ''
    confirm_password = data.get('confirm_password') or ''

    if not full_name:
        return jsonify({'error': 'full name is required'}), 400

    is_valid, msg = validate_username(username)
    if not is_valid:
        return jsonify({'error': msg}), 400

    is_valid, msg = validate_password(password)
    if not is_valid:
        return jsonify({'error': msg}), 400

    if password != confirm_password:
        return jsonify({'error': 'passwords do not match'}), 400

    if User.query.filter_by(username=username).first():
        return jsonify({'error': 'username already taken'}), 400

    new_user = User(
        username=username,
        full_name=full_name,
        password=generate_password_hash(password, method='scrypt'),
        profile_pic=data.get('profile_pic') or None
    )
    try:
        db.session.add(new_user)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Signup failed for %s", username)
        return jsonify({'error': 'error while creating account'}), 500

    login_user(new_user)
    logger.info("New account %s (id=%s) from %s", username, new_user.id, get_client_ip())
    return jsonify(user_payload(new_user)), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    data = request.get_json(silent=True) or {}
    username = (data.get('username') or '').strip()
    password = data.get('password') or ''

    user = User.query.filter_by(username=username).first() if username else None
    if not user or not check_password_hash(user.password, password):
        logger.info("Failed login for %r from %s", username, get_client_ip())
        return jsonify({'error': 'invalid username or password'}), 400

    login_user(user)
    logger.info("User %s (id=%s) logged in", user.username, user.id)
    return jsonify(user_payload(user))


@auth_bp.route('/logout', methods=['POST'])
def logout():
    if current_user.is_authenticated:
        logger.info("User %s (id=%s) logged out", current_user.username, current_user.id)
    logout_user()
    return jsonify({'message': 'logged out successfully'})


@auth_bp.route('/me', methods=['GET'])
@login_required
def me():
    return jsonify(user_payload(current_user))
