# User listing routes (sidebar and profiles)

from flask import Blueprint, request, jsonify
from flask_login import login_required, current_user

from chatapp.extensions import db
from chatapp.models import User

users_bp = Blueprint('users', __name__, url_prefix='/api/users')


def iso(value):
    return value.strftime('%Y-%m-%dT%H:%M:%SZ') if value else None


def user_payload(user):
    # Public view of a user; never includes the password hash
    return {
        'id': user.id,
        'username': user.username,
        'full_name': user.full_name,
        'profile_pic': user.profile_pic,
        'presence_status': user.presence_status or 'offline',
        'last_seen_iso': iso(user.last_seen)
    }


@users_bp.route('', methods=['GET'])
@login_required
def get_users_for_sidebar():
    # Everyone except the current user, optionally filtered by ?q=
    query = User.query.filter(User.id != current_user.id)

    search = request.args.get('q', type=str)
    if search is not None:
        search = search.strip()
        if len(search) < 2:
            return jsonify({'error': 'query too short'}), 400
        query = query.filter(User.username.ilike(f'%{search}%'))

    users = query.order_by(User.username).all()
    return jsonify({'users': [user_payload(u) for u in users]})


@users_bp.route('/<int:user_id>', methods=['GET'])
@login_required
def get_user_profile(user_id):
    user = db.get_or_404(User, user_id, description='user not found')
    return jsonify(user_payload(user))
