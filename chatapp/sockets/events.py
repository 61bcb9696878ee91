# Socket.IO event handlers

import logging
from datetime import datetime

from flask import request
from flask_login import current_user
from flask_socketio import join_room
from sqlalchemy.exc import SQLAlchemyError

from chatapp.extensions import db, socketio
from chatapp.models import User

logger = logging.getLogger(__name__)


def user_room(user_id):
    # Personal room every connection of a user joins
    return f"user_{user_id}"


def online_user_ids():
    rows = db.session.query(User.id).filter(User.presence_status == 'online').order_by(User.id).all()
    return [row.id for row in rows]


def _has_other_connections(user_id):
    # The closing connection is still a room member while its disconnect handler runs
    try:
        participants = socketio.server.manager.get_participants('/', user_room(user_id))
        return any(sid != request.sid for sid, _ in participants)
    except KeyError:
        return False


def _set_presence(status):
    current_user.presence_status = status
    current_user.last_seen = datetime.utcnow() if status == 'offline' else None
    db.session.commit()


@socketio.on('connect')
def on_connect(auth=None):
    # Only logged-in users get a socket; refusing returns an error to the client
    if not current_user.is_authenticated:
        logger.info("[SOCKET CONNECT] refused unauthenticated connection")
        return False

    join_room(user_room(current_user.id))
    try:
        _set_presence('online')
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("[SOCKET CONNECT] could not mark user %s online", current_user.id)
        return False

    logger.info("[SOCKET CONNECT] user %s (%s) connected", current_user.id, current_user.username)
    socketio.emit('online_users', online_user_ids())


@socketio.on('disconnect')
def on_disconnect(reason=None):
    if not current_user.is_authenticated:
        return

    if _has_other_connections(current_user.id):
        logger.info("[SOCKET DISCONNECT] user %s closed one of several connections", current_user.id)
        return

    try:
        _set_presence('offline')
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("[SOCKET DISCONNECT] could not mark user %s offline", current_user.id)
        return

    logger.info("[SOCKET DISCONNECT] user %s disconnected (%s)", current_user.id, reason)
    socketio.emit('online_users', online_user_ids())
