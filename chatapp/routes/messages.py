# Direct message routes

import logging

from flask import Blueprint, request, jsonify, current_app
from flask_login import login_required, current_user
from sqlalchemy import and_, or_
from sqlalchemy.exc import SQLAlchemyError

from chatapp.extensions import db, socketio
from chatapp.models import Message, User
from chatapp.routes.users import iso
from chatapp.sockets import user_room

logger = logging.getLogger(__name__)

messages_bp = Blueprint('messages', __name__, url_prefix='/api/messages')

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 200


def message_payload(message):
    return {
        'id': message.id,
        'sender_id': message.sender_id,
        'receiver_id': message.receiver_id,
        'message': message.content,
        'created_at_iso': iso(message.created_at)
    }


def conversation_query(user_id, other_id):
    # Messages exchanged between two users, in either direction
    return Message.query.filter(or_(
        and_(Message.sender_id == user_id, Message.receiver_id == other_id),
        and_(Message.sender_id == other_id, Message.receiver_id == user_id)
    ))


@messages_bp.route('/<int:user_id>', methods=['GET'])
@login_required
def get_messages(user_id):
    # Conversation with user_id, oldest first; limit/offset page from the newest end
    limit = request.args.get('limit', DEFAULT_PAGE_SIZE, type=int)
    offset = request.args.get('offset', 0, type=int)
    limit = max(1, min(limit, MAX_PAGE_SIZE))
    offset = max(0, offset)

    messages = conversation_query(current_user.id, user_id).order_by(
        Message.created_at.desc(), Message.id.desc()
    ).limit(limit).offset(offset).all()

    messages_data = [message_payload(m) for m in reversed(messages)]
    return jsonify({'messages': messages_data, 'count': len(messages_data)})


@messages_bp.route('/send/<int:user_id>', methods=['POST'])
@login_required
def send_message(user_id):
    data = request.get_json(silent=True) or {}
    content = data.get('message')
    if not isinstance(content, str) or not content.strip():
        return jsonify({'error': 'message cannot be empty'}), 400

    content = content.strip()
    if len(content) > current_app.config['MAX_MESSAGE_LENGTH']:
        return jsonify({'error': 'message is too long'}), 400

    if user_id == current_user.id:
        return jsonify({'error': 'cannot send a message to yourself'}), 400

    receiver = db.session.get(User, user_id)
    if not receiver:
        return jsonify({'error': 'user not found'}), 404

    message = Message(content=content, sender_id=current_user.id, receiver_id=receiver.id)
    try:
        db.session.add(message)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Could not store message from %s to %s", current_user.id, receiver.id)
        return jsonify({'error': 'error while sending message'}), 500

    payload = message_payload(message)
    socketio.emit('new_message', payload, to=user_room(receiver.id))
    return jsonify(payload), 201
