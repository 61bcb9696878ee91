# User model

from datetime import datetime
from flask_login import UserMixin
from chatapp.extensions import db


class User(UserMixin, db.Model):
    # Chat user with profile and presence info
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(30), unique=True, nullable=False)
    full_name = db.Column(db.String(150), nullable=False)
    password = db.Column(db.String(255), nullable=False)
    profile_pic = db.Column(db.String(300), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    # Presence/status
    presence_status = db.Column(db.String(20), default='offline')  # 'online', 'offline'
    last_seen = db.Column(db.DateTime, nullable=True)
