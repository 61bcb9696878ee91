# Models package
# Import all models here for convenience

from chatapp.models.user import User
from chatapp.models.message import Message

__all__ = ['User', 'Message']
