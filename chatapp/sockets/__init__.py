# Socket.IO handlers package

from chatapp.sockets.events import user_room, online_user_ids

__all__ = ['user_room', 'online_user_ids']
