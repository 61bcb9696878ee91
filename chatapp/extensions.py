# Flask extensions initialization
# Helps avoid circular imports by initializing extensions without app context

from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_login import LoginManager
from flask_socketio import SocketIO
from flask_sqlalchemy import SQLAlchemy
from flask_talisman import Talisman
from flask_wtf.csrf import CSRFProtect

db = SQLAlchemy()
socketio = SocketIO(
    ping_timeout=60,
    ping_interval=25,
    manage_session=True,
    path='socket.io',
    engineio_logger=False,
    logger=False
)
login_manager = LoginManager()

# Security middleware, bound to the app in chatapp.security.init_security
limiter = Limiter(key_func=get_remote_address)
talisman = Talisman()
cors = CORS()
csrf = CSRFProtect()
