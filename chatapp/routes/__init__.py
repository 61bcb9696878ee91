# Routes package

from chatapp.routes.api import api_bp
from chatapp.routes.auth import auth_bp
from chatapp.routes.frontend import frontend_bp
from chatapp.routes.messages import messages_bp
from chatapp.routes.users import users_bp
from chatapp.security import api_rate_limit

# Every /api/ blueprint draws from the same per-IP budget
for _bp in (auth_bp, messages_bp, users_bp, api_bp):
    api_rate_limit(_bp)

__all__ = ['api_bp', 'auth_bp', 'frontend_bp', 'messages_bp', 'users_bp']
