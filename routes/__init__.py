# Blueprint registration module
from .auth import auth_bp
from .users import users_bp
from .tasks import tasks_bp

__all__ = [
    'auth_bp',
    'users_bp',
    'tasks_bp',
]
