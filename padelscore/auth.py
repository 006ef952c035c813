"""
Request identity.

Every mutating endpoint needs a verified identity carrying a role. Tokens are
signed user ids handed out by /api/auth/login and presented back as
``Authorization: Bearer <token>``; Flask-Login resolves them into
``current_user`` for the duration of the request.
"""
from functools import wraps
from typing import Optional

from flask import current_app
from flask_login import LoginManager, current_user
from itsdangerous import BadSignature, URLSafeTimedSerializer

from .errors import ForbiddenError, UnauthorizedError
from .models import db, User

login_manager = LoginManager()

TOKEN_SALT = 'padelscore-auth'


def _serializer() -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(current_app.config['SECRET_KEY'], salt=TOKEN_SALT)


def issue_token(user: User) -> str:
    """Sign a bearer token for the given user."""
    return _serializer().dumps({'uid': user.id})


def resolve_token(token: str) -> Optional[User]:
    """Return the user a token was issued to, or None if it is invalid or expired."""
    try:
        data = _serializer().loads(token, max_age=current_app.config['TOKEN_MAX_AGE'])
    except BadSignature:
        return None
    user_id = data.get('uid') if isinstance(data, dict) else None
    if user_id is None:
        return None
    return db.session.get(User, user_id)


@login_manager.user_loader
def load_user(user_id):
    return db.session.get(User, int(user_id))


@login_manager.request_loader
def load_user_from_request(request):
    header = request.headers.get('Authorization', '')
    scheme, _, token = header.partition(' ')
    if scheme.lower() != 'bearer' or not token.strip():
        return None
    return resolve_token(token.strip())


def roles_required(*roles):
    """Reject the request unless the current identity holds one of ``roles``.

    Usage:
    @roles_required('admin')
    def create_player():
        ...
    """

    def decorator(func):
        @wraps(func)
        def decorated_function(*args, **kwargs):
            if not current_user.is_authenticated:
                raise UnauthorizedError('Access token required')
            if current_user.role not in roles:
                raise ForbiddenError('Insufficient permissions')
            return func(*args, **kwargs)

        return decorated_function

    return decorator
