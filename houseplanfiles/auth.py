"""Bearer-token authentication for the API.

The storefront keeps a signed token in its store and sends it as
``Authorization: Bearer <token>``. Tokens are itsdangerous timed signatures
of the user id; Flask-Login's request loader resolves them per request.
"""

from __future__ import annotations

from functools import wraps

from flask import current_app, g, jsonify, request
from flask_login import current_user
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from houseplanfiles.extensions import db, login_manager


SESSION_EXPIRED_MESSAGE = 'Session expired. Please login again.'
LOGIN_REQUIRED_MESSAGE = 'Please login to continue.'


def _serializer() -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(
        secret_key=current_app.config['SECRET_KEY'],
        salt=current_app.config['TOKEN_SALT'],
    )


def issue_token(user) -> str:
    return _serializer().dumps({'uid': user.id})


def read_token(token: str) -> int | None:
    try:
        data = _serializer().loads(token, max_age=current_app.config['TOKEN_MAX_AGE'])
    except SignatureExpired:
        return None
    except BadSignature:
        return None
    if not isinstance(data, dict) or not isinstance(data.get('uid'), int):
        return None
    return data['uid']


def _bearer_token() -> str | None:
    header = request.headers.get('Authorization', '')
    scheme, _, token = header.partition(' ')
    if scheme.lower() != 'bearer' or not token.strip():
        return None
    return token.strip()


@login_manager.request_loader
def load_user_from_request(req):
    from houseplanfiles.models import User

    token = _bearer_token()
    if token is None:
        return None

    user_id = read_token(token)
    user = db.session.get(User, user_id) if user_id is not None else None
    if user is None or not user.is_active:
        g.auth_error = SESSION_EXPIRED_MESSAGE
        return None
    return user


@login_manager.unauthorized_handler
def unauthorized():
    message = getattr(g, 'auth_error', None) or LOGIN_REQUIRED_MESSAGE
    return jsonify({'message': message}), 401


def roles_required(*roles):
    """Allow only authenticated users whose role is in ``roles``.

    Admins always pass.
    """

    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not current_user.is_authenticated:
                return login_manager.unauthorized()
            if current_user.role not in roles and not current_user.is_admin:
                return jsonify({'message': 'You are not allowed to perform this action.'}), 403
            return f(*args, **kwargs)

        return decorated_function

    return decorator


def admin_required(f):
    """Decorator to require admin privileges"""
    return roles_required('admin')(f)
