from collections import namedtuple
from functools import wraps
import logging
from flask import request
from models import db
from models.users import User, ROLES
from utils.errors import Unauthenticated, Forbidden, NotFound
from utils.tokens import decode_jwt

logger = logging.getLogger(__name__)

# Resolved caller identity handed to every protected view.
Principal = namedtuple("Principal", ["id", "role"])


def _bearer_token():
    header = request.headers.get("Authorization", "")
    if header:
        scheme, _, token = header.partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            raise Unauthenticated("Invalid token")
        return token.strip()
    return request.cookies.get("access_token")


def resolve_principal(token):
    """Turn a bearer token into a Principal for an existing user."""
    payload = decode_jwt(token)
    user_id = payload.get("id")
    role = payload.get("role")
    if role not in ROLES or user_id is None:
        raise Unauthenticated("Invalid token")

    user = db.session.get(User, user_id)
    if not user or user.role != role:
        raise NotFound("User not found")
    return Principal(id=user.id, role=user.role)


def login_required(f):
    """Authenticate once and pass the caller to the view as ``principal``."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        token = _bearer_token()
        if not token:
            logger.warning("Request to %s without a token", request.path)
            raise Unauthenticated("Authentication token missing")

        principal = resolve_principal(token)
        return f(*args, principal=principal, **kwargs)

    return decorated_function


def role_required(role):
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, principal, **kwargs):
            if principal.role != role:
                raise Forbidden(f"User is not a {role}")
            return f(*args, principal=principal, **kwargs)
        return decorated_function
    return decorator
