import datetime
import logging
import jwt
from flask import current_app
from utils.errors import Unauthenticated

logger = logging.getLogger(__name__)


def get_jwt_token(user_data):
    """Generate JWT token with user payload"""
    if not user_data:
        raise ValueError("User data must be provided to generate JWT token")

    hours = current_app.config["JWT_EXPIRATION_HOURS"]
    expiration = datetime.datetime.now(datetime.timezone.utc) + datetime.timedelta(hours=hours)
    payload = {"exp": expiration, **user_data}

    return jwt.encode(payload, current_app.config["JWT_SECRET"],
                      algorithm=current_app.config["JWT_ALGORITHM"])


def decode_jwt(token):
    """Decode and validate a JWT token, raising Unauthenticated when it is unusable."""
    try:
        return jwt.decode(token, current_app.config["JWT_SECRET"],
                          algorithms=[current_app.config["JWT_ALGORITHM"]])
    except jwt.ExpiredSignatureError:
        logger.warning("Rejected expired token")
        raise Unauthenticated("Token Expired or Invalid")
    except jwt.InvalidTokenError:
        logger.warning("Rejected invalid token")
        raise Unauthenticated("Invalid token")


def token_for(user):
    return get_jwt_token({
        "id": user.id,
        "username": user.username,
        "role": user.role,
    })
