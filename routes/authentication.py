import logging
from flask import Blueprint, request, jsonify
from models import db
from models.users import User, TEACHER, STUDENT
from classes.validators import validate_email, validate_length
from utils.errors import Conflict, NotFound, Unauthenticated, ValidationFailed
from utils.helpers import clean_text, get_json_body
from utils.tokens import token_for
from utils.utils import login_required

auth_bp = Blueprint('auth_bp', __name__)
logger = logging.getLogger(__name__)


def _ensure_unique(username=None, email=None, exclude_id=None):
    conditions = []
    if username is not None:
        conditions.append(User.username == username)
    if email is not None:
        conditions.append(User.email == email)
    if not conditions:
        return
    query = User.query.filter(db.or_(*conditions))
    if exclude_id is not None:
        query = query.filter(User.id != exclude_id)
    if query.first():
        raise Conflict("User already exists")


def _signup(role):
    data = get_json_body(request)

    username = data.get('username')
    email = data.get('email')
    password = data.get('password')
    full_name = data.get('full_name')

    if not username or not email or not password or not full_name:
        raise ValidationFailed("All fields are required")
    if not isinstance(username, str) or not isinstance(password, str):
        raise ValidationFailed("Username and password must be strings")

    validate_length("username", username, 50)
    validate_email(email)
    full_name = clean_text(full_name, "full_name")
    validate_length("full_name", full_name, 100)
    _ensure_unique(username=username, email=email)

    new_user = User(
        username=username,
        email=email,
        full_name=full_name,
        role=role
    )
    new_user.set_password(password)

    db.session.add(new_user)
    db.session.commit()
    logger.info("Registered %s %s", role, new_user.id)

    return jsonify({"token": token_for(new_user)}), 201


def _login(role):
    data = get_json_body(request)
    username = data.get("username")
    password = data.get("password")

    user = None
    if isinstance(username, str) and username:
        user = User.query.filter_by(username=username, role=role).first()

    if not user or not isinstance(password, str) or not user.check_password(password):
        logger.warning("Failed %s login for %r", role, username)
        raise Unauthenticated("Invalid username or password")

    return jsonify({"token": token_for(user)}), 200


# Signup
@auth_bp.route('/teacher/signup', methods=['POST'])
def teacher_signup():
    return _signup(TEACHER)


@auth_bp.route('/student/signup', methods=['POST'])
def student_signup():
    return _signup(STUDENT)


# Login
@auth_bp.route('/teacher/login', methods=['POST'])
def teacher_login():
    return _login(TEACHER)


@auth_bp.route('/student/login', methods=['POST'])
def student_login():
    return _login(STUDENT)


# Current user
@auth_bp.route('/info', methods=['GET'])
@login_required
def user_info(principal):
    user = db.session.get(User, principal.id)
    if not user:
        raise NotFound("User not found")
    return jsonify(user.to_dict()), 200


# Self-service profile update
@auth_bp.route('/update', methods=['PATCH'])
@login_required
def update_user(principal):
    user = db.session.get(User, principal.id)
    if not user:
        raise NotFound("User not found")

    data = get_json_body(request)

    username = data.get("username")
    email = data.get("email")
    if username is not None:
        if not isinstance(username, str) or not username.strip():
            raise ValidationFailed("'username' must be a non-empty string")
        validate_length("username", username, 50)
    if email is not None:
        validate_email(email)
    _ensure_unique(username=username, email=email, exclude_id=user.id)

    if username is not None:
        user.username = username
    if email is not None:
        user.email = email
    if "full_name" in data:
        user.full_name = clean_text(data.get("full_name"), "full_name")
        validate_length("full_name", user.full_name, 100)
    if "password" in data:
        password = data.get("password")
        if not isinstance(password, str) or not password:
            raise ValidationFailed("'password' must be a non-empty string")
        user.set_password(password)

    db.session.commit()

    return jsonify({"message": "User information updated successfully"}), 200
