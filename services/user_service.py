import logging

from flask import current_app

from extensions import db
from models import Enrollment, Student, User
from models.user import USER_ROLES
from services.errors import NotFound, ValidationError
from services.uniqueness import UniqueGuard
from services.validators import normalize_email, parse_bool, parse_choice, require_text, validate_password
from utils.password_utils import hash_password

logger = logging.getLogger(__name__)


def list_users(role=None):
    query = User.query
    if role:
        query = query.filter(User.role == role)
    return query.order_by(User.name).all()


def get_user(user_id):
    user = db.session.get(User, user_id)
    if not user:
        raise NotFound("User")
    return user


def create_user(actor, data):
    name = require_text(data, "name", "Name")
    email = normalize_email(require_text(data, "email", "Email"))
    role = parse_choice(data.get("role"), "Role", USER_ROLES, default="student")
    password = validate_password(data.get("password"), current_app.config["PASSWORD_MIN_LENGTH"])

    guard = UniqueGuard(User, "User", email=email)
    guard.check()

    user = User(
        name=name,
        email=email,
        role=role,
        password_hash=hash_password(password),
        is_active=parse_bool(data.get("is_active"), default=True)
    )
    db.session.add(user)
    guard.commit()
    logger.info("%s created %s account %s", actor.email, role, email)
    return user


def update_user(actor, user_id, data):
    user = get_user(user_id)

    name = require_text(data, "name", "Name")
    email = normalize_email(require_text(data, "email", "Email"))
    role = parse_choice(data.get("role"), "Role", USER_ROLES, default=user.role)
    password = data.get("password")
    if password:
        validate_password(password, current_app.config["PASSWORD_MIN_LENGTH"])

    guard = UniqueGuard(User, "User", exclude_id=user.user_id, email=email)
    guard.check()

    user.name = name
    user.email = email
    user.role = role
    user.is_active = parse_bool(data.get("is_active"))
    if password:
        user.password_hash = hash_password(password)

    guard.commit()
    logger.info("%s updated account %s", actor.email, email)
    return user


def delete_user(actor, user_id):
    user = get_user(user_id)
    if user.user_id == actor.user_id:
        raise ValidationError("You cannot delete your own account")

    email = user.email
    Student.query.filter_by(user_id=user.user_id).update({"user_id": None})
    Enrollment.query.filter_by(user_id=user.user_id).delete()
    db.session.delete(user)
    db.session.commit()
    logger.info("%s deleted account %s", actor.email, email)
