from functools import wraps
from flask import request, url_for
from flask_login import current_user

from services.context import Actor
from utils.responses import fail


def role_required(*roles):
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            # 1. Check if user is logged in (and not deactivated)
            if not current_user.is_authenticated or current_user.is_active is False:
                return fail("Please log in to continue", 401, url_for("auth.login", next=request.path))

            # 2. Check if user has one of the allowed roles
            if current_user.role not in roles:
                return fail(f"{' or '.join(roles)} access required", 403, url_for("catalog.index"))

            return func(*args, **kwargs)
        return wrapper
    return decorator


def current_actor():
    return Actor.from_user(current_user)
