from models.user import User
from services.validators import normalize_email
from utils.password_utils import verify_password


def authenticate_user(email: str, password: str):
    user = User.query.filter_by(email=normalize_email(email)).first()

    if not user:
        return None

    if not verify_password(password, user.password_hash):
        return None

    if user.is_active is False:
        return None

    return user
