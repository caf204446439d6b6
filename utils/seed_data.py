import logging

from flask import current_app

from extensions import db
from models.department import Department
from models.user import User
from utils.password_utils import hash_password

logger = logging.getLogger(__name__)


def seed_admin():
    email = current_app.config["ADMIN_EMAIL"].strip().lower()
    existing = User.query.filter_by(email=email).first()

    if not existing:
        db.session.add(
            User(
                name="Administrator",
                email=email,
                password_hash=hash_password(current_app.config["ADMIN_PASSWORD"]),
                role="admin",
                is_active=True
            )
        )

    db.session.commit()
    logger.info("Admin account verified (%s)", email)


def seed_departments():
    departments = [
        {"code": "CSE", "name": "Computer Science and Engineering"},
        {"code": "ECE", "name": "Electronics and Communication Engineering"},
    ]

    for d in departments:
        existing = Department.query.filter(
            (Department.code == d["code"]) |
            (Department.name == d["name"])
        ).first()
        if not existing:
            db.session.add(Department(code=d["code"], name=d["name"]))

    db.session.commit()
    logger.info("Departments seeded")


def run_seed():
    seed_admin()
    seed_departments()
