import logging

from app import configure_logging
from models import Department, User
from utils.password_utils import verify_password
from utils.seed_data import run_seed


def test_seed_is_repeatable(ctx):
    run_seed()
    run_seed()

    admin = User.query.filter_by(email="admin@example.com").one()
    assert admin.role == "admin"
    assert verify_password("admin123", admin.password_hash)
    assert sorted(d.code for d in Department.query.all()) == ["CSE", "ECE"]


def test_seed_command(app):
    result = app.test_cli_runner().invoke(args=["seed"])
    assert "Seed data ready" in result.output


def test_log_level_from_config(app):
    app.config["LOG_LEVEL"] = "warning"
    configure_logging(app)
    assert app.logger.level == logging.WARNING


def test_testing_config(app):
    assert app.config["TESTING"] is True
    assert app.config["STRICT_DEPARTMENT_DELETE"] is False
    assert app.config["PASSWORD_MIN_LENGTH"] == 6
