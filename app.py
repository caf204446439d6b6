import logging

import click
from flask import Flask
from config.config import Config
from flask_migrate import Migrate
from extensions import db, login_manager

# Route Imports
from routes.auth_routes import auth_bp
from routes.admin_routes import admin_bp
from routes.catalog_routes import catalog_bp
from routes.department_routes import department_bp
from routes.course_routes import course_bp
from routes.module_routes import module_bp
from routes.student_routes import student_bp
from routes.portal_routes import portal_bp

# Model Imports (registers every table with the metadata)
from models import User, Department, Course, Module, Student, Enrollment
from utils.error_handlers import register_error_handlers
from utils.seed_data import run_seed

migrate = Migrate()

BLUEPRINTS = [auth_bp, admin_bp, catalog_bp, department_bp, course_bp, module_bp, student_bp, portal_bp]


def configure_logging(app):
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
    )
    app.logger.setLevel(level)


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)
    configure_logging(app)

    # Structured views rely on insertion order
    app.json.sort_keys = False

    # Initialize Extensions
    db.init_app(app)
    migrate.init_app(app, db)

    login_manager.init_app(app)
    login_manager.login_view = "auth.login"  # Where to go if not logged in

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    # Register Blueprints: browser routes plus the same routes under /api
    for bp in BLUEPRINTS:
        app.register_blueprint(bp)
        prefix = bp.url_prefix or ""
        app.register_blueprint(bp, url_prefix=f"/api{prefix}", name=f"api_{bp.name}")

    register_error_handlers(app)

    @app.cli.command("seed")
    def seed_command():
        """Create the default admin account and sample departments."""
        run_seed()
        click.echo("Seed data ready")

    return app


if __name__ == "__main__":
    app = create_app()
    app.run(host="0.0.0.0", port=5000, debug=True)
