import logging

from flask import request, url_for
from sqlalchemy.exc import SQLAlchemyError

from extensions import db, login_manager
from services.errors import RecordsError
from utils.responses import fail

logger = logging.getLogger(__name__)


def back_url():
    return request.referrer or url_for("catalog.index")


def register_error_handlers(app):

    @app.errorhandler(RecordsError)
    def handle_records_error(err):
        return fail(err.message, err.status_code, back_url())

    @app.errorhandler(SQLAlchemyError)
    def handle_storage_error(err):
        db.session.rollback()
        logger.exception("Storage failure on %s %s", request.method, request.path)
        return fail("Something went wrong while saving. Please try again.", 500, back_url())

    @app.errorhandler(404)
    def handle_not_found(err):
        return fail("Page not found", 404, url_for("catalog.index"))

    @login_manager.unauthorized_handler
    def handle_unauthorized():
        return fail("Please log in to continue", 401, url_for("auth.login", next=request.path))
