from flask import Blueprint, redirect, request, url_for
from flask_login import current_user

from services import course_service, enrollment_service
from services.catalog import active_catalog
from utils.decorators import current_actor
from utils.responses import query_int, respond

catalog_bp = Blueprint("catalog", __name__)


@catalog_bp.route("/")
def index():
    return redirect(url_for("catalog.list_catalog"))


@catalog_bp.route("/catalog")
def list_catalog():
    courses = [
        c.to_dict() for c in active_catalog(
            search=request.args.get("search"),
            department_id=query_int("department")
        )
    ]
    return respond(
        courses,
        template="records/index.html",
        title="Course Catalog",
        records=courses,
        columns=["code", "name", "duration", "credits", "fee"],
        endpoint="catalog.show_course",
        id_key="course_id"
    )


@catalog_bp.route("/catalog/course/<int:course_id>")
def show_course(course_id):
    course = course_service.get_course(course_id).to_dict(include_modules=True)
    enrolled = False
    if current_user.is_authenticated and current_user.role == "student":
        enrolled = enrollment_service.is_enrolled(current_actor(), course_id)
    course["enrolled"] = enrolled
    return respond(course, template="records/show.html", title=course["name"], record=course)
