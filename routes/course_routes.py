from flask import Blueprint, request, url_for

from services import course_service
from utils.decorators import current_actor, role_required
from utils.responses import query_int, request_data, respond

course_bp = Blueprint("courses", __name__, url_prefix="/courses")

COLUMNS = ["code", "name", "duration", "credits", "fee", "is_active"]


@course_bp.route("", methods=["GET"])
def list_courses():
    courses = [
        c.to_dict() for c in course_service.list_courses(
            department_id=query_int("department"),
            search=request.args.get("search")
        )
    ]
    return respond(
        courses,
        template="records/index.html",
        title="All Courses",
        records=courses,
        columns=COLUMNS,
        endpoint="courses.show_course",
        id_key="course_id"
    )


@course_bp.route("/<int:course_id>", methods=["GET"])
def show_course(course_id):
    course = course_service.get_course(course_id).to_dict(include_modules=True)
    return respond(course, template="records/show.html", title=course["name"], record=course)


@course_bp.route("", methods=["POST"])
@role_required("admin")
def create_course():
    course = course_service.create_course(current_actor(), request_data())
    return respond(
        course.to_dict(),
        status=201,
        redirect_to=url_for("courses.show_course", course_id=course.course_id),
        message="Course created successfully"
    )


@course_bp.route("/<int:course_id>", methods=["PUT"])
@course_bp.route("/<int:course_id>/edit", methods=["POST"])
@role_required("admin")
def update_course(course_id):
    course = course_service.update_course(current_actor(), course_id, request_data())
    return respond(
        course.to_dict(),
        redirect_to=url_for("courses.show_course", course_id=course.course_id),
        message="Course updated successfully"
    )


@course_bp.route("/<int:course_id>", methods=["DELETE"])
@course_bp.route("/<int:course_id>/delete", methods=["POST"])
@role_required("admin")
def delete_course(course_id):
    course_service.delete_course(current_actor(), course_id)
    return respond(
        {"message": "Course removed"},
        redirect_to=url_for("courses.list_courses"),
        message="Course deleted successfully"
    )
