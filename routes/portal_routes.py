from flask import Blueprint, url_for

from services import enrollment_service
from services.validators import parse_id
from utils.decorators import current_actor, role_required
from utils.responses import request_data, respond

portal_bp = Blueprint("portal", __name__, url_prefix="/portal")


@portal_bp.route("/my-courses", methods=["GET"])
@role_required("student")
def my_courses():
    enrollments = [e.to_dict() for e in enrollment_service.my_courses(current_actor())]
    return respond(enrollments, template="portal/my_courses.html", title="My Courses", enrollments=enrollments)


@portal_bp.route("/enroll", methods=["POST"])
@role_required("student")
def enroll():
    course_id = parse_id(request_data().get("course_id"), "Course")
    result = enrollment_service.enroll(current_actor(), course_id)
    if result.created:
        return respond(
            {"message": "Enrolled", "enrollment": result.enrollment.to_dict()},
            status=201,
            redirect_to=url_for("catalog.show_course", course_id=course_id),
            message="Enrolled successfully"
        )
    return respond(
        {"message": "Already enrolled"},
        redirect_to=url_for("catalog.show_course", course_id=course_id),
        message="Already enrolled"
    )


@portal_bp.route("/drop", methods=["POST"])
@role_required("student")
def drop():
    course_id = parse_id(request_data().get("course_id"), "Course")
    enrollment_service.drop(current_actor(), course_id)
    return respond(
        {"message": "Dropped"},
        redirect_to=url_for("catalog.show_course", course_id=course_id),
        message="Dropped from course"
    )
