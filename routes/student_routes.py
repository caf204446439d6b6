from flask import Blueprint, request, url_for

from services import student_service
from utils.decorators import current_actor, role_required
from utils.responses import query_int, request_data, respond

student_bp = Blueprint("students", __name__, url_prefix="/students")

COLUMNS = ["roll_number", "name", "email", "year", "semester", "status"]


@student_bp.route("", methods=["GET"])
@role_required("admin")
def list_students():
    students = [
        s.to_dict() for s in student_service.list_students(
            department_id=query_int("department"),
            course_id=query_int("course"),
            status=request.args.get("status") or None,
            search=request.args.get("search")
        )
    ]
    return respond(
        students,
        template="records/index.html",
        title="Students",
        records=students,
        columns=COLUMNS,
        endpoint="students.show_student",
        id_key="student_id"
    )


@student_bp.route("/<int:student_id>", methods=["GET"])
@role_required("admin")
def show_student(student_id):
    student = student_service.get_student(student_id).to_dict()
    return respond(student, template="records/show.html", title=student["name"], record=student)


@student_bp.route("", methods=["POST"])
@role_required("admin")
def create_student():
    student = student_service.create_student(current_actor(), request_data())
    return respond(
        student.to_dict(),
        status=201,
        redirect_to=url_for("students.show_student", student_id=student.student_id),
        message="Student created"
    )


@student_bp.route("/<int:student_id>", methods=["PUT"])
@student_bp.route("/<int:student_id>/edit", methods=["POST"])
@role_required("admin")
def update_student(student_id):
    student = student_service.update_student(current_actor(), student_id, request_data())
    return respond(
        student.to_dict(),
        redirect_to=url_for("students.show_student", student_id=student.student_id),
        message="Student updated"
    )


@student_bp.route("/<int:student_id>", methods=["DELETE"])
@student_bp.route("/<int:student_id>/delete", methods=["POST"])
@role_required("admin")
def delete_student(student_id):
    student_service.delete_student(current_actor(), student_id)
    return respond(
        {"message": "Student removed"},
        redirect_to=url_for("students.list_students"),
        message="Student deleted"
    )
