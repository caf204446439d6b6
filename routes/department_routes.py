from flask import Blueprint, url_for

from services import department_service
from utils.decorators import current_actor, role_required
from utils.responses import request_data, respond

department_bp = Blueprint("departments", __name__, url_prefix="/departments")

COLUMNS = ["code", "name", "head_of_department", "is_active"]


@department_bp.route("", methods=["GET"])
def list_departments():
    departments = [d.to_dict() for d in department_service.list_departments()]
    return respond(
        departments,
        template="records/index.html",
        title="All Departments",
        records=departments,
        columns=COLUMNS,
        endpoint="departments.show_department",
        id_key="department_id"
    )


@department_bp.route("/<int:department_id>", methods=["GET"])
def show_department(department_id):
    department = department_service.get_department(department_id).to_dict(include_courses=True)
    return respond(department, template="records/show.html", title=department["name"], record=department)


@department_bp.route("", methods=["POST"])
@role_required("admin")
def create_department():
    department = department_service.create_department(current_actor(), request_data())
    return respond(
        department.to_dict(),
        status=201,
        redirect_to=url_for("departments.show_department", department_id=department.department_id),
        message="Department created successfully"
    )


@department_bp.route("/<int:department_id>", methods=["PUT"])
@department_bp.route("/<int:department_id>/edit", methods=["POST"])
@role_required("admin")
def update_department(department_id):
    department = department_service.update_department(current_actor(), department_id, request_data())
    return respond(
        department.to_dict(),
        redirect_to=url_for("departments.show_department", department_id=department.department_id),
        message="Department updated successfully"
    )


@department_bp.route("/<int:department_id>", methods=["DELETE"])
@department_bp.route("/<int:department_id>/delete", methods=["POST"])
@role_required("admin")
def delete_department(department_id):
    removed = department_service.delete_department(current_actor(), department_id)
    return respond(
        {"message": "Department removed", "courses_removed": removed},
        redirect_to=url_for("departments.list_departments"),
        message="Department deleted successfully"
    )
