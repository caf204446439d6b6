from flask import Blueprint, request, url_for

from services import user_service
from utils.decorators import current_actor, role_required
from utils.responses import request_data, respond

admin_bp = Blueprint("admin", __name__, url_prefix="/admin")

COLUMNS = ["name", "email", "role", "is_active"]


@admin_bp.route("/users", methods=["GET"])
@role_required("admin")
def manage_users():
    users = [u.to_dict() for u in user_service.list_users(role=request.args.get("role") or None)]
    return respond(
        users,
        template="records/index.html",
        title="Manage Users",
        records=users,
        columns=COLUMNS,
        endpoint="admin.show_user",
        id_key="user_id"
    )


@admin_bp.route("/users/<int:user_id>", methods=["GET"])
@role_required("admin")
def show_user(user_id):
    user = user_service.get_user(user_id).to_dict()
    return respond(user, template="records/show.html", title=user["name"], record=user)


@admin_bp.route("/users", methods=["POST"])
@role_required("admin")
def create_user():
    user = user_service.create_user(current_actor(), request_data())
    return respond(
        user.to_dict(),
        status=201,
        redirect_to=url_for("admin.manage_users"),
        message=f"User {user.email} created"
    )


@admin_bp.route("/users/<int:user_id>", methods=["PUT"])
@admin_bp.route("/users/<int:user_id>/edit", methods=["POST"])
@role_required("admin")
def update_user(user_id):
    user = user_service.update_user(current_actor(), user_id, request_data())
    return respond(
        user.to_dict(),
        redirect_to=url_for("admin.show_user", user_id=user.user_id),
        message="User updated"
    )


@admin_bp.route("/users/<int:user_id>", methods=["DELETE"])
@admin_bp.route("/users/<int:user_id>/delete", methods=["POST"])
@role_required("admin")
def delete_user(user_id):
    user_service.delete_user(current_actor(), user_id)
    return respond(
        {"message": "User removed"},
        redirect_to=url_for("admin.manage_users"),
        message="User has been removed"
    )
