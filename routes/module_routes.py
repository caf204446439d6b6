from flask import Blueprint, request, url_for

from services import module_service
from services.catalog import load_module_structure
from utils.decorators import current_actor, role_required
from utils.responses import query_int, request_data, respond

module_bp = Blueprint("modules", __name__, url_prefix="/modules")

COLUMNS = ["code", "name", "semester", "credits", "is_core", "lecturer"]


@module_bp.route("", methods=["GET"])
def list_modules():
    modules = [
        m.to_dict() for m in module_service.list_modules(
            course_id=query_int("course"),
            department_id=query_int("department"),
            semester=query_int("semester"),
            search=request.args.get("search")
        )
    ]
    return respond(
        modules,
        template="records/index.html",
        title="All Modules",
        records=modules,
        columns=COLUMNS,
        endpoint="modules.show_module",
        id_key="module_id"
    )


@module_bp.route("/structured", methods=["GET"])
def structured_modules():
    structure = load_module_structure()
    return respond(structure, template="modules/structured.html", title="Modules Structure", structure=structure)


@module_bp.route("/<int:module_id>", methods=["GET"])
def show_module(module_id):
    module = module_service.get_module(module_id).to_dict()
    return respond(module, template="records/show.html", title=module["name"], record=module)


@module_bp.route("", methods=["POST"])
@role_required("admin")
def create_module():
    module = module_service.create_module(current_actor(), request_data())
    return respond(
        module.to_dict(),
        status=201,
        redirect_to=url_for("modules.show_module", module_id=module.module_id),
        message="Module created successfully"
    )


@module_bp.route("/<int:module_id>", methods=["PUT"])
@module_bp.route("/<int:module_id>/edit", methods=["POST"])
@role_required("admin")
def update_module(module_id):
    module = module_service.update_module(current_actor(), module_id, request_data())
    return respond(
        module.to_dict(),
        redirect_to=url_for("modules.show_module", module_id=module.module_id),
        message="Module updated successfully"
    )


@module_bp.route("/<int:module_id>", methods=["DELETE"])
@module_bp.route("/<int:module_id>/delete", methods=["POST"])
@role_required("admin")
def delete_module(module_id):
    module_service.delete_module(current_actor(), module_id)
    return respond(
        {"message": "Module removed"},
        redirect_to=url_for("modules.list_modules"),
        message="Module deleted successfully"
    )
