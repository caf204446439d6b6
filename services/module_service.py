import logging

from extensions import db
from models import Module
from services.errors import NotFound, ValidationError
from services.integrity import (
    check_module_references, detach_prerequisites, guard_module_delete, resolve_prerequisites
)
from services.uniqueness import UniqueGuard
from services.validators import (
    normalize_code, optional_text, parse_bool, parse_float, parse_id, parse_id_list, parse_int,
    parse_lines, require_text
)

logger = logging.getLogger(__name__)

WEIGHT_TOLERANCE = 0.01


def list_modules(course_id=None, department_id=None, semester=None, search=None):
    query = Module.query
    if course_id:
        query = query.filter(Module.course_id == course_id)
    if department_id:
        query = query.filter(Module.department_id == department_id)
    if semester:
        query = query.filter(Module.semester == semester)
    if search:
        pattern = f"%{search.strip()}%"
        query = query.filter(
            Module.name.ilike(pattern) | Module.code.ilike(pattern) | Module.description.ilike(pattern)
        )
    return query.order_by(Module.semester, Module.name).all()


def get_module(module_id):
    module = db.session.get(Module, module_id)
    if not module:
        raise NotFound("Module")
    return module


def parse_weights(data):
    # Accept the form's flat fields or a nested assessment_methods object
    nested = data.get("assessment_methods") or {}
    if not isinstance(nested, dict):
        raise ValidationError("Assessment weights must be an object")
    weights = {
        "exam": parse_float(nested.get("exam", data.get("exam_weight")), "Exam weight", 0, 100, default=0.0),
        "coursework": parse_float(
            nested.get("coursework", data.get("coursework_weight")), "Coursework weight", 0, 100, default=0.0
        ),
        "practical": parse_float(
            nested.get("practical", data.get("practical_weight")), "Practical weight", 0, 100, default=0.0
        ),
    }
    if abs(sum(weights.values()) - 100) > WEIGHT_TOLERANCE:
        raise ValidationError("Assessment weights must sum to 100%")
    return weights


def parse_module_fields(data):
    weights = parse_weights(data)
    return {
        "name": require_text(data, "name", "Module name"),
        "code": normalize_code(require_text(data, "code", "Module code")),
        "course_id": parse_id(data.get("course_id"), "Course"),
        "department_id": parse_id(data.get("department_id"), "Department"),
        "description": optional_text(data, "description"),
        "credits": parse_int(data.get("credits"), "Credits", minimum=1),
        "semester": parse_int(data.get("semester"), "Semester", minimum=1, maximum=12),
        "is_core": parse_bool(data.get("is_core")),
        "lecturer": optional_text(data, "lecturer"),
        "learning_outcomes": parse_lines(data.get("learning_outcomes")),
        "exam_weight": weights["exam"],
        "coursework_weight": weights["coursework"],
        "practical_weight": weights["practical"],
    }


def create_module(actor, data):
    fields = parse_module_fields(data)
    prerequisite_ids = parse_id_list(data.get("prerequisites"), "Prerequisite")

    guard = UniqueGuard(Module, "Module", code=fields["code"])
    guard.check()
    check_module_references(fields["course_id"], fields["department_id"])
    prerequisites = resolve_prerequisites(prerequisite_ids)

    module = Module(**fields)
    module.prerequisites = prerequisites
    db.session.add(module)
    guard.commit()
    logger.info("%s created module %s", actor.email, module.code)
    return module


def update_module(actor, module_id, data):
    module = get_module(module_id)
    fields = parse_module_fields(data)
    prerequisite_ids = parse_id_list(data.get("prerequisites"), "Prerequisite")

    guard = UniqueGuard(Module, "Module", exclude_id=module.module_id, code=fields["code"])
    guard.check()
    check_module_references(fields["course_id"], fields["department_id"])
    prerequisites = resolve_prerequisites(prerequisite_ids, module_id=module.module_id)

    for key, value in fields.items():
        setattr(module, key, value)
    module.prerequisites = prerequisites

    guard.commit()
    logger.info("%s updated module %s", actor.email, module.code)
    return module


def delete_module(actor, module_id):
    module = get_module(module_id)
    code = module.code
    guard_module_delete(module)
    detach_prerequisites(module)
    db.session.delete(module)
    db.session.commit()
    logger.info("%s deleted module %s", actor.email, code)
