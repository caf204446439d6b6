import logging

from flask import current_app

from extensions import db
from models import Department
from services.errors import NotFound
from services.integrity import cascade_department
from services.uniqueness import UniqueGuard
from services.validators import normalize_code, optional_text, parse_bool, parse_date, require_text

logger = logging.getLogger(__name__)


def list_departments(active_only=False):
    query = Department.query
    if active_only:
        query = query.filter(Department.is_active.is_(True))
    return query.order_by(Department.name).all()


def get_department(department_id):
    department = db.session.get(Department, department_id)
    if not department:
        raise NotFound("Department")
    return department


def create_department(actor, data):
    name = require_text(data, "name", "Department name")
    code = normalize_code(require_text(data, "code", "Department code"))

    guard = UniqueGuard(Department, "Department", name=name, code=code)
    guard.check()

    department = Department(
        name=name,
        code=code,
        description=optional_text(data, "description"),
        head_of_department=optional_text(data, "head_of_department"),
        is_active=parse_bool(data.get("is_active"), default=True)
    )
    established = parse_date(data.get("established_date"), "Established date", required=False)
    if established:
        department.established_date = established

    db.session.add(department)
    guard.commit()
    logger.info("%s created department %s", actor.email, department.code)
    return department


def update_department(actor, department_id, data):
    department = get_department(department_id)

    name = require_text(data, "name", "Department name")
    code = normalize_code(require_text(data, "code", "Department code"))

    guard = UniqueGuard(
        Department, "Department", exclude_id=department.department_id, name=name, code=code
    )
    guard.check()

    department.name = name
    department.code = code
    department.description = optional_text(data, "description")
    department.head_of_department = optional_text(data, "head_of_department")
    department.is_active = parse_bool(data.get("is_active"))

    guard.commit()
    logger.info("%s updated department %s", actor.email, department.code)
    return department


def delete_department(actor, department_id):
    department = get_department(department_id)
    code = department.code
    removed = cascade_department(department, strict=current_app.config.get("STRICT_DEPARTMENT_DELETE", False))
    db.session.delete(department)
    db.session.commit()
    logger.info("%s deleted department %s (%d courses)", actor.email, code, removed)
    return removed
