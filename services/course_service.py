import logging

from extensions import db
from models import Course
from services.errors import NotFound, ValidationError
from services.integrity import guard_course_delete, remove_enrollments, require_department
from services.uniqueness import UniqueGuard
from services.validators import (
    normalize_code, optional_text, parse_bool, parse_date, parse_float, parse_id, parse_int, require_text
)

logger = logging.getLogger(__name__)


def list_courses(department_id=None, search=None):
    query = Course.query
    if department_id:
        query = query.filter(Course.department_id == department_id)
    if search:
        pattern = f"%{search.strip()}%"
        query = query.filter(
            Course.name.ilike(pattern) | Course.code.ilike(pattern) | Course.description.ilike(pattern)
        )
    return query.order_by(Course.name).all()


def get_course(course_id):
    course = db.session.get(Course, course_id)
    if not course:
        raise NotFound("Course")
    return course


def parse_course_fields(data):
    fields = {
        "name": require_text(data, "name", "Course name"),
        "code": normalize_code(require_text(data, "code", "Course code")),
        "department_id": parse_id(data.get("department_id"), "Department"),
        "duration": parse_int(data.get("duration"), "Duration", minimum=1, maximum=10),
        "description": optional_text(data, "description"),
        "credits": parse_int(data.get("credits"), "Credits", minimum=1),
        "fee": parse_float(data.get("fee"), "Course fee", minimum=0),
        "start_date": parse_date(data.get("start_date"), "Start date"),
        "end_date": parse_date(data.get("end_date"), "End date", required=False),
    }
    if fields["end_date"] is not None and fields["end_date"] <= fields["start_date"]:
        raise ValidationError("End date must be after start date")
    return fields


def create_course(actor, data):
    fields = parse_course_fields(data)

    guard = UniqueGuard(Course, "Course", code=fields["code"])
    guard.check()
    require_department(fields["department_id"])

    course = Course(is_active=parse_bool(data.get("is_active"), default=True), **fields)
    db.session.add(course)
    guard.commit()
    logger.info("%s created course %s", actor.email, course.code)
    return course


def update_course(actor, course_id, data):
    course = get_course(course_id)
    fields = parse_course_fields(data)

    guard = UniqueGuard(Course, "Course", exclude_id=course.course_id, code=fields["code"])
    guard.check()
    require_department(fields["department_id"])

    for key, value in fields.items():
        setattr(course, key, value)
    course.is_active = parse_bool(data.get("is_active"))

    guard.commit()
    logger.info("%s updated course %s", actor.email, course.code)
    return course


def delete_course(actor, course_id):
    course = get_course(course_id)
    code = course.code
    guard_course_delete(course)
    remove_enrollments([course.course_id])
    db.session.delete(course)
    db.session.commit()
    logger.info("%s deleted course %s", actor.email, code)
