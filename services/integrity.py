import logging

from extensions import db
from models import Course, Department, Enrollment, Module, Student, module_prerequisites
from services.errors import HasDependents, MissingReference, ReferenceMismatch, ValidationError

logger = logging.getLogger(__name__)


def require_department(department_id):
    department = db.session.get(Department, department_id) if department_id is not None else None
    if not department:
        raise MissingReference("Department")
    return department


def require_course(course_id):
    course = db.session.get(Course, course_id) if course_id is not None else None
    if not course:
        raise MissingReference("Course")
    return course


def check_module_references(course_id, department_id):
    course = require_course(course_id)
    department = require_department(department_id)
    if course.department_id != department.department_id:
        raise ReferenceMismatch("Department does not match the course department")
    return course, department


def resolve_prerequisites(prerequisite_ids, module_id=None):
    if module_id is not None and module_id in prerequisite_ids:
        raise ValidationError("A module cannot be its own prerequisite")
    if not prerequisite_ids:
        return []
    found = Module.query.filter(Module.module_id.in_(prerequisite_ids)).all()
    by_id = {m.module_id: m for m in found}
    missing = [pid for pid in prerequisite_ids if pid not in by_id]
    if missing:
        raise MissingReference("Prerequisite module")
    return [by_id[pid] for pid in prerequisite_ids]


def guard_students(criterion, label, code):
    student_count = Student.query.filter(criterion).count()
    if student_count > 0:
        logger.warning("Delete of %s %s blocked by %d students", label, code, student_count)
        raise HasDependents(f"Cannot delete {label} with registered students")


def guard_course_delete(course):
    module_count = Module.query.filter_by(course_id=course.course_id).count()
    if module_count > 0:
        logger.warning("Delete of course %s blocked by %d modules", course.code, module_count)
        raise HasDependents("Cannot delete course with associated modules")
    guard_students(Student.course_id == course.course_id, "course", course.code)


def remove_enrollments(course_ids):
    # Enrollments only link a user to a course, so they go with the course
    if not course_ids:
        return 0
    return Enrollment.query.filter(Enrollment.course_id.in_(course_ids)).delete()


def guard_module_delete(module):
    is_prerequisite = db.session.query(
        module_prerequisites.c.module_id
    ).filter(
        module_prerequisites.c.prerequisite_id == module.module_id,
        module_prerequisites.c.module_id != module.module_id
    ).first() is not None

    if is_prerequisite:
        logger.warning("Delete of module %s blocked: listed as a prerequisite", module.code)
        raise HasDependents("Cannot delete module as it is a prerequisite for other modules")


def detach_prerequisites(module):
    # Drop rows in both directions so no prerequisite list names a deleted module.
    module.prerequisites = []
    db.session.flush()
    db.session.execute(
        module_prerequisites.delete().where(
            (module_prerequisites.c.module_id == module.module_id) |
            (module_prerequisites.c.prerequisite_id == module.module_id)
        )
    )


def cascade_department(department, strict=False):
    """Delete the department's courses (and their enrollments) ahead of the department.

    Modules of those courses stay behind unless ``strict`` is set, in which
    case any module blocks the delete. Students always block it.
    """
    course_ids = [
        c.course_id for c in Course.query.filter_by(department_id=department.department_id).all()
    ]

    if strict and course_ids:
        blocked = Module.query.filter(Module.course_id.in_(course_ids)).count()
        if blocked:
            raise HasDependents("Cannot delete department while its courses have modules")

    criterion = Student.department_id == department.department_id
    if course_ids:
        criterion = criterion | Student.course_id.in_(course_ids)
    guard_students(criterion, "department", department.code)

    if course_ids:
        remove_enrollments(course_ids)
        Course.query.filter(Course.course_id.in_(course_ids)).delete()
    logger.info("Cascading delete of department %s removed %d courses", department.code, len(course_ids))
    return len(course_ids)
