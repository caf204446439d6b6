import logging
from collections import namedtuple

from sqlalchemy.exc import IntegrityError

from extensions import db
from models import Course, Department, Enrollment
from services.errors import NotFound

logger = logging.getLogger(__name__)

EnrollResult = namedtuple("EnrollResult", ["enrollment", "created"])


def find_enrollment(user_id, course_id):
    return Enrollment.query.filter_by(user_id=user_id, course_id=course_id).first()


def enroll(actor, course_id):
    """Enroll the caller; a second enroll for the same course is a no-op."""
    course = db.session.get(Course, course_id) if course_id is not None else None
    if not course:
        raise NotFound("Course")

    enrollment = Enrollment(user_id=actor.user_id, course_id=course.course_id, status="enrolled")
    db.session.add(enrollment)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        existing = find_enrollment(actor.user_id, course.course_id)
        if existing is None:
            raise
        logger.info("%s already enrolled in %s", actor.email, course.code)
        return EnrollResult(existing, False)

    logger.info("%s enrolled in %s", actor.email, course.code)
    return EnrollResult(enrollment, True)


def drop(actor, course_id):
    enrollment = find_enrollment(actor.user_id, course_id)
    if not enrollment:
        raise NotFound("Enrollment")

    # Hard delete; no "dropped" history is kept.
    db.session.delete(enrollment)
    db.session.commit()
    logger.info("%s dropped course %s", actor.email, course_id)


def my_courses(actor):
    return (
        Enrollment.query
        .join(Course, Enrollment.course_id == Course.course_id)
        .outerjoin(Department, Course.department_id == Department.department_id)
        .filter(Enrollment.user_id == actor.user_id, Enrollment.status == "enrolled")
        .order_by(Enrollment.created_at.desc(), Enrollment.enrollment_id.desc())
        .all()
    )


def is_enrolled(actor, course_id):
    return Enrollment.query.filter_by(
        user_id=actor.user_id, course_id=course_id, status="enrolled"
    ).first() is not None
