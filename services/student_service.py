import logging

from flask import current_app

from extensions import db
from models import Student, User
from models.student import STUDENT_STATUSES
from services.errors import NotFound
from services.integrity import require_course, require_department
from services.uniqueness import UniqueGuard
from services.validators import (
    normalize_code, normalize_email, optional_text, parse_bool, parse_choice, parse_date, parse_id,
    parse_int, require_text, validate_password
)
from utils.password_utils import hash_password

logger = logging.getLogger(__name__)


def list_students(department_id=None, course_id=None, status=None, search=None):
    query = Student.query
    if department_id:
        query = query.filter(Student.department_id == department_id)
    if course_id:
        query = query.filter(Student.course_id == course_id)
    if status:
        query = query.filter(Student.status == status)
    if search:
        pattern = f"%{search.strip()}%"
        query = query.filter(
            Student.name.ilike(pattern) | Student.email.ilike(pattern) | Student.roll_number.ilike(pattern)
        )
    return query.order_by(Student.created_at.desc(), Student.student_id.desc()).all()


def get_student(student_id):
    student = db.session.get(Student, student_id)
    if not student:
        raise NotFound("Student")
    return student


def parse_student_fields(data, current=None):
    fields = {
        "name": require_text(data, "name", "Name"),
        "email": normalize_email(require_text(data, "email", "Email")),
        "roll_number": normalize_code(require_text(data, "roll_number", "Roll number")),
        "department_id": parse_id(data.get("department_id"), "Department"),
        "course_id": parse_id(data.get("course_id"), "Course"),
        "year": parse_int(data.get("year"), "Year", 1, 10, default=current.year if current else 1),
        "semester": parse_int(
            data.get("semester"), "Semester", 1, 12, default=current.semester if current else 1
        ),
        "status": parse_choice(
            data.get("status"), "Status", STUDENT_STATUSES, default=current.status if current else "active"
        ),
        "notes": optional_text(data, "notes"),
    }
    enrollment_date = parse_date(data.get("enrollment_date"), "Enrollment date", required=False)
    if enrollment_date:
        fields["enrollment_date"] = enrollment_date
    return fields


def new_login(name, email, password):
    """Validate and build (unsaved) the student's login account."""
    guard = UniqueGuard(User, "User", email=email)
    guard.check()
    validate_password(password, current_app.config["PASSWORD_MIN_LENGTH"])
    user = User(
        name=name,
        email=email,
        password_hash=hash_password(password),
        role="student",
        is_active=True
    )
    return user, guard


def create_student(actor, data):
    fields = parse_student_fields(data)

    guard = UniqueGuard(Student, "Student", email=fields["email"], roll_number=fields["roll_number"])
    guard.check()
    require_department(fields["department_id"])
    require_course(fields["course_id"])

    student = Student(**fields)

    extra_guards = []
    if parse_bool(data.get("create_login")):
        user, user_guard = new_login(fields["name"], fields["email"], data.get("password"))
        extra_guards.append(user_guard)
        student.user = user
        db.session.add(user)

    db.session.add(student)
    guard.commit(*extra_guards)
    logger.info("%s created student %s", actor.email, student.roll_number)
    return student


def update_student(actor, student_id, data):
    student = get_student(student_id)
    fields = parse_student_fields(data, current=student)

    guard = UniqueGuard(
        Student, "Student", exclude_id=student.student_id,
        email=fields["email"], roll_number=fields["roll_number"]
    )
    guard.check()
    require_department(fields["department_id"])
    require_course(fields["course_id"])

    # Everything is validated before the first attribute is touched.
    extra_guards = []
    new_user = None
    if parse_bool(data.get("create_login")) and student.user_id is None:
        new_user, user_guard = new_login(fields["name"], fields["email"], data.get("password"))
        extra_guards.append(user_guard)

    linked_user = student.user
    reset_password = data.get("reset_password")
    if reset_password and (linked_user is not None or new_user is not None):
        validate_password(reset_password, current_app.config["PASSWORD_MIN_LENGTH"])

    for key, value in fields.items():
        setattr(student, key, value)

    if new_user is not None:
        db.session.add(new_user)
        student.user = new_user
        linked_user = new_user

    if reset_password and linked_user is not None:
        linked_user.password_hash = hash_password(reset_password)

    guard.commit(*extra_guards)
    logger.info("%s updated student %s", actor.email, student.roll_number)
    return student


def delete_student(actor, student_id):
    student = get_student(student_id)
    roll_number = student.roll_number
    # The linked login account, if any, is kept.
    db.session.delete(student)
    db.session.commit()
    logger.info("%s deleted student %s", actor.email, roll_number)
