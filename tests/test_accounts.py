import pytest

from extensions import db
from models import Enrollment, Student, User
from services import enrollment_service, student_service, user_service
from services.auth_service import authenticate_user
from services.context import Actor
from services.errors import DuplicateKey, ValidationError
from tests.factories import PASSWORD, make_course, make_department, make_user, student_form
from utils.password_utils import verify_password


@pytest.fixture
def course(ctx):
    return make_course(make_department())


def test_create_student_with_login(actor, course):
    student = student_service.create_student(
        actor,
        student_form(course.department_id, course.course_id, create_login="on", password="welcome1")
    )

    assert student.user is not None
    assert student.user.role == "student"
    assert student.user.email == "ada@example.com"
    assert verify_password("welcome1", student.user.password_hash)


def test_student_login_email_taken_writes_nothing(actor, course):
    make_user("ada@example.com", role="staff")

    with pytest.raises(DuplicateKey) as excinfo:
        student_service.create_student(
            actor,
            student_form(course.department_id, course.course_id, create_login="on", password="welcome1")
        )

    assert excinfo.value.label == "User"
    assert Student.query.count() == 0
    assert User.query.filter_by(email="ada@example.com").count() == 1


def test_student_login_password_too_short(actor, course):
    with pytest.raises(ValidationError):
        student_service.create_student(
            actor,
            student_form(course.department_id, course.course_id, create_login=True, password="abc")
        )
    assert Student.query.count() == 0


def test_student_without_login(actor, course):
    student = student_service.create_student(actor, student_form(course.department_id, course.course_id))
    assert student.user_id is None
    assert student.roll_number == "R001"
    assert student.status == "active"


def test_update_student_resets_linked_password(actor, course):
    student = student_service.create_student(
        actor,
        student_form(course.department_id, course.course_id, create_login="on", password="welcome1")
    )

    student_service.update_student(
        actor,
        student.student_id,
        student_form(course.department_id, course.course_id, year="2", reset_password="changed1")
    )

    assert student.year == 2
    assert verify_password("changed1", student.user.password_hash)


def test_update_student_short_reset_changes_nothing(actor, course):
    student = student_service.create_student(
        actor,
        student_form(course.department_id, course.course_id, create_login="on", password="welcome1")
    )
    student_id = student.student_id

    with pytest.raises(ValidationError):
        student_service.update_student(
            actor,
            student_id,
            student_form(course.department_id, course.course_id, name="Renamed", reset_password="x")
        )

    db.session.rollback()
    assert db.session.get(Student, student_id).name == "Ada Lovelace"


def test_update_student_adds_login_later(actor, course):
    student = student_service.create_student(actor, student_form(course.department_id, course.course_id))

    student_service.update_student(
        actor,
        student.student_id,
        student_form(course.department_id, course.course_id, create_login="on", password="welcome1")
    )

    assert student.user is not None
    assert authenticate_user("ADA@example.com", "welcome1") == student.user


def test_delete_student_keeps_login(actor, course):
    student = student_service.create_student(
        actor,
        student_form(course.department_id, course.course_id, create_login="on", password="welcome1")
    )
    user_id = student.user_id

    student_service.delete_student(actor, student.student_id)

    assert Student.query.count() == 0
    assert db.session.get(User, user_id) is not None


def test_user_cannot_delete_self(actor):
    with pytest.raises(ValidationError):
        user_service.delete_user(actor, actor.user_id)
    assert db.session.get(User, actor.user_id) is not None


def test_delete_user_unlinks_student_and_drops_enrollments(actor, course):
    student = student_service.create_student(
        actor,
        student_form(course.department_id, course.course_id, create_login="on", password="welcome1")
    )
    student_id, user_id = student.student_id, student.user_id
    enrollment_service.enroll(Actor.from_user(student.user), course.course_id)

    user_service.delete_user(actor, user_id)

    assert db.session.get(User, user_id) is None
    assert db.session.get(Student, student_id).user_id is None
    assert Enrollment.query.count() == 0


def test_update_user_checkbox_semantics(actor):
    user = make_user("staff@example.com", role="staff")

    user_service.update_user(actor, user.user_id, {"name": "Staff", "email": "staff@example.com"})
    assert user.is_active is False

    user_service.update_user(
        actor, user.user_id, {"name": "Staff", "email": "staff@example.com", "is_active": "on"}
    )
    assert user.is_active is True
    assert user.role == "staff"


def test_create_user_validates_role_and_password(actor):
    with pytest.raises(ValidationError):
        user_service.create_user(actor, {"name": "X", "email": "x@example.com", "password": PASSWORD, "role": "root"})
    with pytest.raises(ValidationError):
        user_service.create_user(actor, {"name": "X", "email": "x@example.com", "password": "123"})
    assert User.query.filter_by(email="x@example.com").count() == 0


def test_authenticate_user(ctx):
    make_user("active@example.com", role="student")
    make_user("idle@example.com", role="student", is_active=False)

    assert authenticate_user("Active@Example.com", PASSWORD).email == "active@example.com"
    assert authenticate_user("active@example.com", "wrong") is None
    assert authenticate_user("idle@example.com", PASSWORD) is None
    assert authenticate_user("nobody@example.com", PASSWORD) is None
