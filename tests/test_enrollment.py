import pytest

from models import Enrollment
from services import enrollment_service
from services.context import Actor
from services.errors import NotFound
from tests.factories import make_course, make_department, make_user


@pytest.fixture
def learner(ctx):
    return Actor.from_user(make_user("learner@example.com", role="student"))


def test_enroll_creates_enrolled_row(learner):
    course = make_course(make_department())

    result = enrollment_service.enroll(learner, course.course_id)

    assert result.created is True
    assert result.enrollment.status == "enrolled"
    assert Enrollment.query.count() == 1


def test_second_enroll_is_a_no_op(learner):
    course = make_course(make_department())
    enrollment_service.enroll(learner, course.course_id)

    result = enrollment_service.enroll(learner, course.course_id)

    assert result.created is False
    assert result.enrollment.user_id == learner.user_id
    assert Enrollment.query.count() == 1


def test_enroll_unknown_course(learner):
    with pytest.raises(NotFound) as excinfo:
        enrollment_service.enroll(learner, 404)
    assert excinfo.value.message == "Course not found"


def test_drop_deletes_the_row(learner):
    course = make_course(make_department())
    enrollment_service.enroll(learner, course.course_id)

    enrollment_service.drop(learner, course.course_id)

    assert Enrollment.query.count() == 0
    assert Enrollment.query.filter_by(status="dropped").count() == 0


def test_drop_without_enrollment(learner):
    course = make_course(make_department())
    with pytest.raises(NotFound) as excinfo:
        enrollment_service.drop(learner, course.course_id)
    assert excinfo.value.message == "Enrollment not found"


def test_re_enroll_after_drop(learner):
    course = make_course(make_department())
    enrollment_service.enroll(learner, course.course_id)
    enrollment_service.drop(learner, course.course_id)

    assert enrollment_service.enroll(learner, course.course_id).created is True


def test_my_courses_lists_only_own_enrollments(learner):
    department = make_department()
    first = make_course(department, code="C1")
    second = make_course(department, code="C2")
    other = Actor.from_user(make_user("other@example.com", role="student"))

    enrollment_service.enroll(learner, first.course_id)
    enrollment_service.enroll(learner, second.course_id)
    enrollment_service.enroll(other, first.course_id)

    codes = sorted(e.course.code for e in enrollment_service.my_courses(learner))
    assert codes == ["C1", "C2"]
    assert enrollment_service.is_enrolled(other, first.course_id)
    assert not enrollment_service.is_enrolled(other, second.course_id)
