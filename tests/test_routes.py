from extensions import db
from models import Course, Department, Enrollment
from tests.factories import course_form, login, make_course, make_department, make_module, make_user, module_form


def test_writes_require_login(client):
    response = client.post("/api/departments", json={"name": "Physics", "code": "PHY"})
    assert response.status_code == 401
    assert response.get_json() == {"message": "Please log in to continue"}


def test_writes_require_admin(student_client):
    response = student_client.post("/api/departments", json={"name": "Physics", "code": "PHY"})
    assert response.status_code == 403

    response = student_client.get("/api/students")
    assert response.status_code == 403


def test_reads_are_public(app, client):
    with app.app_context():
        make_department("CS", name="Computer Science")

    response = client.get("/api/departments")
    assert response.status_code == 200
    assert [d["code"] for d in response.get_json()] == ["CS"]


def test_login_rejects_bad_credentials(app, client):
    with app.app_context():
        make_user("admin@example.com")

    assert login(client, "admin@example.com", "nope").status_code == 401
    assert client.post("/api/login", json={"email": "admin@example.com"}).status_code == 400


def test_department_crud(admin_client):
    response = admin_client.post("/api/departments", json={"name": "Physics", "code": "phy"})
    assert response.status_code == 201
    department = response.get_json()
    assert department["code"] == "PHY"

    response = admin_client.post("/api/departments", json={"name": "Physics", "code": "OTHER"})
    assert response.status_code == 400
    assert response.get_json()["message"] == "Department with this name already exists"

    url = f"/api/departments/{department['department_id']}"
    response = admin_client.put(url, json={"name": "Applied Physics", "code": "PHY"})
    assert response.status_code == 200
    assert response.get_json()["name"] == "Applied Physics"

    response = admin_client.delete(url)
    assert response.status_code == 200
    assert response.get_json()["courses_removed"] == 0

    assert admin_client.get(url).status_code == 404
    assert admin_client.delete(url).get_json() == {"message": "Department not found"}


def test_course_validation_errors(app, admin_client):
    with app.app_context():
        department_id = make_department().department_id

    response = admin_client.post("/api/courses", json=course_form(department_id, duration="0"))
    assert response.status_code == 400

    response = admin_client.post("/api/courses", json=course_form(9999))
    assert response.status_code == 400
    assert response.get_json()["message"] == "Department not found"

    response = admin_client.post("/api/courses", json=course_form(department_id))
    assert response.status_code == 201
    assert response.get_json()["fee"] == 1500.5


def test_course_delete_blocked_by_modules(app, admin_client):
    with app.app_context():
        course = make_course(make_department())
        make_module(course)
        course_id = course.course_id

    response = admin_client.delete(f"/api/courses/{course_id}")
    assert response.status_code == 400
    assert response.get_json()["message"] == "Cannot delete course with associated modules"


def test_structured_modules_keep_sort_order(app, client):
    with app.app_context():
        zoo = make_department("ZOO", name="Zoology")
        art = make_department("ART", name="Art")
        course = make_course(art, code="ART1", name="Drawing")
        make_module(course, code="B", name="Beta", semester=2)
        make_module(course, code="A", name="Alpha", semester=1)
        make_course(zoo, code="ZOO1", name="Animals")
        ids = (art.department_id, zoo.department_id, course.course_id)

    structure = client.get("/api/modules/structured").get_json()

    art_id, zoo_id, course_id = (str(i) for i in ids)
    assert list(structure) == [art_id, zoo_id]
    semesters = structure[art_id]["courses"][course_id]["semesters"]
    assert list(semesters) == ["1", "2"]
    assert semesters["1"][0]["code"] == "A"
    assert structure[zoo_id]["courses"][list(structure[zoo_id]["courses"])[0]]["semesters"] == {}


def test_portal_enroll_and_drop(app, student_client):
    with app.app_context():
        course_id = make_course(make_department()).course_id

    response = student_client.post("/api/portal/enroll", json={"course_id": course_id})
    assert response.status_code == 201
    assert response.get_json()["message"] == "Enrolled"

    response = student_client.post("/api/portal/enroll", json={"course_id": course_id})
    assert response.status_code == 200
    assert response.get_json() == {"message": "Already enrolled"}

    detail = student_client.get(f"/api/catalog/course/{course_id}").get_json()
    assert detail["enrolled"] is True

    courses = student_client.get("/api/portal/my-courses").get_json()
    assert [e["course"]["course_id"] for e in courses] == [course_id]

    assert student_client.post("/api/portal/drop", json={"course_id": course_id}).status_code == 200
    response = student_client.post("/api/portal/drop", json={"course_id": course_id})
    assert response.status_code == 404

    with app.app_context():
        assert Enrollment.query.count() == 0


def test_portal_is_for_students(admin_client):
    assert admin_client.get("/api/portal/my-courses").status_code == 403


def test_enroll_unknown_course(student_client):
    response = student_client.post("/api/portal/enroll", json={"course_id": 31337})
    assert response.status_code == 404
    assert response.get_json() == {"message": "Course not found"}


def test_catalog_hides_inactive_courses(app, client):
    with app.app_context():
        department = make_department()
        make_course(department, code="OPEN")
        closed = make_course(department, code="SHUT")
        closed.is_active = False
        db.session.commit()

    codes = [c["code"] for c in client.get("/api/catalog").get_json()]
    assert codes == ["OPEN"]


def test_browser_form_errors_flash_and_redirect(app, admin_client):
    with app.app_context():
        make_department("CS", name="Computer Science")

    response = admin_client.post(
        "/departments",
        data={"name": "Computer Science", "code": "NEW"},
        headers={"Referer": "http://localhost/departments"}
    )
    assert response.status_code == 302
    assert response.headers["Location"].endswith("/departments")

    with admin_client.session_transaction() as session:
        assert ("danger", "Department with this name already exists") in session["_flashes"]


def test_browser_form_success_redirects_to_record(app, admin_client):
    response = admin_client.post("/departments", data={"name": "Physics", "code": "PHY"})
    assert response.status_code == 302

    with app.app_context():
        department = Department.query.filter_by(code="PHY").one()
        assert response.headers["Location"].endswith(f"/departments/{department.department_id}")


def test_browser_anonymous_write_redirects_to_login(client):
    response = client.post("/departments", data={"name": "Physics", "code": "PHY"})
    assert response.status_code == 302
    assert "/login" in response.headers["Location"]


def test_html_pages_render(app, admin_client):
    with app.app_context():
        make_course(make_department())

    response = admin_client.get("/catalog")
    assert response.status_code == 200
    assert b"CS101" in response.data
    assert admin_client.get("/modules/structured").status_code == 200


def test_admin_manages_users(admin_client):
    response = admin_client.post(
        "/api/admin/users",
        json={"name": "Staff", "email": "Staff@Example.com", "password": "staffpw", "role": "staff"}
    )
    assert response.status_code == 201
    user = response.get_json()
    assert user["email"] == "staff@example.com"
    assert "password_hash" not in user

    response = admin_client.delete(f"/api/admin/users/{user['user_id']}")
    assert response.status_code == 200

    me = admin_client.get("/api/admin/users").get_json()
    admin_id = [u for u in me if u["email"] == "admin@example.com"][0]["user_id"]
    response = admin_client.delete(f"/api/admin/users/{admin_id}")
    assert response.status_code == 400


def test_department_delete_cascades_over_http(app, admin_client):
    with app.app_context():
        department = make_department()
        make_course(department, code="C1")
        make_course(department, code="C2")
        department_id = department.department_id

    response = admin_client.delete(f"/api/departments/{department_id}")
    assert response.get_json()["courses_removed"] == 2

    with app.app_context():
        assert Course.query.count() == 0


def test_bad_assessment_methods_is_a_400(app, admin_client):
    with app.app_context():
        course = make_course(make_department())
        form = module_form(course.course_id, course.department_id, assessment_methods=[60, 30, 10])

    response = admin_client.post("/api/modules", json=form)
    assert response.status_code == 400
    assert response.get_json() == {"message": "Assessment weights must be an object"}


def test_course_with_enrollment_deletes_over_http(app, admin_client):
    with app.app_context():
        course_id = make_course(make_department()).course_id
        learner = make_user("learner@example.com", role="student")
        db.session.add(Enrollment(user_id=learner.user_id, course_id=course_id))
        db.session.commit()

    response = admin_client.delete(f"/api/courses/{course_id}")
    assert response.status_code == 200

    with app.app_context():
        assert Enrollment.query.count() == 0
