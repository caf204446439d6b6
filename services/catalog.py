from models import Course, Department, Module


def semester_bucket(value):
    try:
        sem = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0
    return sem


def module_department_id(module):
    if module.get("department_id") is not None:
        return module["department_id"]
    course = module.get("course") or {}
    return course.get("department_id")


def module_course_id(module):
    if module.get("course_id") is not None:
        return module["course_id"]
    course = module.get("course") or {}
    return course.get("course_id")


def build_module_structure(departments, courses, modules):
    # Pure grouping over serialized, pre-sorted records; unresolved parents are skipped
    structure = {}

    for dep in departments:
        structure[dep["department_id"]] = {
            "department_id": dep["department_id"],
            "name": dep["name"],
            "code": dep["code"],
            "courses": {}
        }

    for course in courses:
        bucket = structure.get(course.get("department_id"))
        if bucket is None:
            continue  # department missing
        bucket["courses"][course["course_id"]] = {
            "course_id": course["course_id"],
            "name": course["name"],
            "code": course["code"],
            "semesters": {}
        }

    for module in modules:
        dep_bucket = structure.get(module_department_id(module))
        if dep_bucket is None:
            continue
        course_bucket = dep_bucket["courses"].get(module_course_id(module))
        if course_bucket is None:
            continue
        sem = semester_bucket(module.get("semester"))
        course_bucket["semesters"].setdefault(sem, []).append(module)

    return structure


def load_module_structure():
    departments = Department.query.order_by(Department.name).all()
    courses = Course.query.order_by(Course.name).all()
    modules = Module.query.order_by(Module.semester, Module.name).all()
    return build_module_structure(
        [d.to_dict() for d in departments],
        [c.to_dict() for c in courses],
        [m.to_dict() for m in modules],
    )


def active_catalog(search=None, department_id=None):
    """Active courses for the public catalog, sorted by name."""
    query = Course.query.filter(Course.is_active.is_(True))
    if department_id:
        query = query.filter(Course.department_id == department_id)
    if search:
        pattern = f"%{search.strip()}%"
        query = query.filter(
            Course.name.ilike(pattern) | Course.code.ilike(pattern) | Course.description.ilike(pattern)
        )
    return query.order_by(Course.name).all()
