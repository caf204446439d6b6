# models/module.py
from extensions import db

module_prerequisites = db.Table(
    "module_prerequisites",
    db.Column("module_id", db.Integer, db.ForeignKey("modules.module_id"), primary_key=True),
    db.Column("prerequisite_id", db.Integer, db.ForeignKey("modules.module_id"), primary_key=True)
)


class Module(db.Model):
    __tablename__ = "modules"

    module_id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    name = db.Column(db.String(150), nullable=False)
    code = db.Column(db.String(20), nullable=False)

    # No FK constraints: a department delete leaves its modules behind
    course_id = db.Column(db.Integer, nullable=False, index=True)
    department_id = db.Column(db.Integer, nullable=False, index=True)

    description = db.Column(db.Text)
    credits = db.Column(db.Integer, nullable=False)
    semester = db.Column(db.Integer, nullable=False)
    is_core = db.Column(db.Boolean, default=True, nullable=False)
    lecturer = db.Column(db.String(100))
    learning_outcomes = db.Column(db.JSON, default=list)

    # Assessment weights, percentages summing to 100
    exam_weight = db.Column(db.Float, nullable=False, default=60)
    coursework_weight = db.Column(db.Float, nullable=False, default=40)
    practical_weight = db.Column(db.Float, nullable=False, default=0)

    created_at = db.Column(db.DateTime, server_default=db.func.now())
    updated_at = db.Column(
        db.DateTime,
        server_default=db.func.now(),
        onupdate=db.func.now()
    )

    department = db.relationship(
        "Department",
        primaryjoin="foreign(Module.department_id) == Department.department_id",
        backref=db.backref("department_modules", passive_deletes="all")
    )
    prerequisites = db.relationship(
        "Module",
        secondary=module_prerequisites,
        primaryjoin=module_id == module_prerequisites.c.module_id,
        secondaryjoin=module_id == module_prerequisites.c.prerequisite_id,
        order_by="Module.name",
        lazy=True
    )

    __table_args__ = (
        db.UniqueConstraint("code", name="uq_modules_code"),
        db.CheckConstraint("semester >= 1 AND semester <= 12", name="ck_modules_semester"),
    )

    @property
    def assessment_methods(self):
        return {
            "exam": self.exam_weight,
            "coursework": self.coursework_weight,
            "practical": self.practical_weight,
        }

    def to_dict(self):
        course = self.course
        department = self.department
        return {
            "module_id": self.module_id,
            "name": self.name,
            "code": self.code,
            "course_id": self.course_id,
            "course": (
                {
                    "course_id": course.course_id,
                    "name": course.name,
                    "code": course.code,
                    "department_id": course.department_id,
                }
                if course else None
            ),
            "department_id": self.department_id,
            "department": (
                {"department_id": department.department_id, "name": department.name, "code": department.code}
                if department else None
            ),
            "description": self.description,
            "credits": self.credits,
            "semester": self.semester,
            "is_core": self.is_core,
            "lecturer": self.lecturer,
            "learning_outcomes": list(self.learning_outcomes or []),
            "assessment_methods": self.assessment_methods,
            "prerequisites": [
                {"module_id": p.module_id, "name": p.name, "code": p.code}
                for p in self.prerequisites
            ],
            "url": f"/modules/{self.module_id}",
        }

    def __repr__(self):
        return f"<Module {self.code}>"
