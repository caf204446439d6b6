from datetime import date

from extensions import db

STUDENT_STATUSES = ("active", "graduated", "on_leave", "inactive")


class Student(db.Model):
    __tablename__ = "students"

    student_id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(120), nullable=False)
    roll_number = db.Column(db.String(30), nullable=False)

    department_id = db.Column(
        db.Integer,
        db.ForeignKey("departments.department_id"),
        nullable=False
    )

    course_id = db.Column(
        db.Integer,
        db.ForeignKey("courses.course_id"),
        nullable=False
    )

    year = db.Column(db.Integer, default=1, nullable=False)
    semester = db.Column(db.Integer, default=1, nullable=False)
    enrollment_date = db.Column(db.Date, default=date.today)
    status = db.Column(db.Enum(*STUDENT_STATUSES, name="student_status"), default="active", nullable=False)
    notes = db.Column(db.Text)

    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.user_id"),
        nullable=True
    )

    created_at = db.Column(db.DateTime, server_default=db.func.now())
    updated_at = db.Column(
        db.DateTime,
        server_default=db.func.now(),
        onupdate=db.func.now()
    )

    department = db.relationship("Department", backref=db.backref("students", passive_deletes="all"))
    course = db.relationship("Course", backref=db.backref("students", passive_deletes="all"))
    user = db.relationship("User", backref=db.backref("student", uselist=False))

    __table_args__ = (
        db.UniqueConstraint("email", name="uq_students_email"),
        db.UniqueConstraint("roll_number", name="uq_students_roll_number"),
        db.UniqueConstraint("user_id", name="uq_students_user_id"),
    )

    def to_dict(self):
        return {
            "student_id": self.student_id,
            "name": self.name,
            "email": self.email,
            "roll_number": self.roll_number,
            "department_id": self.department_id,
            "department": (
                {"department_id": self.department.department_id, "name": self.department.name, "code": self.department.code}
                if self.department else None
            ),
            "course_id": self.course_id,
            "course": (
                {"course_id": self.course.course_id, "name": self.course.name, "code": self.course.code}
                if self.course else None
            ),
            "year": self.year,
            "semester": self.semester,
            "enrollment_date": self.enrollment_date.isoformat() if self.enrollment_date else None,
            "status": self.status,
            "notes": self.notes,
            "user_id": self.user_id,
            "has_login": self.user_id is not None,
        }

    def __repr__(self):
        return f"<Student {self.roll_number}>"
