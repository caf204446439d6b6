from extensions import db


class Course(db.Model):
    __tablename__ = "courses"

    course_id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(150), nullable=False)
    code = db.Column(db.String(20), nullable=False)

    department_id = db.Column(
        db.Integer,
        db.ForeignKey("departments.department_id"),
        nullable=False,
        index=True
    )

    duration = db.Column(db.Integer, nullable=False)  # years
    description = db.Column(db.Text)
    credits = db.Column(db.Integer, nullable=False)
    fee = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    start_date = db.Column(db.Date, nullable=False)
    end_date = db.Column(db.Date, nullable=True)
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime, server_default=db.func.now())
    updated_at = db.Column(
        db.DateTime,
        server_default=db.func.now(),
        onupdate=db.func.now()
    )

    modules = db.relationship(
        "Module",
        primaryjoin="Course.course_id == foreign(Module.course_id)",
        backref="course",
        lazy=True,
        passive_deletes="all"
    )

    __table_args__ = (
        db.UniqueConstraint("code", name="uq_courses_code"),
    )

    def to_dict(self, include_modules=False):
        department = self.department
        data = {
            "course_id": self.course_id,
            "name": self.name,
            "code": self.code,
            "department_id": self.department_id,
            "department": (
                {"department_id": department.department_id, "name": department.name, "code": department.code}
                if department else None
            ),
            "duration": self.duration,
            "description": self.description,
            "credits": self.credits,
            "fee": float(self.fee) if self.fee is not None else None,
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "end_date": self.end_date.isoformat() if self.end_date else None,
            "is_active": self.is_active,
            "url": f"/courses/{self.course_id}",
        }
        if include_modules:
            data["modules"] = [
                m.to_dict() for m in sorted(self.modules, key=lambda m: (m.semester, m.name))
            ]
        return data

    def __repr__(self):
        return f"<Course {self.code}>"
