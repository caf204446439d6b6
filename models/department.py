from datetime import date

from extensions import db


class Department(db.Model):
    __tablename__ = "departments"

    department_id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    code = db.Column(db.String(20), nullable=False)
    description = db.Column(db.Text)
    head_of_department = db.Column(db.String(100))
    established_date = db.Column(db.Date, default=date.today)
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime, server_default=db.func.now())
    updated_at = db.Column(
        db.DateTime,
        server_default=db.func.now(),
        onupdate=db.func.now()
    )

    courses = db.relationship(
        "Course",
        backref="department",
        lazy=True,
        order_by="Course.name",
        passive_deletes="all"
    )

    __table_args__ = (
        db.UniqueConstraint("name", name="uq_departments_name"),
        db.UniqueConstraint("code", name="uq_departments_code"),
    )

    def to_dict(self, include_courses=False):
        data = {
            "department_id": self.department_id,
            "name": self.name,
            "code": self.code,
            "description": self.description,
            "head_of_department": self.head_of_department,
            "established_date": self.established_date.isoformat() if self.established_date else None,
            "is_active": self.is_active,
            "url": f"/departments/{self.department_id}",
        }
        if include_courses:
            data["courses"] = [c.to_dict() for c in self.courses]
        return data

    def __repr__(self):
        return f"<Department {self.code}>"
