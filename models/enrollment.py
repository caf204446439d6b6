from extensions import db

ENROLLMENT_STATUSES = ("enrolled", "dropped")


class Enrollment(db.Model):
    __tablename__ = "enrollments"

    enrollment_id = db.Column(db.Integer, primary_key=True)

    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.user_id"),
        nullable=False
    )

    course_id = db.Column(
        db.Integer,
        db.ForeignKey("courses.course_id"),
        nullable=False
    )

    status = db.Column(db.Enum(*ENROLLMENT_STATUSES, name="enrollment_status"), default="enrolled", nullable=False)
    joined_at = db.Column(db.DateTime, server_default=db.func.now())
    created_at = db.Column(db.DateTime, server_default=db.func.now())

    user = db.relationship("User", backref=db.backref("enrollments", passive_deletes="all"))
    course = db.relationship("Course", backref=db.backref("enrollments", passive_deletes="all"))

    __table_args__ = (
        db.UniqueConstraint("user_id", "course_id", name="uq_enrollments_user_course"),
    )

    def to_dict(self):
        course = self.course
        return {
            "enrollment_id": self.enrollment_id,
            "user_id": self.user_id,
            "course_id": self.course_id,
            "course": course.to_dict() if course else None,
            "status": self.status,
            "joined_at": self.joined_at.isoformat() if self.joined_at else None,
        }

    def __repr__(self):
        return f"<Enrollment user={self.user_id} course={self.course_id}>"
