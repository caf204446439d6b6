"""create catalog tables

Revision ID: 3b7e9a41c2d0
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "3b7e9a41c2d0"
down_revision = None
branch_labels = None
depends_on = None


def timestamps():
    return [
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=True),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=True),
    ]


def upgrade():
    op.create_table(
        "users",
        sa.Column("user_id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=120), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=20), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *timestamps(),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )
    op.create_table(
        "departments",
        sa.Column("department_id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("code", sa.String(length=20), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("head_of_department", sa.String(length=100), nullable=True),
        sa.Column("established_date", sa.Date(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *timestamps(),
        sa.UniqueConstraint("name", name="uq_departments_name"),
        sa.UniqueConstraint("code", name="uq_departments_code"),
    )
    op.create_table(
        "courses",
        sa.Column("course_id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=150), nullable=False),
        sa.Column("code", sa.String(length=20), nullable=False),
        sa.Column("department_id", sa.Integer(), nullable=False),
        sa.Column("duration", sa.Integer(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("credits", sa.Integer(), nullable=False),
        sa.Column("fee", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *timestamps(),
        sa.ForeignKeyConstraint(["department_id"], ["departments.department_id"]),
        sa.UniqueConstraint("code", name="uq_courses_code"),
    )
    op.create_index("ix_courses_department_id", "courses", ["department_id"])
    op.create_table(
        "modules",
        sa.Column("module_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(length=150), nullable=False),
        sa.Column("code", sa.String(length=20), nullable=False),
        sa.Column("course_id", sa.Integer(), nullable=False),
        sa.Column("department_id", sa.Integer(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("credits", sa.Integer(), nullable=False),
        sa.Column("semester", sa.Integer(), nullable=False),
        sa.Column("is_core", sa.Boolean(), nullable=False),
        sa.Column("lecturer", sa.String(length=100), nullable=True),
        sa.Column("learning_outcomes", sa.JSON(), nullable=True),
        sa.Column("exam_weight", sa.Float(), nullable=False),
        sa.Column("coursework_weight", sa.Float(), nullable=False),
        sa.Column("practical_weight", sa.Float(), nullable=False),
        *timestamps(),
        sa.UniqueConstraint("code", name="uq_modules_code"),
        sa.CheckConstraint("semester >= 1 AND semester <= 12", name="ck_modules_semester"),
    )
    op.create_index("ix_modules_course_id", "modules", ["course_id"])
    op.create_index("ix_modules_department_id", "modules", ["department_id"])
    op.create_table(
        "module_prerequisites",
        sa.Column("module_id", sa.Integer(), primary_key=True),
        sa.Column("prerequisite_id", sa.Integer(), primary_key=True),
        sa.ForeignKeyConstraint(["module_id"], ["modules.module_id"]),
        sa.ForeignKeyConstraint(["prerequisite_id"], ["modules.module_id"]),
    )
    op.create_table(
        "students",
        sa.Column("student_id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=120), nullable=False),
        sa.Column("roll_number", sa.String(length=30), nullable=False),
        sa.Column("department_id", sa.Integer(), nullable=False),
        sa.Column("course_id", sa.Integer(), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("semester", sa.Integer(), nullable=False),
        sa.Column("enrollment_date", sa.Date(), nullable=True),
        sa.Column(
            "status",
            sa.Enum("active", "graduated", "on_leave", "inactive", name="student_status"),
            nullable=False
        ),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("user_id", sa.Integer(), nullable=True),
        *timestamps(),
        sa.ForeignKeyConstraint(["department_id"], ["departments.department_id"]),
        sa.ForeignKeyConstraint(["course_id"], ["courses.course_id"]),
        sa.ForeignKeyConstraint(["user_id"], ["users.user_id"]),
        sa.UniqueConstraint("email", name="uq_students_email"),
        sa.UniqueConstraint("roll_number", name="uq_students_roll_number"),
        sa.UniqueConstraint("user_id", name="uq_students_user_id"),
    )
    op.create_table(
        "enrollments",
        sa.Column("enrollment_id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("course_id", sa.Integer(), nullable=False),
        sa.Column("status", sa.Enum("enrolled", "dropped", name="enrollment_status"), nullable=False),
        sa.Column("joined_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.user_id"]),
        sa.ForeignKeyConstraint(["course_id"], ["courses.course_id"]),
        sa.UniqueConstraint("user_id", "course_id", name="uq_enrollments_user_course"),
    )


def downgrade():
    op.drop_table("enrollments")
    op.drop_table("students")
    op.drop_table("module_prerequisites")
    op.drop_index("ix_modules_department_id", table_name="modules")
    op.drop_index("ix_modules_course_id", table_name="modules")
    op.drop_table("modules")
    op.drop_index("ix_courses_department_id", table_name="courses")
    op.drop_table("courses")
    op.drop_table("departments")
    op.drop_table("users")
