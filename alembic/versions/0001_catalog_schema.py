"""
Initial schema: universities, programs, courses, labs, teachers, topics and their bridges
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# --- Alembic identifiers ---
revision = "0001_catalog_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "universities",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("slug", sa.String(), nullable=False, unique=True),
        sa.Column("country", sa.String(), nullable=True),
        sa.Column("country_code", sa.String(2), nullable=True),
        sa.Column("website", sa.String(), nullable=True),
        sa.Column("logo_url", sa.String(), nullable=True),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
    )
    op.create_index("ix_universities_name", "universities", ["name"])
    op.create_index("ix_universities_slug", "universities", ["slug"])

    op.create_table(
        "programs",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "university_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("universities.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("slug", sa.String(), nullable=False, unique=True),
        sa.Column("level", sa.String(2), nullable=True),
        sa.Column("ects_total", sa.Integer(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
    )
    op.create_index("ix_programs_university_id", "programs", ["university_id"])
    op.create_index("ix_programs_slug", "programs", ["slug"])

    op.create_table(
        "courses",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("code", sa.String(), nullable=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("ects", sa.Float(), nullable=True),
        sa.Column("language", sa.String(), nullable=True),
        sa.Column("term", sa.String(), nullable=True),
        sa.Column("level", sa.String(2), nullable=True),
        sa.Column("professor_name", sa.String(), nullable=True),
        sa.Column("year", sa.String(), nullable=True),
        sa.Column("topics", sa.Text(), nullable=True),
        sa.Column("exam_type", sa.String(), nullable=True),
        sa.Column("mandatory_optional", sa.String(), nullable=True),
        sa.Column("software_equipment", sa.Text(), nullable=True),
        sa.Column("which_year", sa.String(), nullable=True),
    )
    op.create_index("ix_courses_code", "courses", ["code"])
    op.create_index("ix_courses_name", "courses", ["name"])

    op.create_table(
        "labs",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("slug", sa.String(), nullable=False, unique=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("professors", sa.Text(), nullable=True),
        sa.Column("topics", sa.Text(), nullable=True),
        sa.Column("faculty_area", sa.String(), nullable=True),
        sa.Column("link", sa.String(), nullable=True),
        sa.Column("image_url", sa.String(), nullable=True),
    )
    op.create_index("ix_labs_name", "labs", ["name"])
    op.create_index("ix_labs_slug", "labs", ["slug"])

    op.create_table(
        "teachers",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("full_name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("topics", postgresql.JSONB(), nullable=False, server_default=sa.text("'[]'::jsonb")),
    )

    op.create_table(
        "topics",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(), nullable=False, unique=True),
        sa.Column("description", sa.Text(), nullable=True),
    )

    # bridges
    op.create_table(
        "course_universities",
        sa.Column("course_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("courses.id", ondelete="CASCADE"), primary_key=True),
        sa.Column(
            "university_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("universities.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )
    op.create_table(
        "course_programs",
        sa.Column("course_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("courses.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("program_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("programs.id", ondelete="CASCADE"), primary_key=True),
    )
    op.create_table(
        "course_topics",
        sa.Column("course_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("courses.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("topic_name", sa.String(), sa.ForeignKey("topics.name", ondelete="CASCADE"), primary_key=True),
    )
    op.create_table(
        "lab_universities",
        sa.Column("lab_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("labs.id", ondelete="CASCADE"), primary_key=True),
        sa.Column(
            "university_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("universities.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )


def downgrade():
    op.drop_table("lab_universities")
    op.drop_table("course_topics")
    op.drop_table("course_programs")
    op.drop_table("course_universities")
    op.drop_table("topics")
    op.drop_table("teachers")
    op.drop_index("ix_labs_slug", table_name="labs")
    op.drop_index("ix_labs_name", table_name="labs")
    op.drop_table("labs")
    op.drop_index("ix_courses_name", table_name="courses")
    op.drop_index("ix_courses_code", table_name="courses")
    op.drop_table("courses")
    op.drop_index("ix_programs_slug", table_name="programs")
    op.drop_index("ix_programs_university_id", table_name="programs")
    op.drop_table("programs")
    op.drop_index("ix_universities_slug", table_name="universities")
    op.drop_index("ix_universities_name", table_name="universities")
    op.drop_table("universities")
