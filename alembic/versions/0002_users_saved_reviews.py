"""
Add user profiles, saved items and course reviews with upvotes
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# --- Alembic identifiers ---
revision = "0002_users_saved_reviews"
down_revision = "0001_catalog_schema"
branch_labels = None
depends_on = None

NOW = sa.text("timezone('utc', now())")


def _saved_table(name: str, target_column: str, target_table: str):
    op.create_table(
        name,
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column(
            target_column,
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey(f"{target_table}.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=NOW, nullable=False),
        sa.UniqueConstraint("user_id", target_column, name=f"uq_{name}_user_{target_column[:-3]}"),
    )
    op.create_index(f"ix_{name}_user_id", name, ["user_id"])


def upgrade():
    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("username", sa.String(), nullable=True, unique=True),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("profile_photo_url", sa.String(), nullable=True),
        sa.Column("email_public", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=NOW, nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=NOW, nullable=False),
    )

    _saved_table("saved_courses", "course_id", "courses")
    _saved_table("saved_labs", "lab_id", "labs")
    _saved_table("saved_programs", "program_id", "programs")

    op.create_table(
        "course_reviews",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("course_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("courses.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("difficulty", sa.String(), nullable=True),
        sa.Column("workload", sa.String(), nullable=True),
        sa.Column("organization", sa.String(), nullable=True),
        sa.Column("comment", sa.Text(), nullable=True),
        sa.Column("upvote_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=NOW, nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=NOW, nullable=False),
        sa.UniqueConstraint("course_id", "user_id", name="uq_course_reviews_course_user"),
        sa.CheckConstraint("rating BETWEEN 1 AND 5", name="ck_course_reviews_rating"),
    )
    op.create_index("ix_course_reviews_course_id", "course_reviews", ["course_id"])
    op.create_index("ix_course_reviews_user_id", "course_reviews", ["user_id"])

    op.create_table(
        "course_review_upvotes",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "review_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("course_reviews.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=NOW, nullable=False),
        sa.UniqueConstraint("review_id", "user_id", name="uq_course_review_upvotes_review_user"),
    )
    op.create_index("ix_course_review_upvotes_review_id", "course_review_upvotes", ["review_id"])


def downgrade():
    op.drop_index("ix_course_review_upvotes_review_id", table_name="course_review_upvotes")
    op.drop_table("course_review_upvotes")
    op.drop_index("ix_course_reviews_user_id", table_name="course_reviews")
    op.drop_index("ix_course_reviews_course_id", table_name="course_reviews")
    op.drop_table("course_reviews")
    for name in ("saved_programs", "saved_labs", "saved_courses"):
        op.drop_index(f"ix_{name}_user_id", table_name=name)
        op.drop_table(name)
    op.drop_table("users")
