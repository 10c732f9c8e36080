"""
Add teacher profile columns, lab reviews and their upvotes
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# --- Alembic identifiers ---
revision = "0005_teachers_and_lab_reviews"
down_revision = "0004_workbench_tables"
branch_labels = None
depends_on = None

NOW = sa.text("timezone('utc', now())")


def upgrade():
    op.add_column("teachers", sa.Column("name", sa.String(), nullable=True))
    op.add_column("teachers", sa.Column("h_index", sa.Integer(), nullable=True))
    op.add_column("teachers", sa.Column("citations", sa.Integer(), nullable=True))
    op.create_index("ix_teachers_full_name", "teachers", ["full_name"])

    op.create_table(
        "lab_reviews",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("lab_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("labs.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("research_quality", sa.String(), nullable=True),
        sa.Column("mentorship", sa.String(), nullable=True),
        sa.Column("work_environment", sa.String(), nullable=True),
        sa.Column("comment", sa.Text(), nullable=True),
        sa.Column("upvote_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=NOW, nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=NOW, nullable=False),
        sa.UniqueConstraint("lab_id", "user_id", name="uq_lab_reviews_lab_user"),
        sa.CheckConstraint("rating BETWEEN 1 AND 5", name="ck_lab_reviews_rating"),
    )
    op.create_index("ix_lab_reviews_lab_id", "lab_reviews", ["lab_id"])
    op.create_index("ix_lab_reviews_user_id", "lab_reviews", ["user_id"])

    op.create_table(
        "lab_review_upvotes",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "review_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("lab_reviews.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=NOW, nullable=False),
        sa.UniqueConstraint("review_id", "user_id", name="uq_lab_review_upvotes_review_user"),
    )
    op.create_index("ix_lab_review_upvotes_review_id", "lab_review_upvotes", ["review_id"])


def downgrade():
    op.drop_index("ix_lab_review_upvotes_review_id", table_name="lab_review_upvotes")
    op.drop_table("lab_review_upvotes")
    op.drop_index("ix_lab_reviews_user_id", table_name="lab_reviews")
    op.drop_index("ix_lab_reviews_lab_id", table_name="lab_reviews")
    op.drop_table("lab_reviews")
    op.drop_index("ix_teachers_full_name", table_name="teachers")
    op.drop_column("teachers", "citations")
    op.drop_column("teachers", "h_index")
    op.drop_column("teachers", "name")
