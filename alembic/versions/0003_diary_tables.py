"""
Add diary notebooks, pages and page items
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# --- Alembic identifiers ---
revision = "0003_diary_tables"
down_revision = "0002_users_saved_reviews"
branch_labels = None
depends_on = None

NOW = sa.text("timezone('utc', now())")


def upgrade():
    op.create_table(
        "diary_notebooks",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(), nullable=False, server_default="My Semester Planner"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=NOW, nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=NOW, nullable=False),
    )
    op.create_index("ix_diary_notebooks_user_id", "diary_notebooks", ["user_id"])

    op.create_table(
        "diary_pages",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "notebook_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("diary_notebooks.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("page_number", sa.Integer(), nullable=False),
        sa.Column("page_type", sa.String(), nullable=False, server_default="semester_planner"),
        sa.Column("title", sa.String(), nullable=True),
        sa.Column("semester", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=NOW, nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=NOW, nullable=False),
    )
    op.create_index("ix_diary_pages_notebook_id", "diary_pages", ["notebook_id"])

    op.create_table(
        "diary_page_items",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "page_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("diary_pages.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("item_type", sa.String(), nullable=False),
        sa.Column("reference_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("position_x", sa.Float(), nullable=False, server_default="0"),
        sa.Column("position_y", sa.Float(), nullable=False, server_default="0"),
        sa.Column("width", sa.Float(), nullable=False, server_default="200"),
        sa.Column("height", sa.Float(), nullable=False, server_default="100"),
        sa.Column("color", sa.String(), nullable=False, server_default="yellow"),
        sa.Column("zone", sa.String(), nullable=True),
        sa.Column("is_completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=NOW, nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=NOW, nullable=False),
    )
    op.create_index("ix_diary_page_items_page_id", "diary_page_items", ["page_id"])


def downgrade():
    op.drop_index("ix_diary_page_items_page_id", table_name="diary_page_items")
    op.drop_table("diary_page_items")
    op.drop_index("ix_diary_pages_notebook_id", table_name="diary_pages")
    op.drop_table("diary_pages")
    op.drop_index("ix_diary_notebooks_user_id", table_name="diary_notebooks")
    op.drop_table("diary_notebooks")
