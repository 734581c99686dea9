"""Page permissions table.

Revision ID: 001
Revises:
Create Date: 2025-05-06

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "page_permissions",
        sa.Column("id", sa.UUID(), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("page_id", sa.UUID(), sa.ForeignKey("pages.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_id", sa.UUID(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=True),
        sa.Column("group_id", sa.UUID(), sa.ForeignKey("groups.id", ondelete="CASCADE"), nullable=True),
        sa.Column("role", sa.String(50), nullable=False),
        sa.Column("added_by_id", sa.UUID(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column(
            "workspace_id",
            sa.UUID(),
            sa.ForeignKey("workspaces.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint(
            "(user_id IS NOT NULL AND group_id IS NULL) OR (user_id IS NULL AND group_id IS NOT NULL)",
            name="page_permissions_either_user_id_or_group_id_check",
        ),
        sa.CheckConstraint(
            "role IN ('reader', 'writer', 'admin')",
            name="page_permissions_role_check",
        ),
    )
    op.create_index(
        "page_permissions_page_id_user_id_unique",
        "page_permissions",
        ["page_id", "user_id"],
        unique=True,
        postgresql_where=sa.text("user_id IS NOT NULL AND deleted_at IS NULL"),
    )
    op.create_index(
        "page_permissions_page_id_group_id_unique",
        "page_permissions",
        ["page_id", "group_id"],
        unique=True,
        postgresql_where=sa.text("group_id IS NOT NULL AND deleted_at IS NULL"),
    )
    op.create_index("ix_page_permissions_workspace_id", "page_permissions", ["workspace_id"])


def downgrade() -> None:
    op.drop_index("ix_page_permissions_workspace_id", table_name="page_permissions")
    op.drop_index("page_permissions_page_id_group_id_unique", table_name="page_permissions")
    op.drop_index("page_permissions_page_id_user_id_unique", table_name="page_permissions")
    op.drop_table("page_permissions")
