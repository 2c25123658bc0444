"""Initial schema – users and user_settings

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19

Accounts plus the optional one-row-per-user start-page settings.
"""

from alembic import op
import sqlalchemy as sa

# Alembic revision identifiers
revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # -- users ----------------------------------------------------------
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("username", sa.String(255), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("is_admin", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )

    # -- user_settings --------------------------------------------------
    op.create_table(
        "user_settings",
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("max_number_of_links", sa.Integer(), nullable=True),
        sa.Column("link_in_new_tab", sa.Boolean(), nullable=True),
        sa.Column("use_bg_image", sa.Boolean(), nullable=True),
        sa.Column("bg_image", sa.String(2048), nullable=True),
        sa.Column("columns", sa.Integer(), nullable=True),
        sa.Column("card_style", sa.String(64), nullable=True),
        sa.Column("enable_neon_shadows", sa.Boolean(), nullable=True),
        sa.Column("card_position", sa.String(64), nullable=True),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )


def downgrade() -> None:
    op.drop_table("user_settings")
    op.drop_table("users")
