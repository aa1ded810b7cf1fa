"""create api_users and api_tokens

Revision ID: 0001
Revises:
Create Date: 2024-10-17 10:08:45

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "api_users",
        sa.Column("client_id", sa.String(length=8), nullable=False),
        sa.Column("name", sa.String(length=40), nullable=True),
        sa.Column("email", sa.String(length=80), nullable=False),
        sa.Column("explanation", sa.String(length=400), nullable=False),
        sa.Column("validated", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("enabled", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("client_id"),
    )
    op.create_index("ix_api_users_email", "api_users", ["email"], unique=True)
    op.create_index("ix_api_users_enabled", "api_users", ["enabled"], unique=False)

    op.create_table(
        "api_tokens",
        sa.Column("api_token", sa.String(length=255), nullable=False),
        sa.Column("client_id", sa.String(length=8), nullable=False),
        sa.Column("created", sa.DateTime(), nullable=False),
        sa.Column("valid_until", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["client_id"], ["api_users.client_id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("api_token"),
    )
    op.create_index("ix_api_tokens_client_id", "api_tokens", ["client_id"], unique=False)
    op.create_index("ix_api_tokens_valid_until", "api_tokens", ["valid_until"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_api_tokens_valid_until", table_name="api_tokens")
    op.drop_index("ix_api_tokens_client_id", table_name="api_tokens")
    op.drop_table("api_tokens")
    op.drop_index("ix_api_users_enabled", table_name="api_users")
    op.drop_index("ix_api_users_email", table_name="api_users")
    op.drop_table("api_users")
