"""Initial schema - namespace and grant_entry.

Revision ID: 001
Revises:
Create Date: 2026-03-02

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "namespace",
        sa.Column("name", sa.String(255), primary_key=True),
        sa.Column("cluster", sa.String(255), nullable=False),
        sa.Column(
            "labels",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_namespace_cluster", "namespace", ["cluster"])

    op.create_table(
        "grant_entry",
        sa.Column("cluster", sa.String(255), primary_key=True),
        sa.Column("namespace", sa.String(255), primary_key=True),
        sa.Column("name", sa.String(255), primary_key=True),
        sa.Column("resource_type", sa.String(50), nullable=False),
        sa.Column("resource", sa.String(255), nullable=False),
        sa.Column("pattern_type", sa.String(50), nullable=False),
        sa.Column("permission", sa.String(50), nullable=False),
        sa.Column("granted_to", sa.String(255), nullable=False),
        sa.Column(
            "labels",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
    )
    # Snapshot reads are per cluster; grantee lookups back the claim endpoint.
    op.create_index("ix_grant_entry_cluster_type", "grant_entry", ["cluster", "resource_type"])
    op.create_index("ix_grant_entry_granted_to", "grant_entry", ["cluster", "granted_to"])


def downgrade() -> None:
    op.drop_index("ix_grant_entry_granted_to", table_name="grant_entry")
    op.drop_index("ix_grant_entry_cluster_type", table_name="grant_entry")
    op.drop_table("grant_entry")
    op.drop_index("ix_namespace_cluster", table_name="namespace")
    op.drop_table("namespace")
