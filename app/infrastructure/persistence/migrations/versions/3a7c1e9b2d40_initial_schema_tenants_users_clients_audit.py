"""initial_schema_tenants_users_clients_audit

Revision ID: 3a7c1e9b2d40
Revises:
Create Date: 2026-10-19 09:12:41.503118

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3a7c1e9b2d40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _record_columns() -> list[sa.Column]:
    """Columns shared by Users and Clients (fresh objects per table)."""
    return [
        sa.Column("Id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("TenantId", sa.String(4), nullable=False),
        sa.Column("TenantUserId", sa.String(32), nullable=False),
        sa.Column("FirstName", sa.String(100), nullable=False),
        sa.Column("LastName", sa.String(100), nullable=False),
        sa.Column("Email", sa.String(255), nullable=False),
        sa.Column("Photo", sa.String(255), nullable=True),
        sa.Column("Active", sa.SmallInteger(), server_default=sa.text("0"), nullable=False),
        sa.Column("Comments", sa.Text(), nullable=True),
        sa.Column("Password", sa.String(255), nullable=True),
        sa.Column("CreatedBy", sa.String(64), nullable=True),
        sa.Column(
            "CreatedDate",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column("UpdatedBy", sa.String(64), nullable=True),
        sa.Column("UpdatedDate", sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "Tenants",
        sa.Column("TenantId", sa.String(4), nullable=False),
        sa.Column("TenantName", sa.String(200), nullable=False),
        sa.PrimaryKeyConstraint("TenantId", name="pk_tenants"),
    )

    op.create_table(
        "Users",
        *_record_columns(),
        sa.PrimaryKeyConstraint("Id"),
        sa.ForeignKeyConstraint(["TenantId"], ["Tenants.TenantId"]),
        sa.UniqueConstraint("Email", name="uq_users_email"),
        sa.UniqueConstraint("TenantUserId", name="uq_users_tenant_user_id"),
    )
    op.create_index("ix_Users_TenantId", "Users", ["TenantId"])

    op.create_table(
        "Clients",
        *_record_columns(),
        sa.Column("Phone", sa.String(50), nullable=True),
        sa.Column("Address", sa.String(255), nullable=True),
        sa.Column("City", sa.String(100), nullable=True),
        sa.Column("State", sa.String(100), nullable=True),
        sa.Column("Zip", sa.String(20), nullable=True),
        sa.Column("Country", sa.String(100), nullable=True),
        sa.Column("DateOfBirth", sa.Date(), nullable=True),
        sa.Column("Gender", sa.String(20), nullable=True),
        sa.PrimaryKeyConstraint("Id"),
        sa.ForeignKeyConstraint(["TenantId"], ["Tenants.TenantId"]),
        sa.UniqueConstraint("TenantId", "Email", name="uq_clients_tenant_email"),
        sa.UniqueConstraint("TenantUserId", name="uq_clients_tenant_user_id"),
    )
    op.create_index("ix_Clients_TenantId", "Clients", ["TenantId"])

    op.create_table(
        "Audit",
        sa.Column("Id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("UserId", sa.String(64), nullable=True),
        sa.Column("TableName", sa.String(64), nullable=False),
        sa.Column("ActionType", sa.String(32), nullable=False),
        sa.Column("TenantId", sa.String(4), nullable=True),
        sa.Column("TenantUserId", sa.String(32), nullable=True),
        sa.Column("Message", sa.Text(), nullable=True),
        sa.Column(
            "CreatedDate",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("Id"),
    )
    op.create_index("ix_Audit_UserId", "Audit", ["UserId"])
    op.create_index("ix_Audit_TenantId", "Audit", ["TenantId"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_Audit_TenantId", table_name="Audit")
    op.drop_index("ix_Audit_UserId", table_name="Audit")
    op.drop_table("Audit")
    op.drop_index("ix_Clients_TenantId", table_name="Clients")
    op.drop_table("Clients")
    op.drop_index("ix_Users_TenantId", table_name="Users")
    op.drop_table("Users")
    op.drop_table("Tenants")
