"""Initial schema - permission catalog, roles, users and grants.

Revision ID: 001
Revises:
Create Date: 2026-10-18

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

RESOURCE_TYPES = ("server", "k8s_cluster", "k8s_namespace", "docker_container", "harbor_project")


def upgrade() -> None:
    op.create_table(
        "permission",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("name", sa.String(150), nullable=False),
        sa.Column("resource", sa.String(50), nullable=False),
        sa.Column("action", sa.String(100), nullable=False),
        sa.Column("description", sa.String(255), nullable=True),
    )
    op.create_index("ix_permission_name", "permission", ["name"], unique=True)

    op.create_table(
        "role",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("description", sa.String(255), nullable=True),
    )
    op.create_index("ix_role_name", "role", ["name"], unique=True)

    # Permissions referenced by a role cannot be deleted (RESTRICT); rename = new permission.
    op.create_table(
        "role_permission",
        sa.Column("role_id", sa.UUID(), sa.ForeignKey("role.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("permission_id", sa.UUID(), sa.ForeignKey("permission.id", ondelete="RESTRICT"), primary_key=True),
    )

    op.create_table(
        "app_user",
        sa.Column("id", sa.String(255), primary_key=True),
        sa.Column("role_id", sa.UUID(), sa.ForeignKey("role.id", ondelete="SET NULL"), nullable=True),
    )

    op.create_table(
        "user_environment_role",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("user_id", sa.String(255), sa.ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False),
        sa.Column("role_id", sa.UUID(), sa.ForeignKey("role.id", ondelete="CASCADE"), nullable=False),
        sa.Column("environment_id", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_by", sa.String(255), nullable=True),
        sa.CheckConstraint("environment_id <> ''", name="ck_user_environment_role_environment"),
    )
    op.create_index(
        "ix_user_environment_role_user_env",
        "user_environment_role",
        ["user_id", "environment_id"],
    )

    op.create_table(
        "resource_permission",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("user_id", sa.String(255), sa.ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False),
        sa.Column("resource_type", sa.String(50), nullable=False),
        sa.Column("resource_id", sa.String(255), nullable=False),
        sa.Column("actions", postgresql.ARRAY(sa.String(100)), nullable=False),
        sa.Column("environment_id", sa.String(255), nullable=True),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("granted_by", sa.String(255), nullable=True),
        sa.Column("reason", sa.String(500), nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("cardinality(actions) > 0", name="ck_resource_permission_actions"),
        sa.CheckConstraint("environment_id <> ''", name="ck_resource_permission_environment"),
        sa.CheckConstraint(
            "resource_type IN (" + ", ".join(f"'{t}'" for t in RESOURCE_TYPES) + ")",
            name="ck_resource_permission_resource_type",
        ),
    )
    op.create_index(
        "ix_resource_permission_user_resource",
        "resource_permission",
        ["user_id", "resource_type", "resource_id"],
    )
    op.create_index(
        "ix_resource_permission_resource",
        "resource_permission",
        ["resource_type", "resource_id"],
    )
    op.create_index(
        "ix_resource_permission_expires_at",
        "resource_permission",
        ["expires_at"],
        postgresql_where=sa.text("expires_at IS NOT NULL"),
    )

    op.execute("""
        INSERT INTO permission (id, name, resource, action, description)
        SELECT gen_random_uuid(), r || '.' || a, r, a, initcap(a) || ' ' || r || 's'
        FROM unnest(ARRAY['user','role']) AS r
        CROSS JOIN unnest(ARRAY['create','read','update','delete']) AS a
    """)
    op.execute("""
        INSERT INTO role (id, name, description) VALUES
        (gen_random_uuid(), 'admin', 'Administrator role with full access'),
        (gen_random_uuid(), 'user', 'Standard user role')
    """)
    op.execute("""
        INSERT INTO role_permission (role_id, permission_id)
        SELECT r.id, p.id FROM role r CROSS JOIN permission p WHERE r.name = 'admin'
    """)


def downgrade() -> None:
    op.drop_table("resource_permission")
    op.drop_table("user_environment_role")
    op.drop_table("app_user")
    op.drop_table("role_permission")
    op.drop_table("role")
    op.drop_table("permission")
