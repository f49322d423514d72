"""Initial gateway access schema."""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20261017_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "preferences",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("resource_type", sa.String(length=32), nullable=False),
        sa.Column("resource_id", sa.String(length=255), nullable=False),
        sa.Column("owner_id", sa.String(length=255), nullable=False),
        sa.Column("level", sa.String(length=16), nullable=False),
        sa.Column("key", sa.String(length=255), nullable=False),
        sa.Column("value", sa.Text(), nullable=False),
        sa.Column("enforced", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(
        "ix_preferences_composite_key",
        "preferences",
        ["resource_type", "resource_id", "owner_id", "level", "key"],
        unique=True,
    )

    op.create_table(
        "resource_access_grants",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("resource_type", sa.String(length=32), nullable=False),
        sa.Column("resource_id", sa.String(length=255), nullable=False),
        sa.Column("owner_id", sa.String(length=255), nullable=False),
        sa.Column("owner_type", sa.String(length=16), nullable=False),
        sa.Column("gateway_id", sa.String(length=255), nullable=False),
        sa.Column("credential_token", sa.String(length=255), nullable=False),
        sa.Column("login_username", sa.String(length=255), nullable=True),
        sa.Column("enabled", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(
        "ix_resource_access_grants_resource",
        "resource_access_grants",
        ["resource_type", "resource_id"],
    )
    op.create_index(
        "ix_resource_access_grants_owner",
        "resource_access_grants",
        ["owner_id", "owner_type"],
    )
    op.create_index(
        "ix_resource_access_grants_credential",
        "resource_access_grants",
        ["credential_token"],
    )

    op.create_table(
        "credentials",
        sa.Column("token", sa.String(length=128), primary_key=True),
        sa.Column("gateway_id", sa.String(length=255), nullable=False),
        sa.Column("owner_id", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("type", sa.String(length=32), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("public_key", sa.Text(), nullable=True),
        sa.Column("secret", sa.Text(), nullable=True),
        sa.Column("persisted_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_credentials_gateway_owner", "credentials", ["gateway_id", "owner_id"])

    op.create_table(
        "group_memberships",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("gateway_id", sa.String(length=255), nullable=False),
        sa.Column("group_id", sa.String(length=255), nullable=False),
        sa.Column("user_id", sa.String(length=255), nullable=False),
        sa.Column("added_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(
        "ix_group_memberships_member",
        "group_memberships",
        ["gateway_id", "group_id", "user_id"],
        unique=True,
    )

    op.create_table(
        "group_selections",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("gateway_id", sa.String(length=255), nullable=False),
        sa.Column("user_id", sa.String(length=255), nullable=False),
        sa.Column("resource_type", sa.String(length=32), nullable=False),
        sa.Column("resource_id", sa.String(length=255), nullable=False),
        sa.Column("selection_key", sa.String(length=255), nullable=False),
        sa.Column("selected_group_id", sa.String(length=255), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(
        "ix_group_selections_key",
        "group_selections",
        ["gateway_id", "user_id", "resource_type", "resource_id", "selection_key"],
        unique=True,
    )

    op.create_table(
        "audit_events",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("actor_id", sa.String(length=255), nullable=True),
        sa.Column("action", sa.String(length=128), nullable=False),
        sa.Column("target_type", sa.String(length=64), nullable=False),
        sa.Column("target_id", sa.String(length=255), nullable=True),
        sa.Column("metadata", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_audit_events_target", "audit_events", ["target_type", "target_id"])


def downgrade() -> None:
    op.drop_index("ix_audit_events_target", table_name="audit_events")
    op.drop_table("audit_events")
    op.drop_index("ix_group_selections_key", table_name="group_selections")
    op.drop_table("group_selections")
    op.drop_index("ix_group_memberships_member", table_name="group_memberships")
    op.drop_table("group_memberships")
    op.drop_index("ix_credentials_gateway_owner", table_name="credentials")
    op.drop_table("credentials")
    op.drop_index("ix_resource_access_grants_credential", table_name="resource_access_grants")
    op.drop_index("ix_resource_access_grants_owner", table_name="resource_access_grants")
    op.drop_index("ix_resource_access_grants_resource", table_name="resource_access_grants")
    op.drop_table("resource_access_grants")
    op.drop_index("ix_preferences_composite_key", table_name="preferences")
    op.drop_table("preferences")
