"""create grouping tables

Revision ID: 4c2d8e1a9b07
Revises:
Create Date: 2026-10-19 16:02:11.418305

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "4c2d8e1a9b07"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "group_types",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("label", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("relations", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "group_roles",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("group_type", sa.String(length=32), nullable=False),
        sa.Column("label", sa.String(length=255), nullable=False),
        sa.Column("weight", sa.Integer(), nullable=False),
        sa.Column("internal", sa.Boolean(), nullable=False),
        sa.Column("permissions", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["group_type"], ["group_types.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_group_roles_group_type"), "group_roles", ["group_type"], unique=False
    )

    op.create_table(
        "groups",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("type", sa.String(length=32), nullable=False),
        sa.Column("label", sa.String(length=255), nullable=False),
        *_timestamps(),
        # RESTRICT: a group type's groups must be deleted before the type
        sa.ForeignKeyConstraint(["type"], ["group_types.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_groups_type"), "groups", ["type"], unique=False)

    op.create_table(
        "group_content_types",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("group_type", sa.String(length=32), nullable=False),
        sa.Column("content_plugin", sa.String(length=255), nullable=False),
        sa.Column("label", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_group_content_types_group_type"),
        "group_content_types",
        ["group_type"],
        unique=False,
    )
    op.create_index(
        op.f("ix_group_content_types_content_plugin"),
        "group_content_types",
        ["content_plugin"],
        unique=False,
    )

    # No unique constraint on (type, gid, entity_id): cardinality is
    # validated before insert.
    op.create_table(
        "group_relationships",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("type", sa.String(length=32), nullable=False),
        sa.Column("gid", sa.Integer(), nullable=False),
        sa.Column("entity_id", sa.Integer(), nullable=False),
        sa.Column("plugin_id", sa.String(length=255), nullable=False),
        sa.Column("group_type", sa.String(length=32), nullable=False),
        sa.Column("extra", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["gid"], ["groups.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    for column in ("type", "gid", "entity_id", "plugin_id"):
        op.create_index(
            op.f(f"ix_group_relationships_{column}"),
            "group_relationships",
            [column],
            unique=False,
        )

    op.create_table(
        "group_config_wrappers",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("entity_type_id", sa.String(length=64), nullable=False),
        sa.Column("entity_id", sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "entity_type_id", "entity_id", name="uq_config_wrapper_entity"
        ),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("group_config_wrappers")
    for column in ("plugin_id", "entity_id", "gid", "type"):
        op.drop_index(
            op.f(f"ix_group_relationships_{column}"), table_name="group_relationships"
        )
    op.drop_table("group_relationships")
    op.drop_index(
        op.f("ix_group_content_types_content_plugin"), table_name="group_content_types"
    )
    op.drop_index(
        op.f("ix_group_content_types_group_type"), table_name="group_content_types"
    )
    op.drop_table("group_content_types")
    op.drop_index(op.f("ix_groups_type"), table_name="groups")
    op.drop_table("groups")
    op.drop_index(op.f("ix_group_roles_group_type"), table_name="group_roles")
    op.drop_table("group_roles")
    op.drop_table("group_types")
