"""Create pantry schema

Revision ID: 4f1c2a9e7b10
Revises:
Create Date: 2026-10-17 09:12:44.120381

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "4f1c2a9e7b10"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=True),
        sa.Column("timezone", sa.String(length=50), nullable=True),
        sa.Column("dietary_tags", sa.String(length=255), nullable=True),
        sa.Column("allergies", sa.String(length=500), nullable=True),
        sa.Column("reminder_window_days", sa.Integer(), nullable=True),
        sa.Column("notify_email", sa.Boolean(), nullable=True),
        sa.Column("notify_push", sa.Boolean(), nullable=True),
        sa.Column("notify_expiring", sa.Boolean(), nullable=True),
        sa.Column("notify_low_stock", sa.Boolean(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_id"), "users", ["id"], unique=False)
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)

    op.create_table(
        "pantry_items",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("quantity", sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column("unit", sa.String(length=50), nullable=True),
        sa.Column("category", sa.String(length=100), nullable=True),
        sa.Column("expiration_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("source", sa.String(length=100), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "quantity IS NULL OR quantity >= 0", name="ck_pantry_quantity_nonneg"
        ),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_pantry_items_id"), "pantry_items", ["id"], unique=False)
    op.create_index(op.f("ix_pantry_items_user_id"), "pantry_items", ["user_id"], unique=False)
    op.create_index(
        op.f("ix_pantry_items_expiration_date"), "pantry_items", ["expiration_date"], unique=False
    )

    op.create_table(
        "notifications",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("pantry_item_id", sa.Integer(), nullable=False),
        sa.Column("scheduled_for", sa.DateTime(timezone=True), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("sent_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["pantry_item_id"], ["pantry_items.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_notifications_id"), "notifications", ["id"], unique=False)
    op.create_index(
        op.f("ix_notifications_pantry_item_id"), "notifications", ["pantry_item_id"], unique=False
    )
    op.create_index(
        op.f("ix_notifications_scheduled_for"), "notifications", ["scheduled_for"], unique=False
    )

    op.create_table(
        "grocery_lists",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_grocery_lists_id"), "grocery_lists", ["id"], unique=False)
    op.create_index(op.f("ix_grocery_lists_user_id"), "grocery_lists", ["user_id"], unique=False)

    op.create_table(
        "grocery_list_items",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("grocery_list_id", sa.Integer(), nullable=False),
        sa.Column("pantry_item_id", sa.Integer(), nullable=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("quantity", sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column("unit", sa.String(length=50), nullable=True),
        sa.Column("category", sa.String(length=100), nullable=True),
        sa.Column("note", sa.String(length=1000), nullable=True),
        sa.Column("is_checked", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["grocery_list_id"], ["grocery_lists.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["pantry_item_id"], ["pantry_items.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_grocery_list_items_id"), "grocery_list_items", ["id"], unique=False)
    op.create_index(
        op.f("ix_grocery_list_items_grocery_list_id"),
        "grocery_list_items",
        ["grocery_list_id"],
        unique=False,
    )
    op.create_index(
        op.f("ix_grocery_list_items_pantry_item_id"),
        "grocery_list_items",
        ["pantry_item_id"],
        unique=False,
    )

    op.create_table(
        "meal_ideas",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_meal_ideas_id"), "meal_ideas", ["id"], unique=False)
    op.create_index(op.f("ix_meal_ideas_user_id"), "meal_ideas", ["user_id"], unique=False)


def downgrade() -> None:
    op.drop_table("meal_ideas")
    op.drop_table("grocery_list_items")
    op.drop_table("grocery_lists")
    op.drop_table("notifications")
    op.drop_table("pantry_items")
    op.drop_table("users")
