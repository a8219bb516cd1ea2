"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

FOOD_CATEGORIES = (
    "Dairy",
    "Eggs",
    "Meat",
    "Seafood",
    "Vegetables",
    "Fruits",
    "Grains",
    "Beverages",
    "Condiments",
    "Frozen",
    "Canned",
    "Snacks",
    "Other",
)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    # Enum values match the Python enum string values
    category_enum = sa.Enum(*FOOD_CATEGORIES, name="foodcategory")
    storage_enum = sa.Enum("Freezer", "Refrigerator", "Pantry", name="storagelocation")
    gender_enum = sa.Enum("Male", "Female", name="gender")
    activity_enum = sa.Enum("Sedentary", "Light", "Moderate", "Active", "Very Active", name="activitylevel")
    history_enum = sa.Enum(
        "purchase", "consumption", "expiration", "adjustment", "recipeTrial", name="historyrecordtype"
    )

    op.create_table(
        "food_groups",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("base_name", sa.String(length=255), nullable=False),
        sa.Column("display_name", sa.String(length=255), nullable=False),
        sa.Column("category", category_enum, nullable=False),
        sa.Column("created_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_updated", sa.DateTime(timezone=True), nullable=False),
        sa.Column("custom_emoji", sa.String(length=16), nullable=True),
    )
    op.create_index(op.f("ix_food_groups_id"), "food_groups", ["id"], unique=False)
    op.create_index(op.f("ix_food_groups_base_name"), "food_groups", ["base_name"], unique=False)

    op.create_table(
        "food_items",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("barcode", sa.String(length=64), nullable=True),
        sa.Column("purchase_date", sa.Date(), nullable=False),
        sa.Column("expiration_date", sa.Date(), nullable=True),
        sa.Column("category", category_enum, nullable=False),
        sa.Column("quantity", sa.Float(), nullable=False),
        sa.Column("unit", sa.String(length=20), nullable=False),
        sa.Column("image_data", sa.LargeBinary(), nullable=True),
        sa.Column("stock_alert_enabled", sa.Boolean(), nullable=False),
        sa.Column("specific_emoji", sa.String(length=16), nullable=True),
        sa.Column("storage_location", storage_enum, nullable=True),
        sa.Column(
            "group_id", sa.Integer(), sa.ForeignKey("food_groups.id", ondelete="CASCADE"), nullable=True
        ),
        *_timestamps(),
    )
    op.create_index(op.f("ix_food_items_id"), "food_items", ["id"], unique=False)
    op.create_index(op.f("ix_food_items_name"), "food_items", ["name"], unique=False)
    op.create_index(op.f("ix_food_items_expiration_date"), "food_items", ["expiration_date"], unique=False)
    op.create_index(op.f("ix_food_items_group_id"), "food_items", ["group_id"], unique=False)

    op.create_table(
        "family_profiles",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("dietary_restrictions", sa.JSON(), nullable=False),
        sa.Column("preferences", sa.JSON(), nullable=False),
        *_timestamps(),
    )
    op.create_index(op.f("ix_family_profiles_id"), "family_profiles", ["id"], unique=False)

    op.create_table(
        "family_members",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "profile_id",
            sa.Integer(),
            sa.ForeignKey("family_profiles.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("age", sa.Integer(), nullable=False),
        sa.Column("months_for_baby", sa.Integer(), nullable=False),
        sa.Column("gender", gender_enum, nullable=False),
        sa.Column("height_cm", sa.Float(), nullable=False),
        sa.Column("weight_kg", sa.Float(), nullable=False),
        sa.Column("activity_level", activity_enum, nullable=False),
        sa.Column("dietary_restrictions", sa.JSON(), nullable=False),
        sa.Column("custom_allergies", sa.JSON(), nullable=False),
        *_timestamps(),
    )
    op.create_index(op.f("ix_family_members_id"), "family_members", ["id"], unique=False)
    op.create_index(op.f("ix_family_members_profile_id"), "family_members", ["profile_id"], unique=False)

    op.create_table(
        "shopping_list_items",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("category", category_enum, nullable=False),
        sa.Column("unit", sa.String(length=20), nullable=False),
        sa.Column("min_quantity", sa.Float(), nullable=False),
        sa.Column("alert_enabled", sa.Boolean(), nullable=False),
        sa.Column("created_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("estimated_price", sa.Float(), nullable=True),
    )
    op.create_index(op.f("ix_shopping_list_items_id"), "shopping_list_items", ["id"], unique=False)

    op.create_table(
        "food_history_records",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("type", history_enum, nullable=False),
        sa.Column("item_name", sa.String(length=255), nullable=False),
        sa.Column("quantity", sa.Float(), nullable=False),
        sa.Column("unit", sa.String(length=20), nullable=False),
        sa.Column("category", category_enum, nullable=False),
        sa.Column("recipe_name", sa.String(length=255), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
    )
    op.create_index(op.f("ix_food_history_records_id"), "food_history_records", ["id"], unique=False)
    op.create_index(op.f("ix_food_history_records_date"), "food_history_records", ["date"], unique=False)

    op.create_table(
        "ai_usage",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("day", sa.Date(), nullable=False),
        sa.Column("used_count", sa.Integer(), nullable=False),
        *_timestamps(),
    )
    op.create_index(op.f("ix_ai_usage_id"), "ai_usage", ["id"], unique=False)
    op.create_index(op.f("ix_ai_usage_day"), "ai_usage", ["day"], unique=True)


def downgrade() -> None:
    op.drop_table("ai_usage")
    op.drop_table("food_history_records")
    op.drop_table("shopping_list_items")
    op.drop_table("family_members")
    op.drop_table("family_profiles")
    op.drop_table("food_items")
    op.drop_table("food_groups")
    for name in ("historyrecordtype", "activitylevel", "gender", "storagelocation", "foodcategory"):
        sa.Enum(name=name).drop(op.get_bind(), checkfirst=True)
