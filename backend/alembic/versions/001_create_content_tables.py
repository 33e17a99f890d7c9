"""Create ordered content tables

Revision ID: 001
Revises: None
Create Date: 2026-10-18 00:00:00.000000+00:00

What:  Creates the ordered collection tables: favorite_destinations,
       travelers_choice, tips_and_ideas, sliders, header_menu_items,
       mega_menu_categories, mega_menu_items and sidebar_items.
How:   Every table gets the shared id/order/timestamp columns, a
       non-negative ``order`` check, and an index matching the listing sort
       (scope column first for scoped tables). Mega menu tables reference
       their parent with ON DELETE CASCADE.

Rollback: downgrade() drops every table, children first (destructive).
"""

from typing import List, Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _ordered_columns() -> List[sa.Column]:
    return [
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "order",
            sa.Integer(),
            nullable=False,
            server_default=sa.text("0"),
            comment="Display position within the collection (ascending)",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
    ]


def _create_ordered_table(name: str, *columns, scope: Sequence[str] = (), constraints=()) -> None:
    op.create_table(
        name,
        *_ordered_columns(),
        *columns,
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint('"order" >= 0', name=f"ck_{name}_order_non_negative"),
        *constraints,
    )
    op.create_index(f"idx_{name}_order", name, [*scope, "order", "id"])


def upgrade() -> None:
    _create_ordered_table(
        "favorite_destinations",
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("image", sa.Text(), nullable=False),
        sa.Column("slug", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("country", sa.String(120), nullable=False),
        constraints=(sa.UniqueConstraint("slug", name="uq_favorite_destinations_slug"),),
    )

    _create_ordered_table(
        "travelers_choice",
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("image", sa.Text(), nullable=False),
        sa.Column("slug", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category", sa.String(120), nullable=False),
        constraints=(sa.UniqueConstraint("slug", name="uq_travelers_choice_slug"),),
    )

    _create_ordered_table(
        "tips_and_ideas",
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("category", sa.String(120), nullable=False),
        sa.Column("parent_category", sa.String(120), nullable=True),
        sa.Column("difficulty_level", sa.String(50), nullable=True),
        sa.Column("seasonality", sa.String(50), nullable=False),
        sa.Column("estimated_time", sa.String(100), nullable=False),
        sa.Column("image", sa.Text(), nullable=False),
        sa.Column("icon_type", sa.String(50), nullable=False),
    )

    _create_ordered_table(
        "sliders",
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("background_image", sa.Text(), nullable=False),
        sa.Column("video_url", sa.Text(), nullable=True),
        sa.Column("youtube_url", sa.Text(), nullable=True),
        sa.Column("video_id", sa.String(32), nullable=True),
        sa.Column("cta_text", sa.String(120), nullable=False),
        sa.Column("cta_link", sa.Text(), nullable=False),
        sa.Column("year", sa.String(10), nullable=True),
        sa.Column("rating", sa.String(20), nullable=True),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("subtitles", sa.JSON(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
    )

    _create_ordered_table(
        "header_menu_items",
        sa.Column("category", sa.String(120), nullable=False),
        sa.Column("label", sa.String(120), nullable=False),
        sa.Column("path", sa.String(500), nullable=False),
        sa.Column("has_mega_menu", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        scope=("category",),
    )

    _create_ordered_table(
        "mega_menu_categories",
        sa.Column("header_menu_item_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(120), nullable=False),
        scope=("header_menu_item_id",),
        constraints=(
            sa.ForeignKeyConstraint(
                ["header_menu_item_id"],
                ["header_menu_items.id"],
                name="fk_mega_menu_categories_header_menu_item",
                ondelete="CASCADE",
            ),
        ),
    )

    _create_ordered_table(
        "mega_menu_items",
        sa.Column("mega_menu_category_id", sa.Integer(), nullable=False),
        sa.Column("label", sa.String(120), nullable=False),
        sa.Column("path", sa.String(500), nullable=False),
        sa.Column("featured_item", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        scope=("mega_menu_category_id",),
        constraints=(
            sa.ForeignKeyConstraint(
                ["mega_menu_category_id"],
                ["mega_menu_categories.id"],
                name="fk_mega_menu_items_category",
                ondelete="CASCADE",
            ),
        ),
    )

    _create_ordered_table(
        "sidebar_items",
        sa.Column("category", sa.String(120), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.Column("link_url", sa.Text(), nullable=True),
        sa.Column("link_text", sa.String(120), nullable=True),
        scope=("category",),
    )


def downgrade() -> None:
    """Drop every content table. All content is permanently lost."""
    for name in (
        "mega_menu_items",
        "mega_menu_categories",
        "sidebar_items",
        "header_menu_items",
        "sliders",
        "tips_and_ideas",
        "travelers_choice",
        "favorite_destinations",
    ):
        op.drop_index(f"idx_{name}_order", table_name=name)
        op.drop_table(name)
