"""
Wildtrail Backend: Header Menu Model
====================================

Header menu entries for each activity landing page. Every activity
(``hiking``, ``camping``, ...) has its own header, so ``category`` scopes
the ordering: items are positioned relative to the other items of the same
header only.

Items with ``has_mega_menu`` open a mega menu built from MegaMenuCategory
columns, each holding MegaMenuItem links. Both levels are ordered within
their parent.
"""

from sqlalchemy import Boolean, ForeignKey, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from wildtrail.database import Base
from wildtrail.models.base import OrderedItemMixin, ordered_table_args


class HeaderMenuItem(OrderedItemMixin, Base):
    """A top-level link in an activity header."""

    __tablename__ = "header_menu_items"

    category: Mapped[str] = mapped_column(String(120), nullable=False)
    label: Mapped[str] = mapped_column(String(120), nullable=False)
    path: Mapped[str] = mapped_column(String(500), nullable=False)
    has_mega_menu: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=text("false"),
    )

    __table_args__ = ordered_table_args("header_menu_items", "category")


class MegaMenuCategory(OrderedItemMixin, Base):
    """
    A column heading inside a header item's mega menu.

    Ordered per parent ``header_menu_item_id``; deleting the header item
    removes its categories (and their links) through ON DELETE CASCADE.
    """

    __tablename__ = "mega_menu_categories"

    header_menu_item_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("header_menu_items.id", ondelete="CASCADE"),
        nullable=False,
    )
    title: Mapped[str] = mapped_column(String(120), nullable=False)

    __table_args__ = ordered_table_args("mega_menu_categories", "header_menu_item_id")


class MegaMenuItem(OrderedItemMixin, Base):
    """A link under a mega menu category, ordered per ``mega_menu_category_id``."""

    __tablename__ = "mega_menu_items"

    mega_menu_category_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("mega_menu_categories.id", ondelete="CASCADE"),
        nullable=False,
    )
    label: Mapped[str] = mapped_column(String(120), nullable=False)
    path: Mapped[str] = mapped_column(String(500), nullable=False)
    featured_item: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=text("false"),
    )

    __table_args__ = ordered_table_args("mega_menu_items", "mega_menu_category_id")
