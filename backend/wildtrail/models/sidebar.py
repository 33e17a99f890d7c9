"""
Landing page sidebar blocks.

Each activity landing page (``hiking``, ``camping``, ...) has its own
sidebar, so ``category`` scopes the ordering the same way it does for
header menu items.
"""

from typing import Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from wildtrail.database import Base
from wildtrail.models.base import OrderedItemMixin, ordered_table_args


class SidebarItem(OrderedItemMixin, Base):
    __tablename__ = "sidebar_items"

    category: Mapped[str] = mapped_column(String(120), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    link_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    link_text: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)

    __table_args__ = ordered_table_args("sidebar_items", "category")
