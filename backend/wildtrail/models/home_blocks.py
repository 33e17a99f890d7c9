"""
Wildtrail Backend: Home Page Block Models
=========================================

ORM models for the ordered blocks on the storefront home page:
favorite destinations, travelers' choice and tips & ideas.

Slugs on destinations and travelers' choice entries are unique per table;
the storefront links to ``/destinations/<slug>`` and ``/<category>/<slug>``.
"""

from typing import Optional

from sqlalchemy import String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from wildtrail.database import Base
from wildtrail.models.base import OrderedItemMixin, ordered_table_args


class FavoriteDestination(OrderedItemMixin, Base):
    """A destination card in the "Favorite Destinations" carousel."""

    __tablename__ = "favorite_destinations"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    image: Mapped[str] = mapped_column(Text, nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    country: Mapped[str] = mapped_column(String(120), nullable=False)

    __table_args__ = ordered_table_args(
        "favorite_destinations",
        extra=(UniqueConstraint("slug", name="uq_favorite_destinations_slug"),),
    )


class TravelersChoice(OrderedItemMixin, Base):
    """An entry in the "Travelers' Choice" grid, grouped by activity category."""

    __tablename__ = "travelers_choice"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    image: Mapped[str] = mapped_column(Text, nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    category: Mapped[str] = mapped_column(String(120), nullable=False)

    __table_args__ = ordered_table_args(
        "travelers_choice",
        extra=(UniqueConstraint("slug", name="uq_travelers_choice_slug"),),
    )


class TipAndIdea(OrderedItemMixin, Base):
    """
    A card in the "Tips & Ideas" slider.

    ``category`` is the activity (hiking, camping, fishing...);
    ``parent_category`` groups related activities for the mega menu.
    """

    __tablename__ = "tips_and_ideas"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(120), nullable=False)
    parent_category: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    difficulty_level: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    seasonality: Mapped[str] = mapped_column(String(50), nullable=False)
    estimated_time: Mapped[str] = mapped_column(String(100), nullable=False)
    image: Mapped[str] = mapped_column(Text, nullable=False)
    icon_type: Mapped[str] = mapped_column(String(50), nullable=False)

    __table_args__ = ordered_table_args("tips_and_ideas")
