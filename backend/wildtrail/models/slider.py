"""
Wildtrail Backend: Hero Slider Model
====================================

What:  ORM model for the home page hero slider.
How:   Ordered like every collection; additionally carries ``is_active`` so
       slides can be staged in the admin without appearing publicly.

Media:
    ``background_image`` is always required. ``video_url`` (direct mp4) and
    ``youtube_url``/``video_id`` are optional; the client plays the first
    one present over the background image.
"""

from typing import List, Optional

from sqlalchemy import JSON, Boolean, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from wildtrail.database import Base
from wildtrail.models.base import OrderedItemMixin, ordered_table_args


class Slider(OrderedItemMixin, Base):
    """One slide of the home page hero carousel."""

    __tablename__ = "sliders"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    background_image: Mapped[str] = mapped_column(Text, nullable=False)
    video_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    youtube_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    video_id: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    cta_text: Mapped[str] = mapped_column(String(120), nullable=False)
    cta_link: Mapped[str] = mapped_column(Text, nullable=False)
    year: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)
    rating: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)

    # JSON lists keep the schema portable between PostgreSQL and SQLite
    tags: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    subtitles: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default=text("true"),
    )

    __table_args__ = ordered_table_args("sliders")
