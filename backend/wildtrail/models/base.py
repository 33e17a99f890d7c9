"""
Wildtrail Backend: Ordered Item Columns
=======================================

What:  Columns shared by every ordered content table.
How:   A declarative mixin; each collection model inherits it alongside Base.

Column notes:
    - id: integer primary key assigned by the store, immutable
    - order: non-negative display position. Not unique and not contiguous;
      listing breaks ties by id ascending
    - created_at / updated_at: timezone-aware, set by the repository on write

Each concrete table declares an index on (order, id), prefixed with its
scope column when it has one, matching the listing sort.
"""

from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, Index, Integer, text
from sqlalchemy.orm import Mapped, mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OrderedItemMixin:
    """Primary key, display order and timestamps for an ordered collection row."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    order: Mapped[int] = mapped_column(
        "order",
        Integer,
        nullable=False,
        default=0,
        server_default=text("0"),
        comment="Display position within the collection (ascending)",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(id={self.id}, order={self.order})>"


def ordered_table_args(tablename: str, *scope_columns: str, extra: tuple = ()) -> tuple:
    """
    Build ``__table_args__`` for an ordered table.

    Adds the non-negative ``order`` check and the listing index
    ``(scope..., order, id)`` in front of any table-specific arguments.
    """
    return (
        CheckConstraint('"order" >= 0', name=f"ck_{tablename}_order_non_negative"),
        Index(f"idx_{tablename}_order", *scope_columns, "order", "id"),
    ) + tuple(extra)
