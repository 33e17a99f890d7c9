"""
Header menu item schemas.

``category`` names the activity header the item belongs to and is fixed at
creation; an item is moved to another header by deleting and re-creating it.
"""

from typing import ClassVar, FrozenSet, Optional

from pydantic import Field, field_validator

from wildtrail.schemas.common import ContentCreate, ContentUpdate, LinkStr, OrderedItemResponse


class HeaderMenuItemCreate(ContentCreate):
    category: str = Field(min_length=2, max_length=120, description="Activity header, e.g. 'hiking'")
    label: str = Field(min_length=1, max_length=120)
    path: LinkStr = Field(min_length=1, max_length=500)
    has_mega_menu: bool = False

    @field_validator("category")
    @classmethod
    def lowercase_category(cls, value: str) -> str:
        return value.lower()


class HeaderMenuItemUpdate(ContentUpdate):
    non_nullable: ClassVar[FrozenSet[str]] = frozenset({"label", "path", "has_mega_menu"})

    label: Optional[str] = Field(default=None, min_length=1, max_length=120)
    path: Optional[LinkStr] = Field(default=None, min_length=1, max_length=500)
    has_mega_menu: Optional[bool] = None


class HeaderMenuItemResponse(OrderedItemResponse):
    category: str
    label: str
    path: str
    has_mega_menu: bool


# ── Mega Menu ─────────────────────────────────────────────────────────────
# The parent id scopes the ordering and, like ``category`` above, is fixed
# at creation.


class MegaMenuCategoryCreate(ContentCreate):
    header_menu_item_id: int = Field(gt=0)
    title: str = Field(min_length=1, max_length=120)


class MegaMenuCategoryUpdate(ContentUpdate):
    non_nullable: ClassVar[FrozenSet[str]] = frozenset({"title"})

    title: Optional[str] = Field(default=None, min_length=1, max_length=120)


class MegaMenuCategoryResponse(OrderedItemResponse):
    header_menu_item_id: int
    title: str


class MegaMenuItemCreate(ContentCreate):
    mega_menu_category_id: int = Field(gt=0)
    label: str = Field(min_length=1, max_length=120)
    path: LinkStr = Field(min_length=1, max_length=500)
    featured_item: bool = False


class MegaMenuItemUpdate(ContentUpdate):
    non_nullable: ClassVar[FrozenSet[str]] = frozenset({"label", "path", "featured_item"})

    label: Optional[str] = Field(default=None, min_length=1, max_length=120)
    path: Optional[LinkStr] = Field(default=None, min_length=1, max_length=500)
    featured_item: Optional[bool] = None


class MegaMenuItemResponse(OrderedItemResponse):
    mega_menu_category_id: int
    label: str
    path: str
    featured_item: bool
