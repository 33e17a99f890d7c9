"""Landing page sidebar item schemas. ``category`` is fixed at creation."""

from typing import ClassVar, FrozenSet, Optional

from pydantic import Field, field_validator

from wildtrail.schemas.common import (
    ContentCreate,
    ContentUpdate,
    HttpUrlStr,
    LinkStr,
    OrderedItemResponse,
)


class SidebarItemCreate(ContentCreate):
    category: str = Field(min_length=2, max_length=120)
    title: str = Field(min_length=2, max_length=255)
    content: str = Field(min_length=5)
    image_url: Optional[HttpUrlStr] = None
    link_url: Optional[LinkStr] = None
    link_text: Optional[str] = Field(default=None, max_length=120)

    @field_validator("category")
    @classmethod
    def lowercase_category(cls, value: str) -> str:
        return value.lower()


class SidebarItemUpdate(ContentUpdate):
    non_nullable: ClassVar[FrozenSet[str]] = frozenset({"title", "content"})

    title: Optional[str] = Field(default=None, min_length=2, max_length=255)
    content: Optional[str] = Field(default=None, min_length=5)
    image_url: Optional[HttpUrlStr] = None
    link_url: Optional[LinkStr] = None
    link_text: Optional[str] = Field(default=None, max_length=120)


class SidebarItemResponse(OrderedItemResponse):
    category: str
    title: str
    content: str
    image_url: Optional[str] = None
    link_url: Optional[str] = None
    link_text: Optional[str] = None
