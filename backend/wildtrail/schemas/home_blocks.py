"""
Wildtrail Backend: Home Block Schemas
=====================================

Create/update/response models for favorite destinations, travelers' choice
and tips & ideas. Minimum lengths mirror what the admin forms enforce.
"""

from typing import ClassVar, FrozenSet, Optional

from pydantic import Field

from wildtrail.schemas.common import (
    ContentCreate,
    ContentUpdate,
    HttpUrlStr,
    OrderedItemResponse,
    SlugStr,
)


# ── Favorite Destinations ─────────────────────────────────────────────────


class FavoriteDestinationCreate(ContentCreate):
    title: str = Field(min_length=2, max_length=255)
    image: HttpUrlStr
    slug: Optional[SlugStr] = Field(default=None, description="Derived from title when omitted")
    description: Optional[str] = None
    country: str = Field(min_length=2, max_length=120)


class FavoriteDestinationUpdate(ContentUpdate):
    non_nullable: ClassVar[FrozenSet[str]] = frozenset({"title", "image", "slug", "country"})

    title: Optional[str] = Field(default=None, min_length=2, max_length=255)
    image: Optional[HttpUrlStr] = None
    slug: Optional[SlugStr] = None
    description: Optional[str] = None
    country: Optional[str] = Field(default=None, min_length=2, max_length=120)


class FavoriteDestinationResponse(OrderedItemResponse):
    title: str
    image: str
    slug: str
    description: Optional[str] = None
    country: str


# ── Travelers' Choice ─────────────────────────────────────────────────────


class TravelersChoiceCreate(ContentCreate):
    title: str = Field(min_length=2, max_length=255)
    image: HttpUrlStr
    slug: Optional[SlugStr] = Field(default=None, description="Derived from title when omitted")
    description: Optional[str] = None
    category: str = Field(min_length=2, max_length=120)


class TravelersChoiceUpdate(ContentUpdate):
    non_nullable: ClassVar[FrozenSet[str]] = frozenset({"title", "image", "slug", "category"})

    title: Optional[str] = Field(default=None, min_length=2, max_length=255)
    image: Optional[HttpUrlStr] = None
    slug: Optional[SlugStr] = None
    description: Optional[str] = None
    category: Optional[str] = Field(default=None, min_length=2, max_length=120)


class TravelersChoiceResponse(OrderedItemResponse):
    title: str
    image: str
    slug: str
    description: Optional[str] = None
    category: str


# ── Tips & Ideas ──────────────────────────────────────────────────────────


class TipCreate(ContentCreate):
    title: str = Field(min_length=2, max_length=255)
    description: str = Field(min_length=10)
    category: str = Field(min_length=2, max_length=120)
    parent_category: Optional[str] = Field(default=None, max_length=120)
    difficulty_level: Optional[str] = Field(
        default=None,
        max_length=50,
        description="beginner, intermediate or expert",
    )
    seasonality: str = Field(min_length=1, max_length=50, description="spring, summer, fall, winter or all")
    estimated_time: str = Field(min_length=1, max_length=100)
    image: HttpUrlStr
    icon_type: str = Field(min_length=1, max_length=50)


class TipUpdate(ContentUpdate):
    non_nullable: ClassVar[FrozenSet[str]] = frozenset(
        {"title", "description", "category", "seasonality", "estimated_time", "image", "icon_type"}
    )

    title: Optional[str] = Field(default=None, min_length=2, max_length=255)
    description: Optional[str] = Field(default=None, min_length=10)
    category: Optional[str] = Field(default=None, min_length=2, max_length=120)
    parent_category: Optional[str] = Field(default=None, max_length=120)
    difficulty_level: Optional[str] = Field(default=None, max_length=50)
    seasonality: Optional[str] = Field(default=None, min_length=1, max_length=50)
    estimated_time: Optional[str] = Field(default=None, min_length=1, max_length=100)
    image: Optional[HttpUrlStr] = None
    icon_type: Optional[str] = Field(default=None, min_length=1, max_length=50)


class TipResponse(OrderedItemResponse):
    title: str
    description: str
    category: str
    parent_category: Optional[str] = None
    difficulty_level: Optional[str] = None
    seasonality: str
    estimated_time: str
    image: str
    icon_type: str
