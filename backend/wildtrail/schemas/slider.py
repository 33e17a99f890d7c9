"""
Wildtrail Backend: Hero Slider Schemas
======================================

What:  Payload and response models for the home page hero slider.
How:   When a YouTube URL is supplied without an explicit ``video_id``, the
       id is extracted from the URL so the client can build the embed
       player without parsing URLs itself.

Accepted YouTube URL shapes:
    https://www.youtube.com/watch?v=<id>
    https://youtu.be/<id>
    https://www.youtube.com/embed/<id>
    https://www.youtube.com/v/<id>
    https://www.youtube.com/shorts/<id>
"""

import re
from typing import Annotated, ClassVar, FrozenSet, List, Optional

from pydantic import AfterValidator, Field, model_validator

from wildtrail.schemas.common import (
    ContentCreate,
    ContentUpdate,
    HttpUrlStr,
    LinkStr,
    OrderedItemResponse,
)

_YOUTUBE_ID_PATTERNS = (
    re.compile(r"(?:youtube\.com/watch\?(?:.*&)?v=|youtu\.be/|youtube\.com/embed/|youtube\.com/v/)([\w-]{6,})"),
    re.compile(r"youtube\.com/shorts/([\w-]{6,})"),
)


def extract_youtube_video_id(url: str) -> Optional[str]:
    """Return the video id embedded in a YouTube URL, or None if it has none."""
    for pattern in _YOUTUBE_ID_PATTERNS:
        match = pattern.search(url)
        if match:
            return match.group(1)
    return None


def _check_youtube_url(value: str) -> str:
    if extract_youtube_video_id(value) is None:
        raise ValueError("does not contain a YouTube video id")
    return value


YoutubeUrlStr = Annotated[HttpUrlStr, AfterValidator(_check_youtube_url)]


def _fill_video_id(payload):
    if payload.youtube_url and not payload.video_id:
        payload.video_id = extract_youtube_video_id(payload.youtube_url)
    return payload


class SliderCreate(ContentCreate):
    title: str = Field(min_length=2, max_length=255)
    description: str = Field(min_length=10)
    background_image: HttpUrlStr
    video_url: Optional[HttpUrlStr] = None
    youtube_url: Optional[YoutubeUrlStr] = None
    video_id: Optional[str] = Field(default=None, max_length=32)
    cta_text: str = Field(min_length=2, max_length=120)
    cta_link: LinkStr = Field(min_length=1)
    year: Optional[str] = Field(default=None, max_length=10)
    rating: Optional[str] = Field(default=None, max_length=20)
    tags: List[str] = Field(default_factory=list)
    subtitles: List[str] = Field(default_factory=list)
    is_active: bool = True

    @model_validator(mode="after")
    def derive_video_id(self):
        return _fill_video_id(self)


class SliderUpdate(ContentUpdate):
    non_nullable: ClassVar[FrozenSet[str]] = frozenset(
        {"title", "description", "background_image", "cta_text", "cta_link", "tags", "subtitles", "is_active"}
    )

    title: Optional[str] = Field(default=None, min_length=2, max_length=255)
    description: Optional[str] = Field(default=None, min_length=10)
    background_image: Optional[HttpUrlStr] = None
    video_url: Optional[HttpUrlStr] = None
    youtube_url: Optional[YoutubeUrlStr] = None
    video_id: Optional[str] = Field(default=None, max_length=32)
    cta_text: Optional[str] = Field(default=None, min_length=2, max_length=120)
    cta_link: Optional[LinkStr] = Field(default=None, min_length=1)
    year: Optional[str] = Field(default=None, max_length=10)
    rating: Optional[str] = Field(default=None, max_length=20)
    tags: Optional[List[str]] = None
    subtitles: Optional[List[str]] = None
    is_active: Optional[bool] = None

    @model_validator(mode="after")
    def derive_video_id(self):
        return _fill_video_id(self)


class SliderResponse(OrderedItemResponse):
    title: str
    description: str
    background_image: str
    video_url: Optional[str] = None
    youtube_url: Optional[str] = None
    video_id: Optional[str] = None
    cta_text: str
    cta_link: str
    year: Optional[str] = None
    rating: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    subtitles: List[str] = Field(default_factory=list)
    is_active: bool
