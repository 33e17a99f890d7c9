"""
Wildtrail Backend: Shared Pydantic Schemas
==========================================

What:  Building blocks for the per-collection payload schemas, plus the
       request/response models shared by every collection endpoint.

Payload conventions:
    - Create schemas declare required fields without defaults. Unknown keys
      are ignored, so a client echoing ``id``, ``order`` or timestamps back
      cannot change them.
    - Update schemas make every content field optional. Only keys present in
      the payload are applied; an explicit ``null`` for a NOT NULL column is
      rejected.
"""

from datetime import datetime
from typing import Annotated, Any, ClassVar, FrozenSet, List, Literal, Optional

from pydantic import (
    AfterValidator,
    AnyHttpUrl,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationInfo,
    field_validator,
)
from pydantic import ValidationError as PydanticValidationError

_HTTP_URL = TypeAdapter(AnyHttpUrl)


def _validate_http_url(value: str) -> str:
    """Accept only absolute http(s) URLs; the original string is stored unchanged."""
    try:
        _HTTP_URL.validate_python(value)
    except PydanticValidationError:
        raise ValueError("must be a valid http(s) URL") from None
    return value


def _validate_link(value: str) -> str:
    """Site-relative paths (``/hiking``) or absolute http(s) URLs."""
    if value.startswith("/"):
        return value
    return _validate_http_url(value)


HttpUrlStr = Annotated[str, AfterValidator(_validate_http_url)]
LinkStr = Annotated[str, AfterValidator(_validate_link)]
SlugStr = Annotated[
    str,
    Field(min_length=2, max_length=255, pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$"),
]


# ══════════════════════════════════════════════════════════════════════════
# Payload Bases
# ══════════════════════════════════════════════════════════════════════════


class ContentCreate(BaseModel):
    """Base for create payloads."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")


class ContentUpdate(BaseModel):
    """
    Base for partial-update payloads.

    Subclasses list their NOT NULL columns in ``non_nullable``; sending
    ``null`` for one of those is a validation error rather than a silent
    database constraint failure.
    """

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    non_nullable: ClassVar[FrozenSet[str]] = frozenset()

    @field_validator("*", mode="after")
    @classmethod
    def reject_null_for_required(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None and info.field_name in cls.non_nullable:
            raise ValueError("may not be null")
        return value


# ══════════════════════════════════════════════════════════════════════════
# Response Bases
# ══════════════════════════════════════════════════════════════════════════


class OrderedItemResponse(BaseModel):
    """Columns every collection item carries in API responses."""

    id: int = Field(description="Item identifier, stable for the item's lifetime")
    order: int = Field(description="Display position (ascending); may have gaps")
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ══════════════════════════════════════════════════════════════════════════
# Collection Operation Models
# ══════════════════════════════════════════════════════════════════════════


class ReorderRequest(BaseModel):
    """Body of ``PATCH /api/admin/<collection>/{id}/reorder``."""

    direction: Literal["up", "down"] = Field(
        description="'up' swaps with the previous item, 'down' with the next one",
    )


class ReorderResponse(BaseModel):
    """
    Result of a reorder swap.

    ``items`` is the collection (or the item's scope) in its new order, so
    the admin table can redraw without a second request.
    """

    message: str
    moved: bool = Field(description="False when the item was already at the boundary")
    items: List[dict]


class DeleteResponse(BaseModel):
    message: str
    id: int


class CollectionInfo(BaseModel):
    """Registry metadata for the admin dashboard navigation."""

    key: str
    label: str
    scope_field: Optional[str] = None
    has_active_flag: bool = False


# ══════════════════════════════════════════════════════════════════════════
# Error & Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "slider with ID '42' was not found",
            "request_id": "a1b2c3d4"
        }
    """

    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
