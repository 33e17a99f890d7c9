"""
Wildtrail Backend: Collection Repository
========================================

What:  CRUD and reorder operations for one ordered content collection.
How:   A single generic implementation parameterized by a CollectionSpec
       (ORM model + payload schemas). Every collection on the site shares it.
Who:   Called by the public and admin route handlers.
When:  For every read and write of favorite destinations, travelers' choice,
       tips, sliders, header menu items, mega menu categories and links, and
       sidebar items.

Ordering rules:
    - Listing sorts by (order ASC, id ASC); scoped collections put the
      scope column first.
    - create() appends: order = max(order) + 1 within the collection (or the
      item's scope), 0 when empty.
    - reorder() swaps the order values of the item and its immediate
      neighbour under that sort. Exactly two rows are written; the rest of
      the collection is untouched and gaps left by deletes are kept.

    Reorder example (ids 1..3 with orders 0..2):
        reorder(2, "up")
        before: [1:0] [2:1] [3:2]   → A, B, C
        after:  [1:1] [2:0] [3:2]   → B, A, C

Boundary moves (first item up, last item down) are a silent no-op unless
REORDER_STRICT_BOUNDARIES is set, in which case they raise
InvalidOperationError.

Error Handling Strategy:
    Payload problems become ValidationError with one entry per field.
    Missing ids become NotFoundError. Any SQLAlchemy failure is logged and
    wrapped in StorageError so the client never sees driver details.
"""

import logging
import re
import unicodedata
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Type

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import and_, func, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from wildtrail.config import settings
from wildtrail.exceptions import (
    InvalidOperationError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from wildtrail.models.base import utcnow

logger = logging.getLogger(__name__)

DIRECTIONS = ("up", "down")
SLUG_MIN_LENGTH = 2
SLUG_MAX_LENGTH = 240


def slugify(text: str) -> str:
    """
    Lowercase ASCII words joined by single hyphens.

    Accented letters are folded to their base letter ("Zürich" → "zurich");
    anything else outside a-z, 0-9 is dropped.
    """
    slug = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    slug = slug.lower().strip()
    slug = re.sub(r"[^a-z0-9\s_-]", "", slug)
    slug = re.sub(r"[\s_]+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


@dataclass(frozen=True)
class CollectionSpec:
    """
    Static description of one ordered collection.

    Attributes:
        key:             URL segment, e.g. "favorite-destinations"
        label:           Singular human name used in messages and logs
        model:           SQLAlchemy model (must use OrderedItemMixin)
        create_schema:   Pydantic model validating create payloads
        update_schema:   Pydantic model validating partial updates
        response_schema: Pydantic model serializing rows for the API
        scope_field:     Column that partitions the ordering, if any
        slug_field:      Unique slug column, derived from ``title`` when omitted
        active_field:    Boolean column the public API filters on, if any
        parent_model:    Model the scope column references; create checks the
                         parent exists
    """

    key: str
    label: str
    model: Type[Any]
    create_schema: Type[BaseModel]
    update_schema: Type[BaseModel]
    response_schema: Type[BaseModel]
    scope_field: Optional[str] = None
    slug_field: Optional[str] = None
    active_field: Optional[str] = None
    parent_model: Optional[Type[Any]] = None

    def serialize(self, item: Any) -> Dict[str, Any]:
        return self.response_schema.model_validate(item).model_dump(mode="json")


@dataclass
class ReorderResult:
    """Outcome of reorder(): whether a swap happened and the resulting order."""

    moved: bool
    items: List[Any] = field(default_factory=list)


class CollectionRepository:
    """
    Typed CRUD + reorder over one collection.

    Stateless apart from its spec: every method receives the request's
    AsyncSession and only flushes. Commit/rollback belongs to the session
    dependency, so a failure anywhere in a request leaves the collection
    unchanged.
    """

    def __init__(self, spec: CollectionSpec):
        self.spec = spec
        self.model = spec.model

    # ── Reads ─────────────────────────────────────────────────────────────

    async def list(
        self,
        db: AsyncSession,
        active_only: bool = False,
        scope: Optional[str] = None,
    ) -> List[Any]:
        """
        Return the collection sorted by (order, id).

        Args:
            active_only: Drop inactive rows (only for collections with an
                         active flag; ignored otherwise)
            scope:       Restrict a scoped collection to one scope value
        """
        query = select(self.model)
        if active_only and self.spec.active_field:
            query = query.where(getattr(self.model, self.spec.active_field).is_(True))
        if scope is not None and self.spec.scope_field:
            query = query.where(self._scope_column() == self._coerce_scope(scope))
        query = self._sorted(query)

        try:
            result = await db.execute(query)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise self._storage_error("list", e)

    async def get(self, db: AsyncSession, item_id: int) -> Any:
        """Return one item or raise NotFoundError."""
        return await self._load(db, item_id)

    # ── Writes ────────────────────────────────────────────────────────────

    async def create(self, db: AsyncSession, fields: Mapping[str, Any]) -> Any:
        """
        Validate ``fields`` and append a new item to the end of its collection.

        Raises:
            ValidationError: Payload failed the create schema, or the slug is taken
            StorageError:    Insert failed
        """
        payload = self._validate(self.spec.create_schema, fields)
        values = payload.model_dump()
        scope_value = values.get(self.spec.scope_field) if self.spec.scope_field else None

        try:
            if self.spec.parent_model is not None:
                await self._ensure_parent_exists(db, scope_value)
            if self.spec.slug_field:
                values[self.spec.slug_field] = await self._resolve_slug(db, values)
            values["order"] = await self._next_order(db, scope_value)

            item = self.model(**values)
            db.add(item)
            await db.flush()
        except IntegrityError as e:
            raise self._integrity_error(e)
        except SQLAlchemyError as e:
            raise self._storage_error("create", e)

        logger.info("Created %s %s (order=%d)", self.spec.label, item.id, item.order)
        return item

    async def update(self, db: AsyncSession, item_id: int, fields: Mapping[str, Any]) -> Any:
        """
        Apply a partial update to an item's content fields.

        ``order`` is never changed here; use reorder().

        Raises:
            NotFoundError:   No item with ``item_id``
            ValidationError: Payload failed the update schema, or the slug is taken
        """
        item = await self._load(db, item_id)
        payload = self._validate(self.spec.update_schema, fields)
        changes = payload.model_dump(exclude_unset=True)
        changes.pop("order", None)

        if not changes:
            return item

        try:
            slug_field = self.spec.slug_field
            if slug_field and slug_field in changes and changes[slug_field] != getattr(item, slug_field):
                await self._ensure_slug_available(db, changes[slug_field], exclude_id=item.id)

            for name, value in changes.items():
                setattr(item, name, value)
            item.updated_at = utcnow()
            await db.flush()
        except IntegrityError as e:
            raise self._integrity_error(e)
        except SQLAlchemyError as e:
            raise self._storage_error("update", e)

        logger.info("Updated %s %s: %s", self.spec.label, item.id, ", ".join(sorted(changes)))
        return item

    async def delete(self, db: AsyncSession, item_id: int) -> None:
        """
        Permanently remove an item. Remaining order values are not compacted.

        Raises:
            NotFoundError: No item with ``item_id`` (including a second delete)
        """
        item = await self._load(db, item_id)
        try:
            await db.delete(item)
            await db.flush()
        except SQLAlchemyError as e:
            raise self._storage_error("delete", e)

        logger.info("Deleted %s %s", self.spec.label, item_id)

    async def reorder(self, db: AsyncSession, item_id: int, direction: str) -> ReorderResult:
        """
        Swap an item's order with its previous ("up") or next ("down") neighbour.

        Returns:
            ReorderResult with ``moved`` and the item's collection (or scope)
            in its new order.

        Raises:
            ValidationError:       ``direction`` is not "up" or "down"
            NotFoundError:         No item with ``item_id``
            InvalidOperationError: Boundary move while strict boundaries are on
        """
        if direction not in DIRECTIONS:
            raise ValidationError(
                message="Direction must be 'up' or 'down'",
                field="direction",
            )

        item = await self._load(db, item_id)
        neighbour = await self._neighbour(db, item, direction)
        scope_value = getattr(item, self.spec.scope_field) if self.spec.scope_field else None

        if neighbour is None:
            if settings.reorder_strict_boundaries:
                position = "first" if direction == "up" else "last"
                raise InvalidOperationError(
                    message=f"This {self.spec.label} is already {position} and cannot move {direction}",
                    context={"collection": self.spec.key, "id": item_id, "direction": direction},
                )
            logger.debug("Reorder %s %s %s: already at boundary", self.spec.label, item_id, direction)
            return ReorderResult(moved=False, items=await self.list(db, scope=scope_value))

        # Equal order values swap to the same state; report that as not moved
        moved = item.order != neighbour.order
        try:
            item.order, neighbour.order = neighbour.order, item.order
            await db.flush()
        except SQLAlchemyError as e:
            raise self._storage_error("reorder", e)

        logger.info(
            "Reordered %s %s %s: swapped with %s (orders %d <-> %d)",
            self.spec.label,
            item.id,
            direction,
            neighbour.id,
            item.order,
            neighbour.order,
        )
        return ReorderResult(moved=moved, items=await self.list(db, scope=scope_value))

    # ── Internals ─────────────────────────────────────────────────────────

    def _scope_column(self):
        return getattr(self.model, self.spec.scope_field)

    def _coerce_scope(self, scope: Any) -> Any:
        """Query-string scopes arrive as text; integer parent ids are converted."""
        if self._scope_column().type.python_type is int and not isinstance(scope, int):
            try:
                return int(scope)
            except (TypeError, ValueError):
                raise ValidationError(message="Scope must be an integer id", field="scope") from None
        return scope

    def _sorted(self, query):
        columns = []
        if self.spec.scope_field:
            columns.append(self._scope_column().asc())
        columns.extend([self.model.order.asc(), self.model.id.asc()])
        return query.order_by(*columns)

    async def _load(self, db: AsyncSession, item_id: int) -> Any:
        try:
            result = await db.execute(select(self.model).where(self.model.id == item_id))
            item = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise self._storage_error("load", e)

        if item is None:
            raise NotFoundError(resource=self.spec.label, resource_id=str(item_id))
        return item

    async def _neighbour(self, db: AsyncSession, item: Any, direction: str) -> Optional[Any]:
        """Immediate predecessor/successor of ``item`` under the (order, id) sort."""
        order_col, id_col = self.model.order, self.model.id
        if direction == "up":
            condition = or_(
                order_col < item.order,
                and_(order_col == item.order, id_col < item.id),
            )
            ordering = (order_col.desc(), id_col.desc())
        else:
            condition = or_(
                order_col > item.order,
                and_(order_col == item.order, id_col > item.id),
            )
            ordering = (order_col.asc(), id_col.asc())

        query = select(self.model).where(condition)
        if self.spec.scope_field:
            query = query.where(self._scope_column() == getattr(item, self.spec.scope_field))
        query = query.order_by(*ordering).limit(1)

        try:
            result = await db.execute(query)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise self._storage_error("reorder", e)

    async def _next_order(self, db: AsyncSession, scope_value: Optional[str]) -> int:
        query = select(func.max(self.model.order))
        if self.spec.scope_field:
            query = query.where(self._scope_column() == scope_value)
        result = await db.execute(query)
        current_max = result.scalar()
        return 0 if current_max is None else current_max + 1

    async def _ensure_parent_exists(self, db: AsyncSession, parent_id: Any) -> None:
        parent = self.spec.parent_model
        result = await db.execute(select(parent.id).where(parent.id == parent_id))
        if result.scalar_one_or_none() is None:
            raise ValidationError(
                message=f"{self.spec.scope_field} {parent_id} does not exist",
                field=self.spec.scope_field,
            )

    async def _resolve_slug(self, db: AsyncSession, values: Dict[str, Any]) -> str:
        """Use the given slug (must be free) or derive a free one from the title."""
        given = values.get(self.spec.slug_field)
        if given:
            await self._ensure_slug_available(db, given)
            return given

        slug = slugify(values.get("title") or "")[:SLUG_MAX_LENGTH].strip("-")
        if len(slug) < SLUG_MIN_LENGTH:
            slug = f"{self.spec.key}-{uuid.uuid4().hex[:6]}"
        elif await self._slug_taken(db, slug):
            slug = f"{slug}-{uuid.uuid4().hex[:6]}"
        return slug

    async def _slug_taken(self, db: AsyncSession, slug: str, exclude_id: Optional[int] = None) -> bool:
        column = getattr(self.model, self.spec.slug_field)
        query = select(self.model.id).where(column == slug)
        if exclude_id is not None:
            query = query.where(self.model.id != exclude_id)
        result = await db.execute(query.limit(1))
        return result.scalar_one_or_none() is not None

    async def _ensure_slug_available(
        self, db: AsyncSession, slug: str, exclude_id: Optional[int] = None
    ) -> None:
        if await self._slug_taken(db, slug, exclude_id=exclude_id):
            raise ValidationError(
                message=f"Slug '{slug}' is already used by another {self.spec.label}",
                field=self.spec.slug_field,
            )

    def _validate(self, schema: Type[BaseModel], fields: Mapping[str, Any]) -> BaseModel:
        if not isinstance(fields, Mapping):
            raise ValidationError(message="Request body must be a JSON object", field="body")
        try:
            return schema.model_validate(dict(fields))
        except PydanticValidationError as e:
            errors = [
                {
                    "field": ".".join(str(part) for part in err["loc"]) or "body",
                    "message": _clean_message(err["msg"]),
                }
                for err in e.errors()
            ]
            failed = ", ".join(dict.fromkeys(entry["field"] for entry in errors))
            raise ValidationError(
                message=f"Invalid {self.spec.label}: {failed}",
                errors=errors,
            ) from None

    def _integrity_error(self, error: IntegrityError) -> ValidationError:
        logger.warning("Integrity error on %s: %s", self.spec.key, error.orig)
        field_name = self.spec.slug_field or "body"
        return ValidationError(
            message=f"This {self.spec.label} conflicts with an existing one",
            field=field_name,
        )

    def _storage_error(self, operation: str, error: Exception) -> StorageError:
        logger.error(
            "Storage error during %s on %s: %s",
            operation,
            self.spec.key,
            str(error),
            exc_info=True,
        )
        return StorageError(
            message=f"Could not {operation} {self.spec.label}. Please try again.",
            context={"collection": self.spec.key, "operation": operation, "error_type": type(error).__name__},
        )


def _clean_message(message: str) -> str:
    """Drop pydantic's 'Value error, ' prefix from custom validator messages."""
    prefix = "Value error, "
    return message[len(prefix):] if message.startswith(prefix) else message
