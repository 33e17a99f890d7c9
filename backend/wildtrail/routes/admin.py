"""
Wildtrail Backend: Admin Collection Routes
==========================================

What:  CRUD and reorder endpoints used by the admin dashboard.
How:   One set of handlers serves every collection; the ``{collection}``
       path segment is resolved through the registry. Handlers stay thin:
       resolve repository → call it → serialize.
Who:   Called by the admin dashboard tables and edit forms.

Endpoints (per collection key <c>):
    GET    /api/admin/collections             registry metadata
    GET    /api/admin/<c>[?scope=]            all items, display order
    GET    /api/admin/<c>/{id}                one item
    POST   /api/admin/<c>                     create (appended last)
    PATCH  /api/admin/<c>/{id}                partial update
    DELETE /api/admin/<c>/{id}                delete
    PATCH  /api/admin/<c>/{id}/reorder        swap with neighbour

Mutations return explicit values (the created/updated item, the deleted id,
the reordered list) so the dashboard never has to guess what changed.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from wildtrail.database import get_db_session
from wildtrail.schemas.common import (
    CollectionInfo,
    DeleteResponse,
    ErrorResponse,
    ReorderRequest,
    ReorderResponse,
)
from wildtrail.services.registry import get_collection, get_repository, list_collections

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["Admin"])

_ERRORS = {
    400: {"description": "Invalid payload", "model": ErrorResponse},
    404: {"description": "Unknown collection or item", "model": ErrorResponse},
    500: {"description": "Storage error", "model": ErrorResponse},
}


@router.get(
    "/collections",
    response_model=List[CollectionInfo],
    summary="List managed collections",
)
async def collections() -> List[CollectionInfo]:
    """Keys and capabilities of every collection, for the dashboard navigation."""
    return [
        CollectionInfo(
            key=spec.key,
            label=spec.label,
            scope_field=spec.scope_field,
            has_active_flag=spec.active_field is not None,
        )
        for spec in list_collections()
    ]


@router.get(
    "/{collection}",
    responses=_ERRORS,
    summary="List all items of a collection",
    description="Returns every item, including inactive ones, sorted by (order, id).",
)
async def list_items(
    collection: str,
    response: Response,
    scope: Optional[str] = Query(default=None, description="Scope value for scoped collections"),
    db: AsyncSession = Depends(get_db_session),
) -> List[Dict[str, Any]]:
    spec = get_collection(collection)
    items = await get_repository(collection).list(db, scope=scope)
    response.headers["X-Total-Count"] = str(len(items))
    return [spec.serialize(item) for item in items]


@router.get("/{collection}/{item_id}", responses=_ERRORS, summary="Get one item")
async def get_item(
    collection: str,
    item_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> Dict[str, Any]:
    spec = get_collection(collection)
    item = await get_repository(collection).get(db, item_id)
    return spec.serialize(item)


@router.post(
    "/{collection}",
    status_code=201,
    responses=_ERRORS,
    summary="Create an item",
    description="Validates the payload and appends the item at the end of its collection.",
)
async def create_item(
    collection: str,
    payload: Any = Body(...),
    db: AsyncSession = Depends(get_db_session),
) -> Dict[str, Any]:
    spec = get_collection(collection)
    item = await get_repository(collection).create(db, payload)
    return spec.serialize(item)


@router.patch(
    "/{collection}/{item_id}",
    responses=_ERRORS,
    summary="Update an item",
    description="Applies the supplied content fields. The display order is never changed here.",
)
async def update_item(
    collection: str,
    item_id: int,
    payload: Any = Body(...),
    db: AsyncSession = Depends(get_db_session),
) -> Dict[str, Any]:
    spec = get_collection(collection)
    item = await get_repository(collection).update(db, item_id, payload)
    return spec.serialize(item)


@router.delete(
    "/{collection}/{item_id}",
    response_model=DeleteResponse,
    responses=_ERRORS,
    summary="Delete an item",
)
async def delete_item(
    collection: str,
    item_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> DeleteResponse:
    spec = get_collection(collection)
    await get_repository(collection).delete(db, item_id)
    return DeleteResponse(message=f"Deleted {spec.label}", id=item_id)


@router.patch(
    "/{collection}/{item_id}/reorder",
    response_model=ReorderResponse,
    responses={**_ERRORS, 409: {"description": "Boundary move in strict mode", "model": ErrorResponse}},
    summary="Move an item up or down",
    description=(
        "Swaps the item's order with its previous ('up') or next ('down') neighbour "
        "and returns the collection in its new order. Moving the first item up or the "
        "last item down leaves everything unchanged and reports moved=false. So does "
        "swapping with a neighbour that shares the same order value."
    ),
)
async def reorder_item(
    collection: str,
    item_id: int,
    body: ReorderRequest,
    db: AsyncSession = Depends(get_db_session),
) -> ReorderResponse:
    spec = get_collection(collection)
    result = await get_repository(collection).reorder(db, item_id, body.direction)

    if result.moved:
        message = f"Moved {spec.label} {body.direction}"
    else:
        message = f"Order unchanged: {spec.label} could not move {body.direction}"

    return ReorderResponse(
        message=message,
        moved=result.moved,
        items=[spec.serialize(item) for item in result.items],
    )
