"""
Wildtrail Backend: Public Collection Routes
===========================================

Read-only listings for the storefront: ``GET /api/<collection>``.
Collections with an active flag only return active items. Responses carry
a short public Cache-Control so a CDN can absorb home page traffic.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from wildtrail.config import settings
from wildtrail.database import get_db_session
from wildtrail.schemas.common import ErrorResponse
from wildtrail.services.registry import get_collection, get_repository

router = APIRouter(prefix="/api", tags=["Public"])


@router.get(
    "/{collection}",
    responses={
        404: {"description": "Unknown collection", "model": ErrorResponse},
        500: {"description": "Storage error", "model": ErrorResponse},
    },
    summary="List a collection in display order",
)
async def list_public(
    collection: str,
    response: Response,
    scope: Optional[str] = Query(default=None, description="e.g. ?scope=hiking for header menu items, or a parent id for mega menus"),
    db: AsyncSession = Depends(get_db_session),
) -> List[Dict[str, Any]]:
    spec = get_collection(collection)
    items = await get_repository(collection).list(db, active_only=True, scope=scope)

    response.headers["Cache-Control"] = f"public, max-age={settings.public_cache_seconds}"
    return [spec.serialize(item) for item in items]
