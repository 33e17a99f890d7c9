"""
Wildtrail Backend: Collection Registry
======================================

Binds each URL key to its model, payload schemas and repository. Routes
resolve the ``{collection}`` path segment through get_collection() /
get_repository(); an unknown key is a NotFoundError (404).
"""

from typing import Dict, List

from wildtrail.exceptions import NotFoundError
from wildtrail.models import (
    FavoriteDestination,
    HeaderMenuItem,
    MegaMenuCategory,
    MegaMenuItem,
    SidebarItem,
    Slider,
    TipAndIdea,
    TravelersChoice,
)
from wildtrail.schemas.home_blocks import (
    FavoriteDestinationCreate,
    FavoriteDestinationResponse,
    FavoriteDestinationUpdate,
    TipCreate,
    TipResponse,
    TipUpdate,
    TravelersChoiceCreate,
    TravelersChoiceResponse,
    TravelersChoiceUpdate,
)
from wildtrail.schemas.menu import (
    HeaderMenuItemCreate,
    HeaderMenuItemResponse,
    HeaderMenuItemUpdate,
    MegaMenuCategoryCreate,
    MegaMenuCategoryResponse,
    MegaMenuCategoryUpdate,
    MegaMenuItemCreate,
    MegaMenuItemResponse,
    MegaMenuItemUpdate,
)
from wildtrail.schemas.sidebar import SidebarItemCreate, SidebarItemResponse, SidebarItemUpdate
from wildtrail.schemas.slider import SliderCreate, SliderResponse, SliderUpdate
from wildtrail.services.collection_repository import CollectionRepository, CollectionSpec

COLLECTIONS: Dict[str, CollectionSpec] = {
    spec.key: spec
    for spec in (
        CollectionSpec(
            key="favorite-destinations",
            label="favorite destination",
            model=FavoriteDestination,
            create_schema=FavoriteDestinationCreate,
            update_schema=FavoriteDestinationUpdate,
            response_schema=FavoriteDestinationResponse,
            slug_field="slug",
        ),
        CollectionSpec(
            key="travelers-choice",
            label="travelers' choice item",
            model=TravelersChoice,
            create_schema=TravelersChoiceCreate,
            update_schema=TravelersChoiceUpdate,
            response_schema=TravelersChoiceResponse,
            slug_field="slug",
        ),
        CollectionSpec(
            key="tips",
            label="tip",
            model=TipAndIdea,
            create_schema=TipCreate,
            update_schema=TipUpdate,
            response_schema=TipResponse,
        ),
        CollectionSpec(
            key="sliders",
            label="slider",
            model=Slider,
            create_schema=SliderCreate,
            update_schema=SliderUpdate,
            response_schema=SliderResponse,
            active_field="is_active",
        ),
        CollectionSpec(
            key="header-menu-items",
            label="header menu item",
            model=HeaderMenuItem,
            create_schema=HeaderMenuItemCreate,
            update_schema=HeaderMenuItemUpdate,
            response_schema=HeaderMenuItemResponse,
            scope_field="category",
        ),
        CollectionSpec(
            key="mega-menu-categories",
            label="mega menu category",
            model=MegaMenuCategory,
            create_schema=MegaMenuCategoryCreate,
            update_schema=MegaMenuCategoryUpdate,
            response_schema=MegaMenuCategoryResponse,
            scope_field="header_menu_item_id",
            parent_model=HeaderMenuItem,
        ),
        CollectionSpec(
            key="mega-menu-items",
            label="mega menu item",
            model=MegaMenuItem,
            create_schema=MegaMenuItemCreate,
            update_schema=MegaMenuItemUpdate,
            response_schema=MegaMenuItemResponse,
            scope_field="mega_menu_category_id",
            parent_model=MegaMenuCategory,
        ),
        CollectionSpec(
            key="sidebar-items",
            label="sidebar item",
            model=SidebarItem,
            create_schema=SidebarItemCreate,
            update_schema=SidebarItemUpdate,
            response_schema=SidebarItemResponse,
            scope_field="category",
        ),
    )
}

_repositories: Dict[str, CollectionRepository] = {
    key: CollectionRepository(spec) for key, spec in COLLECTIONS.items()
}


def get_collection(key: str) -> CollectionSpec:
    try:
        return COLLECTIONS[key]
    except KeyError:
        raise NotFoundError(resource="collection", resource_id=key) from None


def get_repository(key: str) -> CollectionRepository:
    """Repository for ``key``; raises NotFoundError for unknown collections."""
    get_collection(key)
    return _repositories[key]


def list_collections() -> List[CollectionSpec]:
    return list(COLLECTIONS.values())
