"""ORM models. Importing this package registers every table on Base.metadata."""

from wildtrail.models.home_blocks import FavoriteDestination, TipAndIdea, TravelersChoice
from wildtrail.models.menu import HeaderMenuItem, MegaMenuCategory, MegaMenuItem
from wildtrail.models.sidebar import SidebarItem
from wildtrail.models.slider import Slider

__all__ = [
    "FavoriteDestination",
    "HeaderMenuItem",
    "MegaMenuCategory",
    "MegaMenuItem",
    "SidebarItem",
    "Slider",
    "TipAndIdea",
    "TravelersChoice",
]
