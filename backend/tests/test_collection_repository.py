"""
Wildtrail Backend: Collection Repository Tests
==============================================

What:  CRUD and reorder behaviour of CollectionRepository against a real
       (in-memory SQLite) database, plus storage failure paths on a mock
       session.

What we test:
    ✅ create appends (max + 1), empty collection starts at 0
    ✅ reorder swaps exactly two order values, boundaries are a no-op
    ✅ strict boundary mode raises InvalidOperationError
    ✅ ties are broken by id; gaps are kept
    ✅ update never touches order; delete then get raises NotFoundError
    ✅ scoped collections order and reorder per scope
    ✅ mega menu levels are ordered per parent id; parents must exist
    ✅ SQLAlchemy failures surface as StorageError
"""

import re
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from wildtrail.config import settings
from wildtrail.exceptions import (
    InvalidOperationError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from wildtrail.models import TipAndIdea
from wildtrail.services.collection_repository import slugify
from wildtrail.services.registry import get_repository


def titles(items):
    return [item.title for item in items]


async def seed_tips(db, tip_payload, *names):
    repo = get_repository("tips")
    created = []
    for name in names:
        created.append(await repo.create(db, tip_payload(title=name)))
    return created


class TestCreate:
    """Default ordering and validation on create."""

    @pytest.mark.asyncio
    async def test_first_item_gets_order_zero(self, db_session, tip_payload):
        item = await get_repository("tips").create(db_session, tip_payload())
        assert item.id is not None
        assert item.order == 0
        assert item.created_at is not None

    @pytest.mark.asyncio
    async def test_orders_increment_in_creation_order(self, db_session, tip_payload):
        a, b, c = await seed_tips(db_session, tip_payload, "Alpha", "Bravo", "Charlie")
        assert [a.order, b.order, c.order] == [0, 1, 2]

    @pytest.mark.asyncio
    async def test_new_item_goes_after_current_maximum(self, db_session, tip_payload):
        db_session.add(TipAndIdea(order=7, **tip_payload(title="Existing")))
        await db_session.flush()

        item = await get_repository("tips").create(db_session, tip_payload(title="Newcomer"))
        assert item.order == 8

    @pytest.mark.asyncio
    async def test_create_after_reorder_appends_after_maximum(self, db_session, tip_payload):
        _, b, _ = await seed_tips(db_session, tip_payload, "Aa", "Bb", "Cc")
        repo = get_repository("tips")
        await repo.reorder(db_session, b.id, "up")

        item = await repo.create(db_session, tip_payload(title="Dd"))

        assert item.order == 3
        assert titles(await repo.list(db_session)) == ["Bb", "Aa", "Cc", "Dd"]

    @pytest.mark.asyncio
    async def test_single_character_title_is_rejected(self, db_session, tip_payload):
        with pytest.raises(ValidationError) as exc_info:
            await get_repository("tips").create(db_session, tip_payload(title="D"))
        assert exc_info.value.fields == ["title"]

    @pytest.mark.asyncio
    async def test_client_supplied_order_is_ignored(self, db_session, tip_payload):
        item = await get_repository("tips").create(db_session, tip_payload(order=42, id=999))
        assert item.order == 0
        assert item.id != 999

    @pytest.mark.asyncio
    async def test_empty_title_is_rejected(self, db_session, tip_payload):
        with pytest.raises(ValidationError) as exc_info:
            await get_repository("tips").create(db_session, tip_payload(title=""))
        assert "title" in exc_info.value.fields

    @pytest.mark.asyncio
    async def test_every_failing_field_is_reported(self, db_session, tip_payload):
        payload = tip_payload(title=" ", image="not-a-url", description="short")
        with pytest.raises(ValidationError) as exc_info:
            await get_repository("tips").create(db_session, payload)
        assert {"title", "image", "description"} <= set(exc_info.value.fields)

    @pytest.mark.asyncio
    async def test_missing_required_field(self, db_session, tip_payload):
        payload = tip_payload()
        del payload["icon_type"]
        with pytest.raises(ValidationError) as exc_info:
            await get_repository("tips").create(db_session, payload)
        assert exc_info.value.fields == ["icon_type"]

    @pytest.mark.asyncio
    async def test_rejected_create_leaves_collection_unchanged(self, db_session, tip_payload):
        repo = get_repository("tips")
        with pytest.raises(ValidationError):
            await repo.create(db_session, tip_payload(title=""))
        assert await repo.list(db_session) == []

    @pytest.mark.asyncio
    async def test_non_object_payload(self, db_session):
        with pytest.raises(ValidationError) as exc_info:
            await get_repository("tips").create(db_session, ["not", "a", "dict"])
        assert exc_info.value.field == "body"


class TestSlugs:
    def test_slugify(self):
        assert slugify("  Torres del Paine! ") == "torres-del-paine"
        assert slugify("Lake   Tahoe__North") == "lake-tahoe-north"
        assert slugify("--Yosemite--") == "yosemite"

    def test_slugify_folds_accents(self):
        assert slugify("Zürich Öberland") == "zurich-oberland"
        assert slugify("Château-d'Œx") == "chateau-dx"

    @pytest.mark.asyncio
    async def test_accented_title_slug_can_be_sent_back(self, db_session, destination_payload):
        repo = get_repository("favorite-destinations")
        item = await repo.create(db_session, destination_payload(title="Zürich Öberland"))
        assert item.slug == "zurich-oberland"

        updated = await repo.update(db_session, item.id, {"slug": item.slug, "country": "Switzerland"})
        assert updated.slug == "zurich-oberland"
        assert updated.country == "Switzerland"

    @pytest.mark.asyncio
    async def test_too_short_title_gets_generated_slug(self, db_session, destination_payload):
        repo = get_repository("favorite-destinations")
        item = await repo.create(db_session, destination_payload(title="K!"))

        assert item.slug.startswith("favorite-destinations-")
        assert re.fullmatch(r"[a-z0-9]+(?:-[a-z0-9]+)*", item.slug)
        updated = await repo.update(db_session, item.id, {"slug": item.slug})
        assert updated.slug == item.slug

    @pytest.mark.asyncio
    async def test_non_latin_title_gets_generated_slug(self, db_session, destination_payload):
        item = await get_repository("favorite-destinations").create(
            db_session, destination_payload(title="富士山")
        )
        assert item.slug.startswith("favorite-destinations-")

    @pytest.mark.asyncio
    async def test_slug_derived_from_title(self, db_session, destination_payload):
        item = await get_repository("favorite-destinations").create(
            db_session, destination_payload(title="Torres del Paine")
        )
        assert item.slug == "torres-del-paine"

    @pytest.mark.asyncio
    async def test_derived_slug_collision_gets_suffix(self, db_session, destination_payload):
        repo = get_repository("favorite-destinations")
        first = await repo.create(db_session, destination_payload(title="Banff"))
        second = await repo.create(db_session, destination_payload(title="Banff"))
        assert first.slug == "banff"
        assert second.slug.startswith("banff-")
        assert second.slug != first.slug

    @pytest.mark.asyncio
    async def test_explicit_duplicate_slug_is_rejected(self, db_session, destination_payload):
        repo = get_repository("favorite-destinations")
        await repo.create(db_session, destination_payload(slug="patagonia"))
        with pytest.raises(ValidationError) as exc_info:
            await repo.create(db_session, destination_payload(title="Other", slug="patagonia"))
        assert exc_info.value.field == "slug"

    @pytest.mark.asyncio
    async def test_update_to_taken_slug_is_rejected(self, db_session, destination_payload):
        repo = get_repository("favorite-destinations")
        await repo.create(db_session, destination_payload(title="Zion"))
        other = await repo.create(db_session, destination_payload(title="Arches"))
        with pytest.raises(ValidationError) as exc_info:
            await repo.update(db_session, other.id, {"slug": "zion"})
        assert exc_info.value.field == "slug"

    @pytest.mark.asyncio
    async def test_update_keeping_own_slug_is_allowed(self, db_session, destination_payload):
        repo = get_repository("favorite-destinations")
        item = await repo.create(db_session, destination_payload(title="Zion"))
        updated = await repo.update(db_session, item.id, {"slug": "zion", "country": "USA"})
        assert updated.country == "USA"


class TestReorder:
    """Adjacent swap semantics."""

    @pytest.mark.asyncio
    async def test_move_up_swaps_with_previous(self, db_session, tip_payload):
        a, b, c = await seed_tips(db_session, tip_payload, "Alpha", "Bravo", "Charlie")

        result = await get_repository("tips").reorder(db_session, b.id, "up")

        assert result.moved is True
        assert titles(result.items) == ["Bravo", "Alpha", "Charlie"]
        assert (a.order, b.order, c.order) == (1, 0, 2)

    @pytest.mark.asyncio
    async def test_move_down_swaps_with_next(self, db_session, tip_payload):
        a, b, c = await seed_tips(db_session, tip_payload, "Alpha", "Bravo", "Charlie")

        result = await get_repository("tips").reorder(db_session, b.id, "down")

        assert titles(result.items) == ["Alpha", "Charlie", "Bravo"]
        assert (a.order, b.order, c.order) == (0, 2, 1)

    @pytest.mark.asyncio
    async def test_up_then_down_restores_original(self, db_session, tip_payload):
        _, b, _ = await seed_tips(db_session, tip_payload, "Alpha", "Bravo", "Charlie")
        repo = get_repository("tips")

        await repo.reorder(db_session, b.id, "up")
        result = await repo.reorder(db_session, b.id, "down")

        assert titles(result.items) == ["Alpha", "Bravo", "Charlie"]
        assert [item.order for item in result.items] == [0, 1, 2]

    @pytest.mark.asyncio
    async def test_first_item_up_is_noop(self, db_session, tip_payload):
        a, _, _ = await seed_tips(db_session, tip_payload, "Alpha", "Bravo", "Charlie")

        result = await get_repository("tips").reorder(db_session, a.id, "up")

        assert result.moved is False
        assert titles(result.items) == ["Alpha", "Bravo", "Charlie"]
        assert [item.order for item in result.items] == [0, 1, 2]

    @pytest.mark.asyncio
    async def test_last_item_down_is_noop(self, db_session, tip_payload):
        _, _, c = await seed_tips(db_session, tip_payload, "Alpha", "Bravo", "Charlie")

        result = await get_repository("tips").reorder(db_session, c.id, "down")

        assert result.moved is False
        assert titles(result.items) == ["Alpha", "Bravo", "Charlie"]

    @pytest.mark.asyncio
    async def test_single_item_cannot_move(self, db_session, tip_payload):
        (only,) = await seed_tips(db_session, tip_payload, "Solo")
        repo = get_repository("tips")

        assert (await repo.reorder(db_session, only.id, "up")).moved is False
        assert (await repo.reorder(db_session, only.id, "down")).moved is False

    @pytest.mark.asyncio
    async def test_strict_boundaries_raise(self, db_session, tip_payload, monkeypatch):
        monkeypatch.setattr(settings, "reorder_strict_boundaries", True)
        a, _, c = await seed_tips(db_session, tip_payload, "Alpha", "Bravo", "Charlie")
        repo = get_repository("tips")

        with pytest.raises(InvalidOperationError):
            await repo.reorder(db_session, a.id, "up")
        with pytest.raises(InvalidOperationError):
            await repo.reorder(db_session, c.id, "down")

    @pytest.mark.asyncio
    async def test_gaps_are_preserved(self, db_session, tip_payload):
        for name, order in (("Alpha", 0), ("Bravo", 5), ("Charlie", 9)):
            db_session.add(TipAndIdea(order=order, **tip_payload(title=name)))
        await db_session.flush()
        repo = get_repository("tips")
        c = (await repo.list(db_session))[2]

        result = await repo.reorder(db_session, c.id, "up")

        assert titles(result.items) == ["Alpha", "Charlie", "Bravo"]
        assert [item.order for item in result.items] == [0, 5, 9]

    @pytest.mark.asyncio
    async def test_ties_are_ordered_by_id(self, db_session, tip_payload):
        for name in ("First", "Second", "Third"):
            db_session.add(TipAndIdea(order=5, **tip_payload(title=name)))
        await db_session.flush()
        repo = get_repository("tips")

        items = await repo.list(db_session)
        assert titles(items) == ["First", "Second", "Third"]

        # Swapping two equal order values changes nothing visible
        result = await repo.reorder(db_session, items[1].id, "up")
        assert result.moved is False
        assert [item.order for item in result.items] == [5, 5, 5]
        assert titles(result.items) == ["First", "Second", "Third"]

    @pytest.mark.asyncio
    async def test_invalid_direction(self, db_session, tip_payload):
        (a,) = await seed_tips(db_session, tip_payload, "Alpha")
        with pytest.raises(ValidationError) as exc_info:
            await get_repository("tips").reorder(db_session, a.id, "sideways")
        assert exc_info.value.field == "direction"

    @pytest.mark.asyncio
    async def test_missing_item(self, db_session):
        with pytest.raises(NotFoundError):
            await get_repository("tips").reorder(db_session, 404, "up")


class TestUpdateAndDelete:

    @pytest.mark.asyncio
    async def test_update_changes_content_but_not_order(self, db_session, tip_payload):
        _, b, _ = await seed_tips(db_session, tip_payload, "Alpha", "Bravo", "Charlie")
        created_at = b.created_at

        updated = await get_repository("tips").update(
            db_session, b.id, {"title": "Bee", "order": 99}
        )

        assert updated.title == "Bee"
        assert updated.order == 1
        assert updated.created_at == created_at
        assert updated.updated_at >= created_at

    @pytest.mark.asyncio
    async def test_update_leaves_omitted_fields(self, db_session, tip_payload):
        (a,) = await seed_tips(db_session, tip_payload, "Alpha")
        updated = await get_repository("tips").update(db_session, a.id, {"icon_type": "tent"})
        assert updated.icon_type == "tent"
        assert updated.category == "hiking"
        assert updated.title == "Alpha"

    @pytest.mark.asyncio
    async def test_update_rejects_null_for_required_field(self, db_session, tip_payload):
        (a,) = await seed_tips(db_session, tip_payload, "Alpha")
        with pytest.raises(ValidationError) as exc_info:
            await get_repository("tips").update(db_session, a.id, {"title": None})
        assert exc_info.value.fields == ["title"]

    @pytest.mark.asyncio
    async def test_update_allows_null_for_optional_field(self, db_session, tip_payload):
        (a,) = await seed_tips(db_session, tip_payload, "Alpha")
        updated = await get_repository("tips").update(db_session, a.id, {"parent_category": None})
        assert updated.parent_category is None

    @pytest.mark.asyncio
    async def test_update_missing_item(self, db_session):
        with pytest.raises(NotFoundError):
            await get_repository("tips").update(db_session, 12345, {"title": "Nope"})

    @pytest.mark.asyncio
    async def test_delete_then_get_raises(self, db_session, tip_payload):
        (a,) = await seed_tips(db_session, tip_payload, "Alpha")
        repo = get_repository("tips")

        await repo.delete(db_session, a.id)

        with pytest.raises(NotFoundError):
            await repo.get(db_session, a.id)
        with pytest.raises(NotFoundError):
            await repo.delete(db_session, a.id)

    @pytest.mark.asyncio
    async def test_deleted_item_cannot_be_updated_or_moved(self, db_session, tip_payload):
        a, b = await seed_tips(db_session, tip_payload, "Alpha", "Bravo")
        repo = get_repository("tips")

        await repo.delete(db_session, b.id)

        with pytest.raises(NotFoundError):
            await repo.update(db_session, b.id, {"title": "Revived"})
        with pytest.raises(NotFoundError):
            await repo.reorder(db_session, b.id, "up")
        assert titles(await repo.list(db_session)) == ["Alpha"]
        assert a.order == 0

    @pytest.mark.asyncio
    async def test_delete_does_not_compact_orders(self, db_session, tip_payload):
        _, b, _ = await seed_tips(db_session, tip_payload, "Alpha", "Bravo", "Charlie")
        repo = get_repository("tips")

        await repo.delete(db_session, b.id)
        items = await repo.list(db_session)

        assert titles(items) == ["Alpha", "Charlie"]
        assert [item.order for item in items] == [0, 2]

    @pytest.mark.asyncio
    async def test_reorder_steps_over_deleted_gap(self, db_session, tip_payload):
        _, b, c = await seed_tips(db_session, tip_payload, "Alpha", "Bravo", "Charlie")
        repo = get_repository("tips")
        await repo.delete(db_session, b.id)

        result = await repo.reorder(db_session, c.id, "up")

        assert titles(result.items) == ["Charlie", "Alpha"]
        assert [item.order for item in result.items] == [0, 2]


class TestScopedCollection:
    """Header menu items are ordered per category."""

    @pytest.mark.asyncio
    async def test_default_order_is_per_scope(self, db_session, menu_payload):
        repo = get_repository("header-menu-items")
        trails = await repo.create(db_session, menu_payload("Trails", "hiking"))
        tents = await repo.create(db_session, menu_payload("Tents", "camping"))
        boots = await repo.create(db_session, menu_payload("Boots", "hiking"))

        assert (trails.order, tents.order, boots.order) == (0, 0, 1)

    @pytest.mark.asyncio
    async def test_list_filters_and_groups_by_scope(self, db_session, menu_payload):
        repo = get_repository("header-menu-items")
        await repo.create(db_session, menu_payload("Trails", "hiking"))
        await repo.create(db_session, menu_payload("Tents", "camping"))
        await repo.create(db_session, menu_payload("Boots", "hiking"))

        hiking = await repo.list(db_session, scope="hiking")
        everything = await repo.list(db_session)

        assert [i.label for i in hiking] == ["Trails", "Boots"]
        assert [(i.category, i.label) for i in everything] == [
            ("camping", "Tents"),
            ("hiking", "Trails"),
            ("hiking", "Boots"),
        ]

    @pytest.mark.asyncio
    async def test_reorder_stays_within_scope(self, db_session, menu_payload):
        repo = get_repository("header-menu-items")
        await repo.create(db_session, menu_payload("Tents", "camping"))
        trails = await repo.create(db_session, menu_payload("Trails", "hiking"))

        # First in its own scope even though a camping item has order 0 too
        result = await repo.reorder(db_session, trails.id, "up")

        assert result.moved is False
        assert [i.label for i in result.items] == ["Trails"]

    @pytest.mark.asyncio
    async def test_category_cannot_be_changed(self, db_session, menu_payload):
        repo = get_repository("header-menu-items")
        item = await repo.create(db_session, menu_payload("Trails", "hiking"))
        updated = await repo.update(db_session, item.id, {"category": "camping", "label": "Routes"})
        assert updated.category == "hiking"
        assert updated.label == "Routes"


class TestParentScopedCollections:
    """Mega menu categories and links are ordered per parent id."""

    async def _header(self, db, menu_payload, label="Gear"):
        return await get_repository("header-menu-items").create(
            db, menu_payload(label, "camping", has_mega_menu=True)
        )

    @pytest.mark.asyncio
    async def test_category_order_is_per_header_item(
        self, db_session, menu_payload, mega_category_payload
    ):
        gear = await self._header(db_session, menu_payload, "Gear")
        trips = await self._header(db_session, menu_payload, "Trips")
        repo = get_repository("mega-menu-categories")

        shelter = await repo.create(db_session, mega_category_payload(gear.id, "Shelter"))
        alpine = await repo.create(db_session, mega_category_payload(trips.id, "Alpine"))
        cooking = await repo.create(db_session, mega_category_payload(gear.id, "Cooking"))

        assert (shelter.order, alpine.order, cooking.order) == (0, 0, 1)
        assert [c.title for c in await repo.list(db_session, scope=gear.id)] == ["Shelter", "Cooking"]

    @pytest.mark.asyncio
    async def test_link_reorder_stays_within_category(
        self, db_session, menu_payload, mega_category_payload, mega_item_payload
    ):
        gear = await self._header(db_session, menu_payload)
        categories = get_repository("mega-menu-categories")
        shelter = await categories.create(db_session, mega_category_payload(gear.id, "Shelter"))
        cooking = await categories.create(db_session, mega_category_payload(gear.id, "Cooking"))
        links = get_repository("mega-menu-items")
        stove = await links.create(db_session, mega_item_payload(cooking.id, "Stoves"))
        tents = await links.create(db_session, mega_item_payload(shelter.id, "Tents"))
        tarps = await links.create(db_session, mega_item_payload(shelter.id, "Tarps"))

        result = await links.reorder(db_session, tarps.id, "up")

        assert result.moved is True
        assert [i.label for i in result.items] == ["Tarps", "Tents"]
        assert stove.order == 0

        # Tarps also has order 0, but in another category
        result = await links.reorder(db_session, stove.id, "down")
        assert result.moved is False
        assert [i.label for i in result.items] == ["Stoves"]

    @pytest.mark.asyncio
    async def test_scope_given_as_text_is_converted(
        self, db_session, menu_payload, mega_category_payload
    ):
        gear = await self._header(db_session, menu_payload)
        repo = get_repository("mega-menu-categories")
        await repo.create(db_session, mega_category_payload(gear.id, "Shelter"))

        assert [c.title for c in await repo.list(db_session, scope=str(gear.id))] == ["Shelter"]
        with pytest.raises(ValidationError) as exc_info:
            await repo.list(db_session, scope="gear")
        assert exc_info.value.field == "scope"

    @pytest.mark.asyncio
    async def test_unknown_parent_is_rejected(self, db_session, mega_category_payload, mega_item_payload):
        with pytest.raises(ValidationError) as exc_info:
            await get_repository("mega-menu-categories").create(db_session, mega_category_payload(999))
        assert exc_info.value.field == "header_menu_item_id"

        with pytest.raises(ValidationError) as exc_info:
            await get_repository("mega-menu-items").create(db_session, mega_item_payload(999))
        assert exc_info.value.field == "mega_menu_category_id"

    @pytest.mark.asyncio
    async def test_parent_id_cannot_be_changed(self, db_session, menu_payload, mega_category_payload):
        gear = await self._header(db_session, menu_payload, "Gear")
        trips = await self._header(db_session, menu_payload, "Trips")
        repo = get_repository("mega-menu-categories")
        shelter = await repo.create(db_session, mega_category_payload(gear.id, "Shelter"))

        updated = await repo.update(
            db_session, shelter.id, {"header_menu_item_id": trips.id, "title": "Tents & tarps"}
        )

        assert updated.header_menu_item_id == gear.id
        assert updated.title == "Tents & tarps"

    @pytest.mark.asyncio
    async def test_deleting_header_item_removes_its_mega_menu(
        self, db_session, menu_payload, mega_category_payload, mega_item_payload
    ):
        gear = await self._header(db_session, menu_payload)
        shelter = await get_repository("mega-menu-categories").create(
            db_session, mega_category_payload(gear.id, "Shelter")
        )
        await get_repository("mega-menu-items").create(db_session, mega_item_payload(shelter.id))

        await get_repository("header-menu-items").delete(db_session, gear.id)
        db_session.expunge_all()

        assert await get_repository("mega-menu-categories").list(db_session) == []
        assert await get_repository("mega-menu-items").list(db_session) == []


class TestSidebarItems:

    @pytest.mark.asyncio
    async def test_sidebar_items_are_ordered_per_category(self, db_session, sidebar_payload):
        repo = get_repository("sidebar-items")
        permits = await repo.create(db_session, sidebar_payload("Permit season", "hiking"))
        fires = await repo.create(db_session, sidebar_payload("Fire bans", "Camping"))
        water = await repo.create(db_session, sidebar_payload("Water sources", "hiking"))

        assert (permits.order, fires.order, water.order) == (0, 0, 1)
        assert fires.category == "camping"

        result = await repo.reorder(db_session, water.id, "up")
        assert titles(result.items) == ["Water sources", "Permit season"]

    @pytest.mark.asyncio
    async def test_sidebar_content_minimum(self, db_session, sidebar_payload):
        with pytest.raises(ValidationError) as exc_info:
            await get_repository("sidebar-items").create(db_session, sidebar_payload(content="Go"))
        assert exc_info.value.fields == ["content"]


class TestActiveFlag:

    @pytest.mark.asyncio
    async def test_active_only_hides_inactive_sliders(self, db_session, slider_payload):
        repo = get_repository("sliders")
        await repo.create(db_session, slider_payload("Visible"))
        await repo.create(db_session, slider_payload("Draft", is_active=False))

        assert titles(await repo.list(db_session, active_only=True)) == ["Visible"]
        assert titles(await repo.list(db_session)) == ["Visible", "Draft"]

    @pytest.mark.asyncio
    async def test_video_id_derived_from_youtube_url(self, db_session, slider_payload):
        slide = await get_repository("sliders").create(db_session, slider_payload())
        assert slide.video_id == "dQw4w9WgXcQ"
        assert slide.tags == ["alpine", "hiking"]


class TestStorageErrors:

    @pytest.mark.asyncio
    async def test_list_failure_becomes_storage_error(self, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("db down"))
        with pytest.raises(StorageError) as exc_info:
            await get_repository("sliders").list(mock_db_session)
        assert "db down" not in exc_info.value.message
        assert exc_info.value.context["operation"] == "list"

    @pytest.mark.asyncio
    async def test_get_failure_becomes_storage_error(self, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("db down"))
        with pytest.raises(StorageError):
            await get_repository("tips").get(mock_db_session, 1)

    @pytest.mark.asyncio
    async def test_not_found_on_mock_session(self, mock_db_session):
        result = MagicMock()
        result.scalar_one_or_none.return_value = None
        mock_db_session.execute.return_value = result
        with pytest.raises(NotFoundError):
            await get_repository("tips").get(mock_db_session, 1)
