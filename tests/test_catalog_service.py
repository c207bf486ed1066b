"""
Tests for the catalog service.

These tests verify:
- Load from store, empty store, failed load
- CRUD by stable id with full-set saves
- Failed saves keep the in-memory edit (no rollback)
- View state transitions and clear
"""

import pytest

from pvpfilter.models.card import CatalogEntry
from pvpfilter.models.failure import CardNotFoundError, StoreUnavailableError
from pvpfilter.models.filter_state import FilterState, SortSpec
from pvpfilter.services.catalog import CatalogService


@pytest.fixture
async def loaded_catalog(memory_store) -> CatalogService:
    catalog = CatalogService(memory_store)
    await catalog.load()
    return catalog


class TestLoad:
    async def test_load_from_store(
        self, memory_store, sample_entries: list[CatalogEntry]
    ) -> None:
        catalog = CatalogService(memory_store)

        count = await catalog.load()

        assert count == len(sample_entries)
        assert catalog.entries == sample_entries
        assert catalog.store_connected is True

    async def test_empty_store_gives_empty_catalog(self, memory_store) -> None:
        memory_store.saved = None
        catalog = CatalogService(memory_store)

        assert await catalog.load() == 0
        assert catalog.entries == []
        assert memory_store.save_calls == 0

    async def test_empty_store_seeds_defaults_when_enabled(self, memory_store) -> None:
        memory_store.saved = None
        catalog = CatalogService(memory_store, seed_when_empty=True)

        count = await catalog.load()

        assert count > 0
        assert memory_store.save_calls == 1
        assert len(memory_store.saved) == count

    async def test_failed_load_leaves_catalog_empty(self, memory_store) -> None:
        memory_store.fail_load = True
        catalog = CatalogService(memory_store)

        with pytest.raises(StoreUnavailableError):
            await catalog.load()

        assert catalog.entries == []
        assert catalog.store_connected is False
        assert catalog.view().counts.total == 0


class TestCrud:
    async def test_add_appends_and_saves_full_set(
        self, loaded_catalog: CatalogService, memory_store, make_card
    ) -> None:
        entry = await loaded_catalog.add(make_card("Newcomer"))

        assert loaded_catalog.entries[-1] == entry
        assert len(memory_store.saved) == 7
        assert memory_store.saved[-1].card.name == "Newcomer"

    async def test_added_cards_get_distinct_ids(
        self, loaded_catalog: CatalogService, make_card
    ) -> None:
        first = await loaded_catalog.add(make_card("Twin"))
        second = await loaded_catalog.add(make_card("Twin"))

        assert first.id != second.id

    async def test_update_keeps_id_and_position(
        self, loaded_catalog: CatalogService, memory_store, make_card
    ) -> None:
        updated = await loaded_catalog.update("card-2", make_card("Kuro II", element="Dark"))

        assert updated.id == "card-2"
        assert loaded_catalog.entries[2].card.name == "Kuro II"
        assert memory_store.saved[2].card.name == "Kuro II"

    async def test_update_targets_id_not_view_position(
        self, loaded_catalog: CatalogService, make_card
    ) -> None:
        loaded_catalog.click_sort("name")
        first_visible = loaded_catalog.view().entries[0]

        await loaded_catalog.update(first_visible.id, make_card("Renamed"))

        assert loaded_catalog.get(first_visible.id).card.name == "Renamed"
        assert first_visible.card.name == "Akane"

    async def test_delete_removes_card(
        self, loaded_catalog: CatalogService, memory_store
    ) -> None:
        deleted = await loaded_catalog.delete("card-0")

        assert deleted.card.name == "Akane"
        assert [e.id for e in loaded_catalog.entries][0] == "card-1"
        assert len(memory_store.saved) == 5

    async def test_unknown_id_raises(self, loaded_catalog: CatalogService, make_card) -> None:
        with pytest.raises(CardNotFoundError):
            await loaded_catalog.update("missing", make_card("x"))
        with pytest.raises(CardNotFoundError):
            await loaded_catalog.delete("missing")

    async def test_replace_all_assigns_fresh_ids(
        self, loaded_catalog: CatalogService, make_card
    ) -> None:
        entries = await loaded_catalog.replace_all([make_card("Only")])

        assert len(entries) == 1
        assert entries[0].id not in {f"card-{i}" for i in range(6)}

    async def test_failed_save_keeps_in_memory_edit(
        self, loaded_catalog: CatalogService, memory_store, make_card
    ) -> None:
        memory_store.fail_save = True

        with pytest.raises(StoreUnavailableError):
            await loaded_catalog.add(make_card("Unsaved"))

        assert loaded_catalog.entries[-1].card.name == "Unsaved"
        assert len(memory_store.saved) == 6
        assert loaded_catalog.store_connected is False

    async def test_next_save_persists_earlier_unsaved_edit(
        self, loaded_catalog: CatalogService, memory_store, make_card
    ) -> None:
        memory_store.fail_save = True
        with pytest.raises(StoreUnavailableError):
            await loaded_catalog.add(make_card("Unsaved"))

        memory_store.fail_save = False
        await loaded_catalog.add(make_card("Saved"))

        assert [e.card.name for e in memory_store.saved][-2:] == ["Unsaved", "Saved"]


class TestViewState:
    async def test_preset_toggle_changes_view(self, loaded_catalog: CatalogService) -> None:
        loaded_catalog.toggle_preset("12")

        view = loaded_catalog.view()

        assert [e.card.name for e in view.entries] == ["Yuki", "Sora"]
        assert view.counts.human == 4

    async def test_click_sort_flips(self, loaded_catalog: CatalogService) -> None:
        loaded_catalog.click_sort("hp")
        loaded_catalog.click_sort("hp")

        assert loaded_catalog.sort == SortSpec("hp", "desc")

    async def test_clear_resets_everything(self, loaded_catalog: CatalogService) -> None:
        loaded_catalog.toggle_preset("9")
        loaded_catalog.update_state(lambda s: s.with_search("aka"))
        loaded_catalog.click_sort("name")

        loaded_catalog.clear()

        assert loaded_catalog.state == FilterState()
        assert loaded_catalog.sort == SortSpec()
        assert len(loaded_catalog.view().entries) == 6

    async def test_edits_do_not_reset_filters(
        self, loaded_catalog: CatalogService, make_card
    ) -> None:
        loaded_catalog.update_state(lambda s: s.toggle_element("Fire"))

        await loaded_catalog.add(make_card("Blaze", element="Fire"))

        assert [e.card.name for e in loaded_catalog.view().entries] == ["Akane", "Blaze"]
