from unittest.mock import Mock

import pytest

from proofcount.adapters.locks.in_process_lock_manager import InProcessLockManager
from proofcount.adapters.stores.in_memory_stores_repository import InMemoryStoresRepository
from proofcount.application.store_registry import (
    MESSAGE_STORE_CREATED,
    MESSAGE_STORE_EXISTS,
    MESSAGE_STORE_UPDATED,
    StoreRegistry,
)
from proofcount.domain.stores.models import ProductCounter, Store, StoreSettings


def make_registry(repo=None, lock_manager=None) -> StoreRegistry:
    return StoreRegistry(repo or InMemoryStoresRepository(), lock_manager or InProcessLockManager())


def test_create_store_persists_defaults():
    repo = InMemoryStoresRepository()
    registry = make_registry(repo)

    result = registry.create_store("acme")

    assert result.success is True
    assert result.message == MESSAGE_STORE_CREATED
    assert result.settings == StoreSettings.defaults()
    stored = repo.get_store("acme")
    assert stored is not None
    assert stored.session == "session1"


def test_create_store_twice_does_not_modify_existing():
    repo = InMemoryStoresRepository()
    registry = make_registry(repo)
    custom = StoreSettings(timeframe="1hr", minimum_count_to_show=5, display_text="[count] now")
    registry.upsert_store_settings("acme", "tok", custom)

    result = registry.create_store("acme")

    assert result.success is False
    assert result.message == MESSAGE_STORE_EXISTS
    assert result.settings is None
    assert repo.get_store("acme").settings == custom


def test_upsert_creates_when_missing():
    repo = InMemoryStoresRepository()
    registry = make_registry(repo)
    settings = StoreSettings(timeframe="1week", minimum_count_to_show=2, display_text="[count] in [time]")

    result = registry.upsert_store_settings("acme", "tok-1", settings)

    assert result.created is True
    assert result.message == MESSAGE_STORE_CREATED
    stored = repo.get_store("acme")
    assert stored.session == "tok-1"
    assert stored.settings == settings


def test_upsert_updates_existing_and_keeps_products():
    existing = Store.new("acme")
    existing.products["p1"] = ProductCounter(views=[1, 2, 3], count=3)
    repo = InMemoryStoresRepository([existing])
    registry = make_registry(repo)
    settings = StoreSettings(timeframe="1hr", minimum_count_to_show=1, display_text="[count]")

    result = registry.upsert_store_settings("acme", "tok-2", settings)

    assert result.created is False
    assert result.message == MESSAGE_STORE_UPDATED
    stored = repo.get_store("acme")
    assert stored.session == "tok-2"
    assert stored.settings == settings
    assert stored.products["p1"].views == [1, 2, 3]


def test_upsert_reports_created_even_if_save_mutates_store():
    # The created/updated decision must not depend on anything save_store does.
    repo = Mock()
    repo.get_store.return_value = None
    registry = make_registry(repo)

    result = registry.upsert_store_settings("acme", "tok", StoreSettings.defaults())

    assert result.created is True
    repo.save_store.assert_called_once()


def test_check_store():
    registry = make_registry(InMemoryStoresRepository([Store.new("acme")]))

    assert registry.check_store("acme") == StoreSettings.defaults()
    assert registry.check_store("missing") is None
    assert registry.check_store("ACME") is None


def test_lock_is_released_when_repository_fails():
    repo = Mock()
    repo.get_store.side_effect = RuntimeError("storage down")
    lock_manager = Mock()
    registry = make_registry(repo, lock_manager)

    with pytest.raises(RuntimeError):
        registry.create_store("acme")

    lock_manager.acquire.assert_called_once_with("acme")
    lock_manager.release.assert_called_once_with("acme")
