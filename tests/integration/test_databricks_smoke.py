"""Smoke test for the Databricks stores repository.

Skipped unless DATABRICKS_* environment variables are present. Requires the
stores table from adapters/databricks/ddl/stores.sql to be provisioned.
"""

from __future__ import annotations

import os
import uuid

import pytest

from proofcount.adapters.databricks.client import DatabricksSqlClient
from proofcount.adapters.databricks.stores_repo import DatabricksStoresRepository
from proofcount.application.store_registry import StoreRegistry
from proofcount.application.view_counter import ViewCounter
from proofcount.adapters.locks.in_process_lock_manager import InProcessLockManager
from proofcount.settings import Settings


def _has_databricks_config() -> bool:
    required = [
        "DATABRICKS_SERVER_HOSTNAME",
        "DATABRICKS_HTTP_PATH",
        "DATABRICKS_ACCESS_TOKEN",
    ]
    return all(os.getenv(var) for var in required)


@pytest.mark.skipif(not _has_databricks_config(), reason="DATABRICKS_* env vars not set")
def test_create_and_count_round_trip():
    settings = Settings.from_env()
    with DatabricksSqlClient(settings) as client:
        repo = DatabricksStoresRepository(client, settings)
        locks = InProcessLockManager()
        store_name = f"smoke-{uuid.uuid4().hex[:8]}"

        created = StoreRegistry(repo, locks).create_store(store_name)
        assert created.success

        counter = ViewCounter(repo, locks)
        first = counter.record_view(store_name, "p1")
        second = counter.record_view(store_name, "p1")

        assert first.views_count == 1
        assert second.views_count == 2
        assert repo.get_store(store_name).products["p1"].count == 2
