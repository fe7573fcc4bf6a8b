from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from proofcount.ports.lock_manager import LockManager
    from proofcount.ports.stores_repository import StoresRepository

from proofcount.adapters.databricks.client import DatabricksSqlClient
from proofcount.adapters.databricks.stores_repo import DatabricksStoresRepository
from proofcount.adapters.locks.in_process_lock_manager import InProcessLockManager
from proofcount.adapters.locks.noop_lock_manager import NoopLockManager
from proofcount.adapters.stores.in_memory_stores_repository import InMemoryStoresRepository
from proofcount.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def create_adapters(
    settings: Settings | None = None,
) -> tuple["StoresRepository", "LockManager"]:
    """
    Factory function to create adapters based on the RUNTIME_ADAPTERS setting.

    If RUNTIME_ADAPTERS=databricks, stores are kept in a Databricks table.
    Otherwise, stores are kept in process memory (default).
    STORE_LOCKING=false disables per-store serialization of updates.
    """
    settings = settings or get_settings()

    if settings.runtime_adapters == "databricks":
        # Validate required Databricks settings
        required_settings = [
            ("DATABRICKS_SERVER_HOSTNAME", settings.databricks_server_hostname),
            ("DATABRICKS_HTTP_PATH", settings.databricks_http_path),
            ("DATABRICKS_ACCESS_TOKEN", settings.databricks_access_token),
        ]
        missing = [name for name, value in required_settings if not value]
        if missing:
            raise ValueError(f"Missing required Databricks settings: {', '.join(missing)}")

        client = DatabricksSqlClient(settings)
        stores_repo: StoresRepository = DatabricksStoresRepository(client, settings)
    elif settings.runtime_adapters in ("", "memory"):
        stores_repo = InMemoryStoresRepository()
    else:
        raise ValueError(f"Unknown RUNTIME_ADAPTERS value: {settings.runtime_adapters}")

    lock_manager: LockManager = InProcessLockManager() if settings.store_locking else NoopLockManager()

    logger.info(
        f"Using {type(stores_repo).__name__} with {type(lock_manager).__name__}"
    )
    return (stores_repo, lock_manager)
