from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from proofcount.adapters.databricks.client import DatabricksSqlClient
from proofcount.application.errors import ProvisioningError
from proofcount.domain.common.ids import ProductId, StoreName
from proofcount.domain.stores.models import ProductCounter, Store, StoreSettings
from proofcount.ports.stores_repository import StoresRepository
from proofcount.settings import Settings, get_settings

logger = logging.getLogger(__name__)


class DatabricksStoresRepository(StoresRepository):
    """Stores repository backed by a single Databricks table, one row per store.

    Settings are flattened into columns; the products map is embedded as JSON in
    products_json and rewritten as a whole on every update.
    """

    STORES_TABLE_COLUMNS = {
        "store_name",
        "session",
        "timeframe",
        "minimum_count_to_show",
        "display_text",
        "products_json",
        "created_at",
        "updated_at",
    }

    def __init__(
        self,
        client: DatabricksSqlClient,
        settings: Settings | None = None,
        stores_table_name: str | None = None,
    ) -> None:
        self.client = client
        self.settings = settings or get_settings()
        prefix = self.settings.databricks_table_prefix
        self.stores_table_name = stores_table_name or f"{prefix}store_view_counters_v1"
        self._validated_tables: set[str] = set()

    def _build_table_name(self, table_name: str) -> str:
        """Build fully qualified table name with catalog and schema if specified."""
        parts = []
        if self.settings.databricks_catalog:
            parts.append(self.settings.databricks_catalog)
        if self.settings.databricks_schema:
            parts.append(self.settings.databricks_schema)
        parts.append(table_name)
        return ".".join(parts)

    def _get_ddl_file_path(self) -> str:
        return str(Path(__file__).parent / "ddl" / "stores.sql")

    def _validate_table(self, table_name: str) -> None:
        """
        Validate that the stores table exists and has all required columns.

        Raises:
            ProvisioningError: If the table is missing or columns are missing
        """
        if table_name in self._validated_tables:
            return

        ddl_file = self._get_ddl_file_path()

        try:
            description = self.client.describe_table(table_name)
        except Exception as e:
            raise ProvisioningError(
                f"Table {table_name} does not exist or cannot be accessed: {e}",
                table_name=table_name,
                ddl_file_path=ddl_file,
            ) from e

        actual_columns = set()
        for row in description:
            col_name = row.get("col_name") or row.get("column_name")
            if col_name:
                col_name_str = str(col_name).strip()
                # Skip partition/metadata sections
                if col_name_str and not col_name_str.startswith("#"):
                    actual_columns.add(col_name_str.lower())

        missing_columns = self.STORES_TABLE_COLUMNS - actual_columns
        if missing_columns:
            raise ProvisioningError(
                f"Table {table_name} is missing required columns: {', '.join(sorted(missing_columns))}",
                table_name=table_name,
                ddl_file_path=ddl_file,
            )

        self._validated_tables.add(table_name)
        logger.debug(f"Validated table {table_name} has all required columns")

    def _table(self) -> str:
        table_name = self._build_table_name(self.stores_table_name)
        self._validate_table(table_name)
        return table_name

    def _parse_products(self, value: Any) -> Dict[ProductId, ProductCounter]:
        if not value:
            return {}
        try:
            return Store.products_from_document(json.loads(value))
        except (json.JSONDecodeError, TypeError) as e:
            raise ValueError(f"Failed to parse products_json: {e}") from e

    def _row_to_store(self, row: dict[str, Any]) -> Store:
        return Store(
            store_name=StoreName(str(row["store_name"])),
            session=str(row["session"]),
            settings=StoreSettings(
                timeframe=str(row["timeframe"]),
                minimum_count_to_show=int(row["minimum_count_to_show"]),
                display_text=str(row["display_text"]),
            ),
            products=self._parse_products(row.get("products_json")),
        )

    def get_store(self, store_name: str) -> Optional[Store]:
        table_name = self._table()
        sql = f"""
        SELECT
            store_name,
            session,
            timeframe,
            minimum_count_to_show,
            display_text,
            products_json
        FROM {table_name}
        WHERE store_name = ?
        LIMIT 1
        """
        try:
            rows = self.client.query(sql, [store_name])
        except Exception as e:
            logger.error(f"Error fetching store {store_name}: {e}")
            raise

        if not rows:
            return None
        return self._row_to_store(rows[0])

    def save_store(self, store: Store) -> None:
        """Upsert the full store document with MERGE INTO keyed on store_name."""
        table_name = self._table()
        now_ts = datetime.now(timezone.utc).isoformat()
        sql = f"""
        MERGE INTO {table_name} AS target
        USING (
            SELECT
                ? AS store_name,
                ? AS session,
                ? AS timeframe,
                CAST(? AS INT) AS minimum_count_to_show,
                ? AS display_text,
                ? AS products_json,
                CAST(? AS TIMESTAMP) AS updated_at
        ) AS source
        ON target.store_name = source.store_name
        WHEN MATCHED THEN
            UPDATE SET
                session = source.session,
                timeframe = source.timeframe,
                minimum_count_to_show = source.minimum_count_to_show,
                display_text = source.display_text,
                products_json = source.products_json,
                updated_at = source.updated_at
        WHEN NOT MATCHED THEN
            INSERT (
                store_name, session, timeframe, minimum_count_to_show, display_text,
                products_json, created_at, updated_at
            ) VALUES (
                source.store_name, source.session, source.timeframe, source.minimum_count_to_show,
                source.display_text, source.products_json, source.updated_at, source.updated_at
            )
        """
        params = [
            store.store_name,
            store.session,
            store.settings.timeframe,
            store.settings.minimum_count_to_show,
            store.settings.display_text,
            json.dumps(store.products_document()),
            now_ts,
        ]
        try:
            self.client.execute(sql, params)
        except Exception as e:
            logger.error(f"Error executing MERGE for store {store.store_name}: {e}")
            raise

    def save_products(self, store_name: str, products: Dict[ProductId, ProductCounter]) -> None:
        table_name = self._table()
        products_json = json.dumps({str(pid): counter.to_document() for pid, counter in products.items()})
        sql = f"""
        UPDATE {table_name}
        SET products_json = ?, updated_at = CAST(? AS TIMESTAMP)
        WHERE store_name = ?
        """
        try:
            self.client.execute(sql, [products_json, datetime.now(timezone.utc).isoformat(), store_name])
        except Exception as e:
            logger.error(f"Error updating products for store {store_name}: {e}")
            raise

    def close(self) -> None:
        self.client.close()
