class StoreNotFoundError(Exception):
    def __init__(self, store_name: str) -> None:
        super().__init__(f"Store not found: {store_name}")
        self.store_name = store_name


class ProvisioningError(Exception):
    """The stores table is unreachable or lacks columns; apply the DDL at ddl_file_path."""

    def __init__(self, message: str, table_name: str, ddl_file_path: str) -> None:
        super().__init__(f"{message}. Run the DDL from {ddl_file_path} in Databricks SQL")
        self.table_name = table_name
        self.ddl_file_path = ddl_file_path
