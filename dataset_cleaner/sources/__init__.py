"""Raw record sources."""

from .table_source import create_table_client, fetch_table, get_model_key

__all__ = [
    "create_table_client",
    "fetch_table",
    "get_model_key"
]
