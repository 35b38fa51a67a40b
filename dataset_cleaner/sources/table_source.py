"""Paged reads from the Supabase table store."""

import os
import time
from typing import Any, Dict, List, Optional

from supabase import Client, create_client

from ..config import MODEL_KEYS, DEFAULT_MODEL_KEY, PAGE_SIZE, PAGE_DELAY


def create_table_client() -> Client:
    """Create a Supabase client from SUPABASE_URL and SUPABASE_KEY.

    Raises:
        RuntimeError: If either variable is missing
    """
    url = os.getenv("SUPABASE_URL")
    key = os.getenv("SUPABASE_KEY")
    if not url or not key:
        raise RuntimeError("Missing SUPABASE_URL or SUPABASE_KEY")
    return create_client(url, key)


def get_model_key(table: str) -> str:
    """Column a table is filtered on when selecting one model's rows."""
    return MODEL_KEYS.get(table, DEFAULT_MODEL_KEY)


def fetch_table(
    client: Client,
    table: str,
    model: str,
    page_size: int = PAGE_SIZE,
    page_delay: float = PAGE_DELAY,
    limit: Optional[int] = None,
    progress=None,
) -> List[Dict[str, Any]]:
    """Read every row of `table` whose model column equals `model`.

    Args:
        client: Supabase client
        table: Table name
        model: Value to match in the table's model column
        page_size: Rows requested per page
        page_delay: Seconds to wait between pages
        limit: Optional maximum number of rows to return
        progress: Optional tqdm-like bar; its total is set from the first page's count

    Returns:
        Flat list of rows in table order
    """
    model_key = get_model_key(table)
    rows: List[Dict[str, Any]] = []
    start = 0
    while True:
        if start > 0:
            time.sleep(page_delay)
        resp = (
            client.table(table)
            .select("*", count="exact")
            .eq(model_key, model)
            .range(start, start + page_size - 1)
            .execute()
        )
        page = resp.data or []
        if start == 0:
            print(f"[fetch] {table}: {resp.count if resp.count is not None else '?'} rows where {model_key} = '{model}'")
            if progress is not None and resp.count is not None:
                progress.total = resp.count
                progress.refresh()
        rows.extend(page)
        if progress is not None:
            progress.update(len(page))
        if limit and len(rows) >= limit:
            return rows[:limit]
        if len(page) < page_size:
            break
        start += page_size
    return rows
