"""Fetch stage - load raw rows from a CSV file or the table store."""

from typing import Any, Dict, List

from ..sources.table_source import create_table_client, fetch_table
from ..utils.io_utils import read_csv_records
from .base import get_store, make_progress


def run_stage_fetch(args) -> List[Dict[str, Any]]:
    """Run the fetch stage and persist the rows under the "raw" stage.

    Args:
        args: Argument namespace with source, csv/table/model and run_id

    Returns:
        Raw rows
    """
    store = get_store(args)
    limit = getattr(args, "test_limit", None)

    if args.source == "csv":
        if not getattr(args, "csv", None):
            raise ValueError("--csv is required when --source csv")
        print(f"[fetch] Reading {args.csv}")
        rows = read_csv_records(args.csv, limit=limit)
    elif args.source == "table":
        client = create_table_client()
        with make_progress(args, None, f"fetch {args.table}") as bar:
            rows = fetch_table(client, args.table, args.model, limit=limit, progress=bar)
    else:
        raise ValueError(f"Unknown source: {args.source}")

    path = store.save(args.run_id, "raw", rows)
    print(f"[fetch] Saved {len(rows):,} raw rows to {path}")
    return rows
