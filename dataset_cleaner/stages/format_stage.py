"""Format stage - normalize raw rows into {input, output, model, id} records."""

from typing import Any, Dict, List, Optional

from ..models.records import format_records, passthrough_record
from .base import get_store


def should_normalize(args) -> bool:
    """CSV rows are normalized by default, table rows are used as stored.

    Raises:
        ValueError: If neither --format nor --source is given
    """
    choice = getattr(args, "format", None)
    if choice is not None:
        return choice
    source = getattr(args, "source", None)
    if source is None:
        raise ValueError("Cannot tell whether to normalize: pass --source or --format/--no-format")
    return source == "csv"


def run_stage_format(args, rows: Optional[List[Dict[str, Any]]] = None) -> List[Dict[str, Any]]:
    """Run the format stage and persist under the "formatted" stage.

    Args:
        args: Argument namespace with table, source, strict and run_id
        rows: Raw rows; loaded from the "raw" checkpoint when omitted

    Returns:
        Canonical records
    """
    store = get_store(args)
    if rows is None:
        rows = store.load(args.run_id, "raw")

    if should_normalize(args):
        print(f"[format] Normalizing {len(rows):,} rows as table '{args.table}'")
        records = format_records(rows, args.table, strict=getattr(args, "strict", False))
    else:
        print(f"[format] Passing {len(rows):,} rows through without table mapping")
        records = [passthrough_record(row) for row in rows]

    path = store.save(args.run_id, "formatted", records)
    print(f"[format] Saved {len(records):,} records to {path}")
    return records
