"""Normalization of table-specific rows into canonical cleaning records."""

import json
import uuid
from typing import Any, Dict, Iterable, List

from ..config import FORMAT_ERRORS_LOG
from ..errors import MalformedSourceRecord
from ..utils.logging import audit


def new_record_id() -> str:
    return uuid.uuid4().hex


def _field(raw: Dict[str, Any], table: str, key: str) -> Any:
    value = raw.get(key) if isinstance(raw, dict) else None
    if value is None:
        raise MalformedSourceRecord(table, key)
    return value


def _as_object(value: Any, table: str, key: str) -> Dict[str, Any]:
    # CSV exports keep JSON columns as strings, table reads return them decoded
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError as exc:
            raise MalformedSourceRecord(table, key, f"invalid JSON ({exc})") from exc
    if not isinstance(value, dict):
        raise MalformedSourceRecord(table, key, f"expected an object, got {type(value).__name__}")
    return value


def _nested_text(raw: Dict[str, Any], table: str, key: str, inner: str) -> str:
    obj = _as_object(_field(raw, table, key), table, key)
    value = obj.get(inner)
    if value is None:
        raise MalformedSourceRecord(table, f"{key}.{inner}")
    return value if isinstance(value, str) else str(value)


def _text(value: Any) -> str:
    return value if isinstance(value, str) else str(value)


def _column_text(value: Any) -> str:
    # Decoded JSON columns are re-encoded so the classifier sees JSON, not a repr
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return _text(value)


def format_record(table: str, raw: Dict[str, Any]) -> Dict[str, Any]:
    """Map a raw table row into the canonical {input, output, model, id} shape.

    Args:
        table: Source table name, selects the field mapping
        raw: Raw row as read from the table or CSV

    Returns:
        Canonical record with a fresh id. Tables without a mapping produce
        empty input, output and model.

    Raises:
        MalformedSourceRecord: If a field the mapping needs is missing or unparseable
    """
    record = {"input": "", "output": "", "model": ""}

    if table == "results":
        record["input"] = _text(_field(raw, table, "prompt"))
        record["output"] = _nested_text(raw, table, "result", "text")
        record["model"] = _text(_field(raw, table, "provider"))
    elif table == "interactions_new":
        tone_parts = _text(_field(raw, table, "tone")).split("-")
        record["input"] = _nested_text(raw, table, "input", "content")
        record["output"] = _nested_text(raw, table, "output", "text")
        record["model"] = " ".join(tone_parts[1:3])

    record["id"] = new_record_id()
    return record


def passthrough_record(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Keep a raw row's own input/output/model, for sources already in shape."""
    record = {
        "input": _column_text(raw.get("input")),
        "output": _column_text(raw.get("output")),
    }
    if raw.get("model"):
        record["model"] = _text(raw["model"])
    record["id"] = str(raw["id"]) if raw.get("id") is not None else new_record_id()
    return record


def format_records(rows: Iterable[Dict[str, Any]], table: str, strict: bool = False) -> List[Dict[str, Any]]:
    """Normalize every row, skipping (and logging) malformed ones unless strict.

    Args:
        rows: Raw rows
        table: Source table name
        strict: Re-raise the first MalformedSourceRecord instead of skipping

    Returns:
        List of canonical records
    """
    formatted = []
    skipped = 0
    for index, raw in enumerate(rows):
        try:
            formatted.append(format_record(table, raw))
        except MalformedSourceRecord as exc:
            if strict:
                raise
            skipped += 1
            audit(FORMAT_ERRORS_LOG, {
                "table": table,
                "row_index": index,
                "field": exc.field,
                "error": str(exc),
            })
    if skipped:
        print(f"[format][WARN] Skipped {skipped} malformed rows from '{table}' (see {FORMAT_ERRORS_LOG})")
    return formatted
