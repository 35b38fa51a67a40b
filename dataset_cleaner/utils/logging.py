"""Logging utilities for the processing pipeline."""

import os
import json
import threading
import time
from typing import List, Optional

import orjson

from .. import config

# Shard threads share the audit files
_append_lock = threading.Lock()


def ensure_logdir(path: Optional[str] = None):
    """Ensure the log directory exists.

    Args:
        path: Directory path to create, defaults to config.LOG_DIR
    """
    target = path or config.LOG_DIR
    if target:
        os.makedirs(target, exist_ok=True)


def log_path(filename: str) -> str:
    """Return the full path of an audit log inside the current log directory."""
    return os.path.join(config.LOG_DIR, filename)


def read_jsonl(path: str) -> List[dict]:
    """Read JSONL file and return list of dicts.

    Args:
        path: Path to JSONL file

    Returns:
        List of dictionary records
    """
    if not os.path.exists(path):
        return []
    records = []
    with open(path, 'rb') as f:
        for line in f:
            if line.strip():
                records.append(json.loads(line))
    return records


def append_jsonl(path: str, records: List[dict]):
    """Append records to JSONL file (atomic writes).

    Args:
        path: Path to JSONL file
        records: List of dictionary records to append
    """
    ensure_logdir(os.path.dirname(path) or ".")
    with _append_lock, open(path, 'ab') as f:
        for rec in records:
            f.write(orjson.dumps(rec))
            f.write(b'\n')
        f.flush()  # Ensure written to disk
        os.fsync(f.fileno())  # Force OS to write to disk


def audit(filename: str, record: dict):
    """Append one timestamped record to an audit log in the log directory."""
    entry = {"timestamp": time.time()}
    entry.update(record)
    append_jsonl(log_path(filename), [entry])
