"""Utility functions for logging, I/O, checkpoints and data manipulation."""

from .logging import read_jsonl, append_jsonl, ensure_logdir, audit, log_path
from .io_utils import ensure_output_dir, read_csv_records
from .data_utils import batched, split_into_shards
from .checkpoint import CheckpointStore

__all__ = [
    "read_jsonl",
    "append_jsonl",
    "ensure_logdir",
    "audit",
    "log_path",
    "ensure_output_dir",
    "read_csv_records",
    "batched",
    "split_into_shards",
    "CheckpointStore"
]
