"""Concurrent, checkpointed cleaning of a dataset split into shards."""

from .shard_processor import RunState, process_shard
from .orchestrator import run_all

__all__ = [
    "RunState",
    "process_shard",
    "run_all"
]
