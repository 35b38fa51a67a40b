"""Base utilities for processing stages."""

import uuid
from typing import Optional

from tqdm.auto import tqdm

from ..config import STEPS_DIR
from ..utils.checkpoint import CheckpointStore


def new_run_id() -> str:
    """Short random identifier for a new run."""
    return uuid.uuid4().hex[:8]


def get_store(args) -> CheckpointStore:
    """Get the checkpoint store for the configured steps directory.

    Args:
        args: Argument namespace with an optional steps_dir

    Returns:
        CheckpointStore rooted at args.steps_dir (or STEPS_DIR)
    """
    return CheckpointStore(getattr(args, "steps_dir", None) or STEPS_DIR)


def make_progress(args, total: Optional[int], desc: str):
    return tqdm(total=total, desc=desc, unit="rec", disable=getattr(args, "no_progress", False))


def apply_test_limit(args, records: list, stage: str) -> list:
    limit = getattr(args, "test_limit", None)
    if not limit or limit >= len(records):
        return records
    print(f"[{stage}][TEST] Using {limit} of {len(records)} records.")
    return records[:limit]
