"""Sequential cleaning of one shard against the run's shared state."""

import threading
import time
from typing import Any, Dict, List, Optional

from ..config import REQUEST_DELAY
from ..models.results import Accepted
from ..utils.checkpoint import CheckpointStore


class RunState:
    """Accepted records and progress shared by every shard of one run.

    Created at run start and dropped when the run returns. Appending an
    accepted record and persisting the accumulator happen in one critical
    section so the "cleaning" checkpoint always matches memory.
    """

    def __init__(self, run_id: str, store: CheckpointStore, progress=None):
        """Initialize the run state.

        Args:
            run_id: Run identifier used as checkpoint key
            store: Checkpoint store for the "cleaning" snapshots
            progress: Optional tqdm-like bar, updated once per finished record
        """
        self.run_id = run_id
        self.store = store
        self.progress = progress
        self.accepted: List[Dict[str, Any]] = []
        self.processed = 0
        self.aborted = threading.Event()
        self._lock = threading.Lock()

    def accept(self, record: Dict[str, Any]):
        with self._lock:
            self.accepted.append(record)
            try:
                self.store.save(self.run_id, "cleaning", self.accepted)
            except Exception:
                self.accepted.pop()
                self.aborted.set()
                raise

    def mark_processed(self):
        with self._lock:
            self.processed += 1
            if self.progress is not None:
                self.progress.update(1)

    def snapshot(self) -> List[Dict[str, Any]]:
        with self._lock:
            return list(self.accepted)


def process_shard(
    records: List[Dict[str, Any]],
    state: RunState,
    cleaner,
    delay: float = REQUEST_DELAY,
    shard_index: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """Clean every record of a shard in order.

    Args:
        records: Records of this shard
        state: Shared run state
        cleaner: RecordCleaner-like object with clean(record)
        delay: Seconds to wait before each classifier call
        shard_index: Shard number, only used in log lines

    Returns:
        Records accepted by this shard, in input order
    """
    label = f"shard {shard_index}" if shard_index is not None else "shard"
    shard_accepted = []
    for position, record in enumerate(records):
        if state.aborted.is_set():
            print(f"[clean][WARN] {label}: run aborted, {len(records) - position} records not attempted")
            break
        if delay > 0:
            time.sleep(delay)
        result = cleaner.clean(record)
        if isinstance(result, Accepted):
            cleaned = result.to_record()
            state.accept(cleaned)
            shard_accepted.append(cleaned)
        state.mark_processed()
    return shard_accepted
