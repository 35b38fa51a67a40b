"""Fan a run out over shards and gather the accepted records."""

import time
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Any, Dict, List

from ..config import REQUEST_DELAY
from ..errors import CheckpointWriteFailed
from ..utils.checkpoint import CheckpointStore
from ..utils.data_utils import split_into_shards
from .shard_processor import RunState, process_shard


def run_all(
    records: List[Dict[str, Any]],
    run_id: str,
    workers: int,
    cleaner,
    store: CheckpointStore,
    progress=None,
    delay: float = REQUEST_DELAY,
) -> List[Dict[str, Any]]:
    """Clean all records using one concurrent shard per worker.

    Records are split into contiguous shards of ceil(len / workers). Each
    shard runs in its own thread against a shared RunState; a shard never
    cancels its siblings. Once every shard is done the accepted records are
    persisted under the "cleaned" stage.

    Args:
        records: Canonical records to clean
        run_id: Run identifier (checkpoint key)
        workers: Maximum number of concurrent shards
        cleaner: RecordCleaner-like object shared by all shards
        store: Checkpoint store
        progress: Optional tqdm-like progress bar
        delay: Per-record delay inside each shard

    Returns:
        Accepted records; order is only guaranteed within a shard

    Raises:
        ValueError: If workers < 1
        CheckpointWriteFailed: If persisting accepted records failed
    """
    shards = split_into_shards(records, workers)
    state = RunState(run_id, store, progress=progress)

    if shards:
        sizes = [len(shard) for shard in shards]
        print(f"[clean] Run {run_id}: {len(records):,} records in {len(shards)} shards {sizes}")
        start = time.time()
        with ThreadPoolExecutor(max_workers=len(shards), thread_name_prefix="shard") as executor:
            futures = [
                executor.submit(process_shard, shard, state, cleaner, delay, index)
                for index, shard in enumerate(shards)
            ]
            wait(futures)
        errors = [f.exception() for f in futures if f.exception() is not None]
        if errors:
            print(f"[clean][ERROR] {len(errors)} shard(s) failed; accepted records so far are in the 'cleaning' checkpoint")
            if state.aborted.is_set():
                raise CheckpointWriteFailed(f"Run {run_id} aborted: {errors[0]}") from errors[0]
            raise errors[0]
        print(f"[clean] All shards finished in {time.time() - start:.1f}s")

    accepted = state.snapshot()
    store.save(run_id, "cleaned", accepted)
    print(f"[clean] Accepted {len(accepted):,} of {len(records):,} records ({state.processed:,} processed)")
    return accepted
