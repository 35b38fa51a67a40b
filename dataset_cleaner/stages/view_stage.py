"""View utilities - summarize what each run has persisted."""

import os
import time
from typing import Dict, Optional

from .base import get_store


def view_run(args, run_id: Optional[str] = None) -> Dict[str, Dict[str, int]]:
    """Print row counts per stage for one run, or for every run.

    Args:
        args: Argument namespace with steps_dir
        run_id: Run to show; all runs when omitted

    Returns:
        Mapping run_id -> {stage: row count}
    """
    store = get_store(args)
    run_ids = [run_id] if run_id else store.list_runs()
    if not run_ids:
        print(f"[view] No runs found in {store.root}")
        return {}

    summary = {}
    for rid in run_ids:
        stages = store.list_stages(rid)
        if not stages:
            print(f"[view] Run {rid}: nothing persisted")
            summary[rid] = {}
            continue
        counts = {}
        print(f"[view] Run {rid}")
        for stage in stages:
            counts[stage] = len(store.load(rid, stage))
            modified = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(os.path.getmtime(store.path(rid, stage))))
            print(f"[view]   {stage:<10} rows: {counts[stage]:>8,}  saved: {modified}")
        if "formatted" in counts and "cleaned" in counts and counts["formatted"]:
            kept = counts["cleaned"] / counts["formatted"] * 100
            print(f"[view]   kept {kept:.1f}% of formatted records")
        summary[rid] = counts
    return summary
