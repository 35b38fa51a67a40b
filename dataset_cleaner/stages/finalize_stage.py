"""Finalize stage - export cleaned records for fine-tuning."""

import os
from typing import Tuple

import orjson
import pandas as pd

from ..config import OUT_PREFIX
from ..utils.io_utils import ensure_output_dir
from .base import get_store


def run_stage_finalize(args) -> Tuple[str, str]:
    """Write the "cleaned" records as JSONL and Parquet.

    Args:
        args: Argument namespace with run_id and optional output paths

    Returns:
        Tuple of (jsonl_path, parquet_path)
    """
    store = get_store(args)
    records = store.load(args.run_id, "cleaned")
    run_dir = os.path.dirname(os.path.dirname(store.path(args.run_id, "cleaned")))

    jsonl_path = getattr(args, 'output_jsonl', None) or os.path.join(run_dir, f"{OUT_PREFIX}.jsonl")
    parquet_path = getattr(args, 'output_parquet', None) or os.path.join(run_dir, f"{OUT_PREFIX}.parquet")
    ensure_output_dir(os.path.dirname(jsonl_path) or ".")
    ensure_output_dir(os.path.dirname(parquet_path) or ".")

    with open(jsonl_path, "wb") as f:
        for rec in records:
            f.write(orjson.dumps({"input": rec["input"], "output": rec["output"], "id": rec["id"]}))
            f.write(b"\n")

    df = pd.DataFrame(records, columns=["id", "input", "output"])
    df.to_parquet(parquet_path, index=False)

    print(f"[finalize] Output {len(records):,} cleaned records for run {args.run_id}.")
    print(f"[finalize] Artifacts: {jsonl_path}, {parquet_path}")
    return jsonl_path, parquet_path
