#!/usr/bin/env python3
"""
Clean an LLM fine-tuning dataset with auditable, staged processing.

Stages (re-runnable per run id):
  fetch → format → clean → finalize

Checkpoints (default ./steps/<run_id>):
  raw/data.json         # rows as read from the CSV file or table
  formatted/data.json   # canonical {input, output, model, id} records
  cleaning/data.json    # accepted records, rewritten after every accept
  cleaned/data.json     # accepted records once every shard is done

Logs (default ./logs):
  responses.jsonl       # every raw classifier answer with a timestamp
  dropped.jsonl         # rejected or unusable records and why
  format_errors.jsonl   # rows the formatter could not map

Final artifacts (default ./steps/<run_id>):
  cleaned.jsonl
  cleaned.parquet
"""

from dataset_cleaner.cli import main

if __name__ == "__main__":
    main()
