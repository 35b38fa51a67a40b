"""Command-line interface for the dataset-cleaner pipeline."""

import os
import argparse

from dotenv import load_dotenv

from .config import (
    STEPS_DIR, LOG_DIR, TABLE_CHOICES, DEFAULT_TABLE, DEFAULT_SOURCE_MODEL,
    DEFAULT_WORKERS, DEFAULT_CHAT_MODEL, REQUEST_DELAY
)
from .stages import (
    run_stage_fetch, run_stage_format, run_stage_clean,
    run_stage_finalize, view_run
)
from .stages.base import new_run_id


def create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    ap = argparse.ArgumentParser("Stageable LLM fine-tuning dataset cleaner.")

    # Main execution options
    ap.add_argument("--stage", default="all",
                    choices=["fetch", "format", "clean", "finalize", "all", "view"],
                    help="Processing stage to run")
    ap.add_argument("--run_id", default=None,
                    help="Run identifier; required for single stages after fetch, auto-generated otherwise")

    # Data source
    ap.add_argument("--source", default=None, choices=["csv", "table"],
                    help="Read rows from a local CSV file (default) or the Supabase table store")
    ap.add_argument("--csv", default=None,
                    help="Path to the CSV file when --source csv")
    ap.add_argument("--table", default=DEFAULT_TABLE, choices=TABLE_CHOICES,
                    help="Source table (also selects the field mapping for formatting)")
    ap.add_argument("--model", default=DEFAULT_SOURCE_MODEL,
                    help="Only fetch table rows produced by this model")
    ap.add_argument("--format", default=None, action=argparse.BooleanOptionalAction,
                    help="Normalize rows with the table mapping (default: on for CSV, off for table)")
    ap.add_argument("--strict", action="store_true",
                    help="Abort formatting on the first malformed row instead of skipping it")

    # Output configuration
    ap.add_argument("--steps_dir", default=STEPS_DIR,
                    help="Directory holding per-run stage checkpoints")
    ap.add_argument("--log_dir", default=LOG_DIR,
                    help="Directory for audit log files")
    ap.add_argument("--output_jsonl", default=None,
                    help="Custom path for final JSONL output")
    ap.add_argument("--output_parquet", default=None,
                    help="Custom path for final Parquet output")

    # Cleaning configuration
    ap.add_argument("--workers", type=int, default=DEFAULT_WORKERS,
                    help="Number of concurrent shards")
    ap.add_argument("--request_delay", type=float, default=REQUEST_DELAY,
                    help="Seconds to wait before each classifier call, per shard")
    ap.add_argument("--chat_model", default=DEFAULT_CHAT_MODEL,
                    help="Chat model used to clean records")
    ap.add_argument("--base_url", default=None,
                    help="OpenAI-compatible API base URL (default: CHAT_API_BASE_URL or built-in endpoint)")
    ap.add_argument("--trace", action="store_true",
                    help="Enable LangSmith tracing of classifier calls")
    ap.add_argument("--test-limit", type=int, default=None,
                    help="Limit processing to N records for testing (applies to all stages)")
    ap.add_argument("--no-progress", action="store_true",
                    help="Disable progress bars")

    return ap


def process_arguments(args):
    """Process and validate command-line arguments.

    Args:
        args: Parsed argument namespace
    """
    if args.workers < 1:
        raise ValueError(f"--workers must be >= 1, got {args.workers}")

    args.steps_dir = os.path.abspath(args.steps_dir)
    if args.output_jsonl:
        args.output_jsonl = os.path.abspath(args.output_jsonl)
    if args.output_parquet:
        args.output_parquet = os.path.abspath(args.output_parquet)

    from . import config
    config.LOG_DIR = os.path.abspath(args.log_dir)

    if args.source is None:
        if args.stage == "format" and args.format is None:
            raise ValueError("--stage format needs --source or --format/--no-format to know how the rows were fetched")
        if args.stage in {"fetch", "all"}:
            args.source = "csv"

    if not args.run_id:
        if args.stage not in {"fetch", "all", "view"}:
            raise ValueError(f"--run_id is required for --stage {args.stage}")
        if args.stage != "view":
            args.run_id = new_run_id()


def run_pipeline(args):
    """Run the processing pipeline based on arguments.

    Args:
        args: Parsed and processed argument namespace
    """
    if args.stage == "fetch":
        run_stage_fetch(args)
    elif args.stage == "format":
        run_stage_format(args)
    elif args.stage == "clean":
        run_stage_clean(args)
    elif args.stage == "finalize":
        run_stage_finalize(args)
    elif args.stage == "view":
        view_run(args, args.run_id)
    elif args.stage == "all":
        print(f"[pipeline] Run id: {args.run_id}")
        rows = run_stage_fetch(args)
        records = run_stage_format(args, rows)
        run_stage_clean(args, records)
        run_stage_finalize(args)
    else:
        raise ValueError(f"Unknown stage: {args.stage}")


def main(argv=None):
    """Main CLI entry point."""
    load_dotenv()
    parser = create_argument_parser()
    args = parser.parse_args(argv)
    process_arguments(args)
    run_pipeline(args)
