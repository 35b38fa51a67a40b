"""Processing stages for the dataset-cleaner pipeline."""

from .fetch_stage import run_stage_fetch
from .format_stage import run_stage_format
from .clean_stage import run_stage_clean
from .finalize_stage import run_stage_finalize
from .view_stage import view_run

__all__ = [
    "run_stage_fetch",
    "run_stage_format",
    "run_stage_clean",
    "run_stage_finalize",
    "view_run"
]
