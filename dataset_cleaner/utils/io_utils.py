"""I/O utility functions."""

import os
from typing import List, Dict, Any, Optional

import pandas as pd


def ensure_output_dir(path: str):
    """Ensure an output directory exists.

    Args:
        path: Directory path to create
    """
    os.makedirs(path, exist_ok=True)


def read_csv_records(path: str, limit: Optional[int] = None) -> List[Dict[str, Any]]:
    """Load a CSV file into header-keyed records.

    Every column is read as text and empty cells become empty strings, so
    JSON-in-a-cell columns reach the formatter untouched.

    Args:
        path: Path to the CSV file
        limit: Optional maximum number of rows to keep

    Returns:
        List of dictionaries, one per data row
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"CSV file not found: {path}")
    df = pd.read_csv(path, dtype=str, keep_default_na=False, skip_blank_lines=True)
    if limit:
        df = df.head(limit)
    return df.to_dict(orient="records")
