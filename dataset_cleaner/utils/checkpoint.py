"""Durable per-run, per-stage snapshots of the dataset."""

import os
from typing import Any, List

import orjson

from ..config import STAGES, CHECKPOINT_FILENAME, STEPS_DIR
from .io_utils import ensure_output_dir


class CheckpointStore:
    """Stores one JSON array per (run_id, stage) under <root>/<run_id>/<stage>/."""

    def __init__(self, root: str = STEPS_DIR):
        self.root = os.path.abspath(root)

    def _check_stage(self, stage: str):
        if stage not in STAGES:
            raise ValueError(f"Unknown stage '{stage}'. Allowed values: {list(STAGES)}")

    def path(self, run_id: str, stage: str) -> str:
        """Get the snapshot path for a run stage.

        Args:
            run_id: Run identifier
            stage: One of STAGES

        Returns:
            Full path to the stage's data.json
        """
        self._check_stage(stage)
        return os.path.join(self.root, run_id, stage, CHECKPOINT_FILENAME)

    def save(self, run_id: str, stage: str, data: List[Any]) -> str:
        """Overwrite the stage snapshot with the full data array.

        The array is written to a sibling temp file, synced, then moved into
        place, so readers only ever see a complete snapshot.

        Args:
            run_id: Run identifier
            stage: One of STAGES
            data: JSON-serializable list

        Returns:
            Path to the written snapshot
        """
        path = self.path(run_id, stage)
        ensure_output_dir(os.path.dirname(path))
        tmp_path = path + ".tmp"
        with open(tmp_path, "wb") as f:
            f.write(orjson.dumps(data))
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
        return path

    def load(self, run_id: str, stage: str) -> List[Any]:
        """Load a stage snapshot.

        Raises:
            FileNotFoundError: If the stage was never persisted for this run
        """
        path = self.path(run_id, stage)
        if not os.path.exists(path):
            raise FileNotFoundError(f"No '{stage}' checkpoint for run '{run_id}' at {path}")
        with open(path, "rb") as f:
            return orjson.loads(f.read())

    def exists(self, run_id: str, stage: str) -> bool:
        return os.path.exists(self.path(run_id, stage))

    def list_runs(self) -> List[str]:
        if not os.path.isdir(self.root):
            return []
        return sorted(
            name for name in os.listdir(self.root)
            if os.path.isdir(os.path.join(self.root, name))
        )

    def list_stages(self, run_id: str) -> List[str]:
        """Stages persisted for a run, in pipeline order."""
        return [stage for stage in STAGES if self.exists(run_id, stage)]
