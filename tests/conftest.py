from pathlib import Path

import pytest

from dataset_cleaner import config
from dataset_cleaner.utils.checkpoint import CheckpointStore


@pytest.fixture(autouse=True)
def log_dir(tmp_path: Path, monkeypatch) -> Path:
    target = tmp_path / "logs"
    monkeypatch.setattr(config, "LOG_DIR", str(target))
    return target


@pytest.fixture
def store(tmp_path: Path) -> CheckpointStore:
    return CheckpointStore(str(tmp_path / "steps"))


@pytest.fixture
def make_records():
    def _make(count: int) -> list[dict]:
        return [
            {"input": f"question {i}", "output": f"answer {i}", "model": "gpt 4", "id": f"rec-{i}"}
            for i in range(count)
        ]
    return _make
