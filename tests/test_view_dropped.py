from pathlib import Path

from dataset_cleaner.errors import RemoteCallFailed
from dataset_cleaner.models.cleaner import RecordCleaner
from view_dropped import view_dropped


class Answers:
    def __init__(self, answer):
        self.answer = answer

    def classify(self, payload, record_id=None):
        if isinstance(self.answer, Exception):
            raise self.answer
        return self.answer


def test_view_dropped_summarizes_cleaner_drops(log_dir: Path, capsys) -> None:
    record = {"input": "a", "output": "b", "id": "rec-1"}
    RecordCleaner(Answers('{"reason":"conversational"}')).clean(record)
    RecordCleaner(Answers("no json here")).clean(record)
    RecordCleaner(Answers(RemoteCallFailed("down")), max_retries=0).clean(record)

    assert view_dropped(str(log_dir)) is True
    out = capsys.readouterr().out
    assert "Total dropped: 3" in out
    assert "conversational: 1" in out
    assert "Raw: no json here" in out


def test_view_dropped_missing_log(tmp_path: Path) -> None:
    assert view_dropped(str(tmp_path / "nowhere")) is False
