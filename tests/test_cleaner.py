from pathlib import Path

from dataset_cleaner.errors import RemoteCallFailed
from dataset_cleaner.models.cleaner import RecordCleaner, build_payload
from dataset_cleaner.models.results import Accepted, Malformed, Rejected
from dataset_cleaner.utils.logging import read_jsonl


class ScriptedClassifier:
    """Returns queued answers; an exception instance in the queue is raised."""

    def __init__(self, answers: list):
        self.answers = list(answers)
        self.calls: list[tuple[dict, str | None]] = []

    def classify(self, payload: dict, record_id: str | None = None) -> str:
        self.calls.append((payload, record_id))
        answer = self.answers.pop(0) if len(self.answers) > 1 else self.answers[0]
        if isinstance(answer, Exception):
            raise answer
        return answer


RECORD = {"input": "Hi, I am Ana", "output": "Hello Ana", "model": "gpt 4", "id": "rec-1"}


def test_build_payload_strips_model_and_id() -> None:
    assert build_payload(RECORD) == {"input": "Hi, I am Ana", "output": "Hello Ana"}


def test_accepted_record_keeps_original_id() -> None:
    classifier = ScriptedClassifier(['{"input":"Hi, I am [name]","output":"Hello"}'])
    result = RecordCleaner(classifier).clean(RECORD)
    assert result == Accepted(input="Hi, I am [name]", output="Hello", id="rec-1")
    payload, record_id = classifier.calls[0]
    assert "model" not in payload
    assert record_id == "rec-1"


def test_rejected_record_is_dropped_and_logged(log_dir: Path) -> None:
    classifier = ScriptedClassifier(['{"reason":"images"}'])
    result = RecordCleaner(classifier).clean(RECORD)
    assert result == Rejected("images")
    dropped = read_jsonl(str(log_dir / "dropped.jsonl"))
    assert dropped[0]["record_id"] == "rec-1"
    assert dropped[0]["kind"] == "rejected"
    assert dropped[0]["reason"] == "images"


def test_always_failing_call_is_attempted_four_times(log_dir: Path) -> None:
    classifier = ScriptedClassifier([RemoteCallFailed("connection refused")])
    result = RecordCleaner(classifier).clean(RECORD)
    assert isinstance(result, Malformed)
    assert result.reason == "remote_call_failed"
    assert len(classifier.calls) == 4
    dropped = read_jsonl(str(log_dir / "dropped.jsonl"))
    assert dropped[0]["reason"] == "remote_call_failed"


def test_recovers_after_transient_failures() -> None:
    classifier = ScriptedClassifier([
        RemoteCallFailed("timeout"),
        RemoteCallFailed("timeout"),
        '{"input":"a","output":"b"}',
    ])
    result = RecordCleaner(classifier).clean(RECORD)
    assert result == Accepted(input="a", output="b", id="rec-1")
    assert len(classifier.calls) == 3


def test_malformed_response_is_not_retried(log_dir: Path) -> None:
    classifier = ScriptedClassifier(["I cannot help with that."])
    result = RecordCleaner(classifier).clean(RECORD)
    assert result == Malformed("invalid_json", "I cannot help with that.")
    assert len(classifier.calls) == 1
    dropped = read_jsonl(str(log_dir / "dropped.jsonl"))
    assert dropped[0]["kind"] == "malformed"
    assert dropped[0]["raw"] == "I cannot help with that."


def test_empty_result_is_not_retried() -> None:
    classifier = ScriptedClassifier([""])
    result = RecordCleaner(classifier).clean(RECORD)
    assert result == Malformed("empty_response", "")
    assert len(classifier.calls) == 1


def test_custom_retry_ceiling() -> None:
    classifier = ScriptedClassifier([RemoteCallFailed("down")])
    RecordCleaner(classifier, max_retries=0).clean(RECORD)
    assert len(classifier.calls) == 1
