"""Tests for shard partitioning, shard processing and the run orchestrator."""

import json
import threading

import pytest

from dataset_cleaner.errors import CheckpointWriteFailed, RemoteCallFailed
from dataset_cleaner.models.cleaner import RecordCleaner
from dataset_cleaner.sharding import RunState, process_shard, run_all
from dataset_cleaner.utils.checkpoint import CheckpointStore
from dataset_cleaner.utils.data_utils import split_into_shards


class EchoClassifier:
    """Accepts every record unchanged."""

    def __init__(self):
        self.lock = threading.Lock()
        self.seen: list[str] = []

    def classify(self, payload, record_id=None):
        with self.lock:
            self.seen.append(record_id)
        return json.dumps(payload)


class RejectOddClassifier:
    def classify(self, payload, record_id=None):
        index = int(payload["input"].split()[-1])
        if index % 2:
            return '{"reason":"irrelevant"}'
        return json.dumps(payload)


class FailingStore(CheckpointStore):
    def save(self, run_id, stage, data):
        if stage == "cleaning" and len(data) >= 2:
            raise OSError("disk full")
        return super().save(run_id, stage, data)


class TestSplitIntoShards:
    @pytest.mark.parametrize("total", [0, 1, 2, 7, 10, 31])
    @pytest.mark.parametrize("workers", [1, 2, 3, 4, 8, 50])
    def test_shards_reconstruct_input(self, total, workers):
        items = list(range(total))
        shards = split_into_shards(items, workers)
        assert [x for shard in shards for x in shard] == items
        assert len(shards) <= workers
        assert all(shards)

    def test_ten_records_three_workers(self):
        assert [len(s) for s in split_into_shards(list(range(10)), 3)] == [4, 4, 2]

    def test_zero_workers_rejected(self):
        with pytest.raises(ValueError):
            split_into_shards([1, 2], 0)


class TestProcessShard:
    def test_accepts_in_order_and_counts(self, store, make_records):
        records = make_records(5)
        state = RunState("run1", store)
        accepted = process_shard(records, state, RecordCleaner(RejectOddClassifier()), delay=0)

        assert [r["id"] for r in accepted] == ["rec-0", "rec-2", "rec-4"]
        assert state.processed == 5
        assert store.load("run1", "cleaning") == accepted
        assert all(set(r) == {"input", "output", "id"} for r in accepted)

    def test_updates_progress_bar(self, store, make_records):
        class Bar:
            n = 0

            def update(self, k):
                self.n += k

        bar = Bar()
        state = RunState("run1", store, progress=bar)
        process_shard(make_records(3), state, RecordCleaner(EchoClassifier()), delay=0)
        assert bar.n == 3

    def test_skips_remaining_records_after_abort(self, store, make_records):
        classifier = EchoClassifier()
        state = RunState("run1", store)
        state.aborted.set()
        assert process_shard(make_records(3), state, RecordCleaner(classifier), delay=0) == []
        assert classifier.seen == []


class TestRunAll:
    def test_end_to_end_echo(self, store, make_records):
        records = make_records(10)
        classifier = EchoClassifier()
        accepted = run_all(records, "run1", 3, RecordCleaner(classifier), store, delay=0)

        assert len(accepted) == 10
        assert sorted(r["id"] for r in accepted) == sorted(r["id"] for r in records)
        by_id = {r["id"]: r for r in records}
        for rec in accepted:
            assert rec["input"] == by_id[rec["id"]]["input"]
            assert rec["output"] == by_id[rec["id"]]["output"]

        positions = {r["id"]: i for i, r in enumerate(accepted)}
        for shard in split_into_shards(records, 3):
            shard_positions = [positions[r["id"]] for r in shard]
            assert shard_positions == sorted(shard_positions)

        assert store.load("run1", "cleaned") == accepted
        assert len(store.load("run1", "cleaning")) == 10

    def test_output_never_longer_than_input(self, store, make_records):
        records = make_records(9)
        accepted = run_all(records, "run2", 4, RecordCleaner(RejectOddClassifier()), store, delay=0)
        assert len(accepted) <= len(records)
        assert sorted(r["id"] for r in accepted) == ["rec-0", "rec-2", "rec-4", "rec-6", "rec-8"]

    def test_empty_input_persists_empty_result(self, store):
        assert run_all([], "empty", 4, RecordCleaner(EchoClassifier()), store, delay=0) == []
        assert store.load("empty", "cleaned") == []

    def test_invalid_worker_count(self, store, make_records):
        with pytest.raises(ValueError):
            run_all(make_records(2), "run3", 0, RecordCleaner(EchoClassifier()), store, delay=0)

    def test_checkpoint_failure_aborts_run(self, tmp_path, make_records):
        store = FailingStore(str(tmp_path / "steps"))
        with pytest.raises(CheckpointWriteFailed):
            run_all(make_records(6), "run4", 1, RecordCleaner(EchoClassifier()), store, delay=0)
        assert store.load("run4", "cleaning") == [
            {"input": "question 0", "output": "answer 0", "id": "rec-0"}
        ]
        assert not store.exists("run4", "cleaned")

    def test_always_failing_classifier_persists_nothing(self, store, make_records):
        class DownClassifier:
            def __init__(self):
                self.lock = threading.Lock()
                self.calls = 0

            def classify(self, payload, record_id=None):
                with self.lock:
                    self.calls += 1
                raise RemoteCallFailed("connection refused")

        classifier = DownClassifier()
        accepted = run_all(make_records(3), "down", 2, RecordCleaner(classifier), store, delay=0)

        assert accepted == []
        assert classifier.calls == 3 * 4
        assert store.load("down", "cleaned") == []
        assert not store.exists("down", "cleaning")
