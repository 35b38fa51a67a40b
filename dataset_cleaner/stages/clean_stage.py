"""Cleaning stage - send every record to the chat model across concurrent shards."""

from typing import Any, Dict, List, Optional

from ..config import DEFAULT_CHAT_MODEL, DEFAULT_WORKERS, REQUEST_DELAY, DROPPED_LOG
from ..models.cleaner import RecordCleaner
from ..models.llm_processor import ChatClassifier, create_openai_client
from ..sharding import run_all
from ..utils.logging import ensure_logdir
from .base import get_store, make_progress, apply_test_limit


def build_cleaner(args) -> RecordCleaner:
    """Create the record cleaner from CLI options.

    Args:
        args: Argument namespace with chat_model, base_url and trace

    Returns:
        RecordCleaner backed by a ChatClassifier
    """
    client = create_openai_client(
        base_url=getattr(args, "base_url", None),
        enable_tracing=getattr(args, "trace", False),
    )
    classifier = ChatClassifier(client, model=getattr(args, "chat_model", None) or DEFAULT_CHAT_MODEL)
    return RecordCleaner(classifier)


def run_stage_clean(
    args,
    records: Optional[List[Dict[str, Any]]] = None,
    cleaner: Optional[RecordCleaner] = None,
) -> List[Dict[str, Any]]:
    """Run the cleaning stage.

    Accepted records are checkpointed under "cleaning" as they arrive and
    under "cleaned" once every shard is done.

    Args:
        args: Argument namespace with run_id, workers and request_delay
        records: Canonical records; loaded from the "formatted" checkpoint when omitted
        cleaner: Optional pre-built cleaner

    Returns:
        Accepted records
    """
    ensure_logdir()
    store = get_store(args)
    if records is None:
        records = store.load(args.run_id, "formatted")
    records = apply_test_limit(args, records, "clean")

    workers = getattr(args, "workers", None) or DEFAULT_WORKERS
    delay = getattr(args, "request_delay", None)
    if delay is None:
        delay = REQUEST_DELAY
    if cleaner is None:
        cleaner = build_cleaner(args)

    with make_progress(args, len(records), "clean") as bar:
        accepted = run_all(records, args.run_id, workers, cleaner, store, progress=bar, delay=delay)

    dropped = len(records) - len(accepted)
    if dropped:
        print(f"[clean] {dropped:,} records dropped (rejections and unusable answers are listed in {DROPPED_LOG})")
    print(f"[clean] Saved {store.path(args.run_id, 'cleaned')}")
    return accepted
