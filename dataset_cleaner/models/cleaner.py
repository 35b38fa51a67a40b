"""Per-record cleaning: classifier call, bounded retry, parse, decision."""

from typing import Any, Dict

from ..config import MAX_RETRIES, DROPPED_LOG, RAW_TEXT_LOG_LIMIT
from ..errors import RemoteCallFailed
from ..utils.logging import audit
from .results import Accepted, Rejected, Malformed, CleanResult, parse_clean_response

# Never sent to the classifier
_PRIVATE_FIELDS = ("model", "id")


def build_payload(record: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in record.items() if k not in _PRIVATE_FIELDS}


class RecordCleaner:
    """Drives one record through the classifier until a terminal result.

    Only RemoteCallFailed is retried (up to max_retries extra attempts).
    Unparseable or empty answers are dropped on the first attempt.
    """

    def __init__(self, classifier, max_retries: int = MAX_RETRIES):
        """Initialize the cleaner.

        Args:
            classifier: Object with classify(payload, record_id) -> str
            max_retries: Retries after the first failed remote call
        """
        self.classifier = classifier
        self.max_retries = max_retries

    def clean(self, record: Dict[str, Any]) -> CleanResult:
        """Clean a single record.

        Args:
            record: Canonical record with an id

        Returns:
            Accepted, Rejected or Malformed
        """
        record_id = record.get("id")
        payload = build_payload(record)

        retries = 0
        while True:
            try:
                text = self.classifier.classify(payload, record_id=record_id)
                break
            except RemoteCallFailed as exc:
                if retries >= self.max_retries:
                    print(f"[clean][ERROR] Record {record_id} failed after {retries + 1} attempts: {exc}")
                    result = Malformed("remote_call_failed", str(exc))
                    self._log_drop(record_id, result)
                    return result
                retries += 1
                print(f"[clean][WARN] Remote call failed for {record_id} (retry {retries}/{self.max_retries}): {exc}")

        result = parse_clean_response(text, record_id)
        if not isinstance(result, Accepted):
            self._log_drop(record_id, result)
        return result

    def _log_drop(self, record_id, result: CleanResult):
        if isinstance(result, Rejected):
            entry = {"record_id": record_id, "kind": "rejected", "reason": result.reason, "raw": ""}
        else:
            print(f"[clean] Dropped {record_id}: {result.reason}")
            entry = {
                "record_id": record_id,
                "kind": "malformed",
                "reason": result.reason,
                "raw": result.raw[:RAW_TEXT_LOG_LIMIT],
            }
        audit(DROPPED_LOG, entry)
