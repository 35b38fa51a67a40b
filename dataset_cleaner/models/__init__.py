"""Records, classification results and the LLM-backed record cleaner."""

from .records import format_record, format_records, passthrough_record, new_record_id
from .results import (
    Accepted,
    Rejected,
    Malformed,
    CleanResult,
    EMPTY_RESULT,
    repair_response_text,
    parse_clean_response
)
from .llm_processor import (
    ChatClassifier,
    create_openai_client,
    build_clean_messages,
    proxy_url_from_env
)
from .cleaner import RecordCleaner, build_payload

__all__ = [
    "format_record",
    "format_records",
    "passthrough_record",
    "new_record_id",
    "Accepted",
    "Rejected",
    "Malformed",
    "CleanResult",
    "EMPTY_RESULT",
    "repair_response_text",
    "parse_clean_response",
    "ChatClassifier",
    "create_openai_client",
    "build_clean_messages",
    "proxy_url_from_env",
    "RecordCleaner",
    "build_payload"
]
