"""Classification results and parsing of the classifier's raw text."""

import json
import re
from dataclasses import dataclass
from typing import Dict, Union

from ..config import REJECTION_REASONS


@dataclass(frozen=True)
class Accepted:
    """A cleaned record that should be kept."""

    input: str
    output: str
    id: str

    def to_record(self) -> Dict[str, str]:
        return {"input": self.input, "output": self.output, "id": self.id}


@dataclass(frozen=True)
class Rejected:
    """The classifier judged the record unusable for training."""

    reason: str


@dataclass(frozen=True)
class Malformed:
    """No usable answer: unparseable, empty, or the remote call gave up."""

    reason: str
    raw: str = ""


CleanResult = Union[Accepted, Rejected, Malformed]

EMPTY_RESULT = ""

_REASONS_ALT = "|".join(REJECTION_REASONS)
_NESTED_REASON_RE = re.compile(
    r'"output"\s*:\s*\{\s*"reason"\s*:\s*"(' + _REASONS_ALT + r')"\s*\}\s*\}'
)
_VALID_PREFIX_RE = re.compile(r"^Valid\.\s*")
_VALID_SUFFIX_RE = re.compile(r"\s*Valid\.$")
_CLEANED_PREFIX_RE = re.compile(r"^CLEANED:\s*")


def repair_response_text(text: str) -> str:
    """Undo the known ways the model mangles its JSON answer.

    The model sometimes nests a rejection inside the output field
    (`"output":{"reason":"images"}}`), prefixes the JSON with `CLEANED:`, or
    adds a stray `Valid.` token. Nested rejections are replaced by the
    canonical `{"reason": ...}` object; prefixes and the stray token are
    stripped. Anything else is returned as-is (whitespace-trimmed).

    Args:
        text: Raw message content from the classifier

    Returns:
        Text ready for JSON parsing
    """
    if not text:
        return EMPTY_RESULT
    text = text.strip()

    nested = _NESTED_REASON_RE.search(text)
    if nested:
        return json.dumps({"reason": nested.group(1)})

    text = _VALID_PREFIX_RE.sub("", text)
    text = _CLEANED_PREFIX_RE.sub("", text)
    text = _VALID_PREFIX_RE.sub("", text)
    text = _VALID_SUFFIX_RE.sub("", text)
    return text.strip()


def parse_clean_response(text: str, record_id: str) -> CleanResult:
    """Turn the classifier's text into a classification result.

    Args:
        text: Repaired response text
        record_id: Id of the record that was sent, reattached on accept

    Returns:
        Accepted when both input and output are non-empty strings, Rejected
        when only a known rejection reason is given, Malformed otherwise
    """
    if not text or not text.strip():
        return Malformed("empty_response", text or "")
    try:
        obj = json.loads(text)
    except json.JSONDecodeError:
        return Malformed("invalid_json", text)
    if not isinstance(obj, dict):
        return Malformed("not_an_object", text)

    cleaned_input = obj.get("input")
    cleaned_output = obj.get("output")
    if isinstance(cleaned_input, str) and cleaned_input and isinstance(cleaned_output, str) and cleaned_output:
        return Accepted(cleaned_input, cleaned_output, record_id)

    reason = obj.get("reason")
    if reason in REJECTION_REASONS:
        return Rejected(reason)
    return Malformed("empty_fields", text)
