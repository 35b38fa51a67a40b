"""Chat-completion client that cleans or rejects a single record."""

import os
import json
from typing import List, Dict, Any, Optional, Tuple
from urllib.parse import quote

import openai
from openai import OpenAI, DefaultHttpxClient
from langsmith import traceable
from langsmith.wrappers import wrap_openai

from ..config import (
    DEFAULT_CHAT_MODEL, DEFAULT_CHAT_BASE_URL, DEFAULT_PROXY_PORT,
    LLM_MAX_TOKENS, LLM_TEMPERATURE, LLM_TIMEOUT, RESPONSES_LOG
)
from ..errors import RemoteCallFailed
from ..utils.logging import audit
from .results import EMPTY_RESULT, repair_response_text


# LLM prompts
LLM_SYSTEM_PROMPT = (
    "The user is going to give you a chunk of a dataset containing an input and an output. "
    "Remove any personal information such as nicknames, names etc. "
    "Clean the chunk so it is viable for training a LLM and answer with the same JSON shape: "
    "{\"input\": \"...\", \"output\": \"...\"}. "
    "In case the input/output says to continue the previous response, JUST RETURN {\"reason\":\"conversational\"}. "
    "In case the input or output makes reference to previous messages, JUST RETURN {\"reason\":\"conversational\"}. "
    "In case the input or output makes reference to an attachment or image, JUST RETURN {\"reason\":\"images\"}. "
    "In case the input is irrelevant or not good for LLM training, JUST RETURN {\"reason\":\"irrelevant\"}. "
    "DO NOT ADD EXPLANATIONS. JUST ANSWER WITH THE CLEANED DATA"
)


def build_clean_messages(payload: Dict[str, Any]) -> Tuple[str, List[Dict[str, Any]]]:
    """Return (user_payload, messages) for the chat completion call.

    Args:
        payload: Record fields to send, without model or id

    Returns:
        Tuple of (user_payload, messages_list)
    """
    content = json.dumps(payload, ensure_ascii=False)
    messages = [
        {"role": "system", "content": LLM_SYSTEM_PROMPT},
        {"role": "user", "content": content},
    ]
    return content, messages


def proxy_url_from_env() -> Optional[str]:
    """Build an http proxy URL from PROXY_HOST/PROXY_PORT/PROXY_USER/PROXY_PASS."""
    host = os.getenv("PROXY_HOST")
    if not host:
        return None
    port = os.getenv("PROXY_PORT") or DEFAULT_PROXY_PORT
    user = os.getenv("PROXY_USER")
    password = os.getenv("PROXY_PASS", "")
    if user:
        return f"http://{quote(user, safe='')}:{quote(password, safe='')}@{host}:{port}"
    return f"http://{host}:{port}"


def create_openai_client(
    api_key: Optional[str] = None,
    base_url: Optional[str] = None,
    proxy_url: Optional[str] = None,
    enable_tracing: bool = False,
):
    """Create an OpenAI-compatible client with optional proxy and tracing.

    Args:
        api_key: Bearer token, defaults to CHAT_API_KEY (or PAWAN_API_KEY)
        base_url: API base URL, defaults to CHAT_API_BASE_URL or the built-in endpoint
        proxy_url: Proxy URL, defaults to the PROXY_* environment variables
        enable_tracing: Whether to enable LangSmith tracing

    Returns:
        Configured OpenAI client

    Raises:
        RuntimeError: If no API key is configured
    """
    api_key = api_key or os.getenv("CHAT_API_KEY") or os.getenv("PAWAN_API_KEY")
    if not api_key:
        raise RuntimeError("CHAT_API_KEY not set.")
    base_url = base_url or os.getenv("CHAT_API_BASE_URL") or DEFAULT_CHAT_BASE_URL
    if proxy_url is None:
        proxy_url = proxy_url_from_env()

    http_client = DefaultHttpxClient(proxy=proxy_url) if proxy_url else None
    # Retries are owned by RecordCleaner
    client = OpenAI(
        api_key=api_key,
        base_url=base_url,
        timeout=LLM_TIMEOUT,
        max_retries=0,
        http_client=http_client,
    )
    if enable_tracing:
        client = wrap_openai(client)
        print("[clean] LangSmith tracing enabled")
    return client


def _message_text(content: Any) -> str:
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, dict) and part.get("type") == "text":
                parts.append(part.get("text", ""))
        return "".join(parts)
    return ""


class ChatClassifier:
    """Sends one record to the chat model and returns its repaired answer text."""

    def __init__(
        self,
        client,
        model: str = DEFAULT_CHAT_MODEL,
        max_tokens: int = LLM_MAX_TOKENS,
        temperature: float = LLM_TEMPERATURE,
    ):
        """Initialize the classifier.

        Args:
            client: OpenAI-compatible client
            model: Chat model name
            max_tokens: Completion token ceiling
            temperature: Sampling temperature, kept low for literal output
        """
        self.client = client
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature

    @traceable(name="clean_record")
    def classify(self, payload: Dict[str, Any], record_id: Optional[str] = None) -> str:
        """Ask the model to clean one record.

        Every raw answer is appended to the responses audit log before any
        post-processing.

        Args:
            payload: Record fields to send
            record_id: Id used to correlate the audit entry

        Returns:
            Repaired response text, or EMPTY_RESULT when the service returned
            no completion or filtered its content

        Raises:
            RemoteCallFailed: On connection, timeout or HTTP status errors
        """
        _, messages = build_clean_messages(payload)
        try:
            resp = self.client.chat.completions.create(
                model=self.model,
                max_tokens=self.max_tokens,
                messages=messages,
                temperature=self.temperature,
            )
        except openai.APIError as exc:
            raise RemoteCallFailed(f"Chat completion failed: {exc}") from exc

        choices = getattr(resp, "choices", None)
        if not choices:
            audit(RESPONSES_LOG, {"record_id": record_id, "content": None, "finish_reason": None})
            return EMPTY_RESULT

        choice = choices[0]
        message = getattr(choice, "message", None)
        text = _message_text(getattr(message, "content", None))
        audit(RESPONSES_LOG, {"record_id": record_id, "content": text, "finish_reason": choice.finish_reason})

        if choice.finish_reason == "content_filter":
            return EMPTY_RESULT
        return repair_response_text(text)
