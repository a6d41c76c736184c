"""Provider-agnostic extraction of text content from JSON payloads.

Both backends are served by one extractor. Fields are probed in a fixed order
and the first non-empty string wins:

1. ``choices[0].delta.content`` (OpenAI-compatible gateway)
2. ``message.content`` (Ollama chat)
3. ``response`` (Ollama generate)

Extraction follows the payload's shape, never a provider flag, so a backend
that drifts to a neighbouring shape keeps working.
"""

import json
from typing import Any

import structlog

from genai_chat.stream.models import Delta, Skip, StepResult

logger = structlog.get_logger()

_PREVIEW_LENGTH = 200


def _first(value: Any) -> Any:
    if isinstance(value, list) and value:
        return value[0]
    return None


def _get(value: Any, key: str) -> Any:
    if isinstance(value, dict):
        return value.get(key)
    return None


def _text(value: Any) -> str | None:
    if isinstance(value, str) and value:
        return value
    return None


def extract_delta(payload: str) -> StepResult:
    """Turn one frame payload into a ``Delta`` or a ``Skip``.

    A payload that is not valid JSON, or whose text cannot be encoded as
    UTF-8, is logged and skipped; it never ends the stream.
    """
    if not payload.strip():
        return Skip("empty_payload")

    try:
        data = json.loads(payload)
    except (ValueError, RecursionError) as e:
        logger.warning(
            "stream_frame_malformed",
            error=str(e),
            payload_preview=payload[:_PREVIEW_LENGTH],
        )
        return Skip("malformed_json", payload=payload)

    for shape, text in (
        ("choices_delta", _text(_get(_get(_first(_get(data, "choices")), "delta"), "content"))),
        ("message", _text(_get(_get(data, "message"), "content"))),
        ("response", _text(_get(data, "response"))),
    ):
        if text is None:
            continue
        try:
            text.encode("utf-8")
        except UnicodeEncodeError as e:
            # JSON escapes can produce lone surrogates, which UTF-8 cannot carry
            logger.warning(
                "stream_frame_unencodable",
                error=str(e),
                payload_preview=payload[:_PREVIEW_LENGTH],
            )
            return Skip("unencodable_content", payload=payload)
        return Delta(text, shape=shape)

    return Skip("no_content")


def extract_message_content(body: Any) -> str:
    """Return the full reply text of a non-streaming completion body.

    Probes ``choices[0].message.content``, then ``message.content``, then
    ``response``. Returns an empty string when none is present.
    """
    for text in (
        _get(_get(_first(_get(body, "choices")), "message"), "content"),
        _get(_get(body, "message"), "content"),
        _get(body, "response"),
    ):
        if _text(text) is not None:
            return text
    return ""
