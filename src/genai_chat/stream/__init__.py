"""Normalization of provider streaming responses into plain text deltas."""

from genai_chat.stream.emitter import OutputEmitter
from genai_chat.stream.extractor import extract_delta, extract_message_content
from genai_chat.stream.models import Delta, DataFrame, DoneFrame, FatalError, Skip
from genai_chat.stream.pipeline import StreamInterruptedError, iter_content, normalize_stream
from genai_chat.stream.session import StreamSession

__all__ = [
    "DataFrame",
    "Delta",
    "DoneFrame",
    "FatalError",
    "OutputEmitter",
    "Skip",
    "StreamInterruptedError",
    "StreamSession",
    "extract_delta",
    "extract_message_content",
    "iter_content",
    "normalize_stream",
]
