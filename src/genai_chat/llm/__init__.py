"""Upstream LLM provider access."""

from genai_chat.llm.client import LLMClient, UpstreamError, UpstreamRejectedError
from genai_chat.llm.models import ChatMessage, ChatRequest
from genai_chat.llm.search import SemanticSearchClient

__all__ = [
    "ChatMessage",
    "ChatRequest",
    "LLMClient",
    "SemanticSearchClient",
    "UpstreamError",
    "UpstreamRejectedError",
]
