"""HTTP API consumed by the chat UI."""

from genai_chat.api.handlers import setup_routes

__all__ = ["setup_routes"]
