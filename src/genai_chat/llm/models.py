"""Data models for chat requests coming from the UI."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ChatMessage(BaseModel):
    """One turn of the conversation."""

    role: Literal["system", "user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    """Body of ``POST /api/chat``. Accepts the UI's camelCase field names."""

    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    messages: list[ChatMessage] = Field(..., min_length=1)
    model: str = Field(..., min_length=1)
    temperature: float = Field(0.2, ge=0.0, le=2.0)
    context_window: int = Field(4096, alias="contextWindow", gt=0)
    system_prompt: str | None = Field(None, alias="systemPrompt")
    stream: bool = True
