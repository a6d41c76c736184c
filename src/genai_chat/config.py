"""Application configuration using Pydantic settings."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_MODELS = [
    "@cf/deepseek-ai/deepseek-r1-distill-qwen-32b",
    "@cf/meta/llama-2-7b-chat-int8",
    "@cf/mistral/mistral-7b-instruct-v0.1",
    "deepseek-r1:latest",
    "@cf/meta/llama-3.3-70b-instruct-fp8-fast",
    "mistral:latest",
]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Provider selection
    provider: Literal["ollama", "cloudflare"] = Field(
        "ollama", alias="DEFAULT_PROVIDER",
        description="Backend that serves chat completions: 'ollama' (local) or 'cloudflare' (AI gateway).",
    )

    # Local inference server
    api_base_url: str = Field(
        "http://localhost:11434", alias="API_BASE_URL",
        description="Base URL of the local Ollama server.",
    )
    ollama_chat_path: str = Field(
        "/v1/chat/completions", alias="OLLAMA_CHAT_PATH",
        description="Chat endpoint path on the Ollama server. '/api/chat' streams NDJSON instead of SSE.",
    )

    # Managed cloud gateway
    cloudflare_api_url: str = Field(
        "https://gateway.ai.cloudflare.com/v1", alias="CLOUDFLARE_API_URL",
        description="Base URL of the Cloudflare AI gateway.",
    )
    cloudflare_account_id: str = Field(
        "", alias="CLOUDFLARE_ACCOUNT_ID",
        description="Cloudflare account ID, inserted into the gateway URL.",
    )
    cloudflare_bearer_token: str = Field(
        "", alias="CLOUDFLARE_BEARER_TOKEN",
        description="Bearer token sent to the Cloudflare AI gateway.",
    )
    cloudflare_gateway_path: str = Field(
        "openai-compatability/workers-ai/v1/chat/completions", alias="CLOUDFLARE_GATEWAY_PATH",
        description="OpenAI-compatible chat completions path below the account ID.",
    )

    # Semantic search context injection
    context_injection: bool = Field(
        False, alias="CONTEXT_INJECTION",
        description="Look up extra context for the last user message and inject it as a system message.",
    )
    semantic_search_api: str = Field(
        "http://localhost:8000/search", alias="SEMANTIC_SEARCH_API",
        description="Semantic search endpoint. Receives {'query': ...}, answers {'context': ...}.",
    )

    # Defaults exposed to the UI
    default_models: list[str] = Field(
        default_factory=lambda: list(DEFAULT_MODELS), alias="DEFAULT_MODELS",
        description="Models offered when the provider has no listing endpoint or listing fails. JSON list.",
    )
    default_temperature: float = Field(
        0.2, alias="DEFAULT_TEMPERATURE",
        description="Sampling temperature used when the request omits one.",
    )
    default_context_window: int = Field(
        4096, alias="DEFAULT_CONTEXT_WINDOW",
        description="Token budget (max_tokens) used when the request omits one.",
    )
    default_system_prompt: str = Field(
        "You are a helpful assistant.", alias="DEFAULT_SYSTEM_PROMPT",
        description="System prompt used when the request carries no systemPrompt field. Send \"\" to disable.",
    )

    # Upstream behaviour
    upstream_timeout: float = Field(
        60.0, alias="UPSTREAM_TIMEOUT",
        description="HTTP timeout in seconds for upstream provider calls.",
    )
    stream_error_marker: str = Field(
        "\n\n[Error: the response stream was interrupted]", alias="STREAM_ERROR_MARKER",
        description="Text appended to a streamed reply when the upstream fails after content was sent.",
    )

    # Server
    host: str = Field(
        "0.0.0.0", alias="HOST",
        description="Host address to bind the aiohttp server to.",
    )
    port: int = Field(
        3000, alias="PORT",
        description="Port number for the aiohttp server.",
    )

    # Logging
    log_level: str = Field(
        "INFO", alias="LOG_LEVEL",
        description="Logging level: DEBUG, INFO, WARNING, ERROR, or CRITICAL.",
    )
    log_file: str = Field(
        "", alias="LOG_FILE",
        description="Path to log file for file-based logging with rotation. Empty = console only.",
    )
    log_file_max_bytes: int = Field(
        10_485_760, alias="LOG_FILE_MAX_BYTES",
        description="Max size in bytes per log file before rotation. Default: 10 MB.",
    )
    log_file_backup_count: int = Field(
        5, alias="LOG_FILE_BACKUP_COUNT",
        description="Number of rotated backup log files to keep.",
    )


def get_settings() -> Settings:
    """Get application settings."""
    return Settings()
