"""Client for the chat completion providers (local Ollama, Cloudflare AI gateway)."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
import structlog

from genai_chat.config import Settings
from genai_chat.stream.extractor import extract_message_content

logger = structlog.get_logger()

_PROVIDER_LABELS = {
    "ollama": "Ollama",
    "cloudflare": "Cloudflare",
}


class UpstreamError(Exception):
    """Raised when the provider cannot be reached or answers unusably."""

    def __init__(self, message: str, details: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.details = details or message


class UpstreamRejectedError(UpstreamError):
    """Raised when the provider answers with a non-success HTTP status."""

    def __init__(self, label: str, status_code: int, body: str) -> None:
        super().__init__(
            f"{label} API error: {body}",
            details=f"HTTP {status_code} from {label}: {body}",
        )
        self.status_code = status_code
        self.body = body


class LLMClient:
    """Async client for the configured chat completion provider.

    Both providers accept the same OpenAI-style request body. They differ in
    URL, authentication and response shape; response shapes are handled by
    ``genai_chat.stream``.
    """

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient) -> None:
        self._settings = settings
        self._http = http_client
        self.provider = settings.provider
        self.label = _PROVIDER_LABELS[settings.provider]

    @property
    def chat_url(self) -> str:
        if self.provider == "ollama":
            return f"{self._settings.api_base_url.rstrip('/')}{self._settings.ollama_chat_path}"
        return (
            f"{self._settings.cloudflare_api_url.rstrip('/')}/"
            f"{self._settings.cloudflare_account_id}/"
            f"{self._settings.cloudflare_gateway_path.lstrip('/')}"
        )

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.provider == "cloudflare":
            headers["Authorization"] = f"Bearer {self._settings.cloudflare_bearer_token}"
        return headers

    @asynccontextmanager
    async def open_stream(self, payload: dict) -> AsyncIterator[AsyncIterator[bytes]]:
        """Start a streaming completion and yield its raw byte chunks.

        A non-success status raises ``UpstreamRejectedError`` before anything
        is yielded. The upstream connection is released when the context
        exits, whether the stream ended, failed or was abandoned.
        """
        request = self._http.build_request(
            "POST", self.chat_url, json=payload, headers=self._headers()
        )

        logger.info(
            "chat_upstream_stream_start",
            provider=self.provider,
            model=payload.get("model"),
            message_count=len(payload.get("messages", [])),
        )

        try:
            response = await self._http.send(request, stream=True)
        except httpx.HTTPError as e:
            logger.error("chat_upstream_unreachable", provider=self.provider, error=str(e))
            raise UpstreamError(f"{self.label} API request failed", details=str(e)) from e

        try:
            if not response.is_success:
                await response.aread()
                logger.error(
                    "chat_upstream_rejected",
                    provider=self.provider,
                    status_code=response.status_code,
                )
                raise UpstreamRejectedError(self.label, response.status_code, response.text)
            yield response.aiter_bytes()
        finally:
            await response.aclose()

    async def complete(self, payload: dict) -> str:
        """Run a non-streaming completion and return the full reply text."""
        try:
            response = await self._http.post(
                self.chat_url, json=payload, headers=self._headers()
            )
        except httpx.HTTPError as e:
            logger.error("chat_upstream_unreachable", provider=self.provider, error=str(e))
            raise UpstreamError(f"{self.label} API request failed", details=str(e)) from e

        if not response.is_success:
            logger.error(
                "chat_upstream_rejected",
                provider=self.provider,
                status_code=response.status_code,
            )
            raise UpstreamRejectedError(self.label, response.status_code, response.text)

        try:
            body = response.json()
        except ValueError as e:
            raise UpstreamError(f"{self.label} API returned invalid JSON", details=str(e)) from e

        content = extract_message_content(body)
        logger.info(
            "chat_upstream_complete",
            provider=self.provider,
            answer_length=len(content),
        )
        return content

    async def list_models(self) -> list[str]:
        """List model names offered to the UI.

        The gateway has no listing endpoint, so it always gets the configured
        defaults; so does Ollama when ``/api/tags`` is unavailable.
        """
        if self.provider != "ollama":
            return list(self._settings.default_models)

        url = f"{self._settings.api_base_url.rstrip('/')}/api/tags"
        try:
            response = await self._http.get(url)
            response.raise_for_status()
            models = [m["name"] for m in response.json()["models"]]
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            logger.warning("model_listing_failed", provider=self.provider, error=str(e))
            return list(self._settings.default_models)

        logger.debug("model_listing_complete", provider=self.provider, count=len(models))
        return models
