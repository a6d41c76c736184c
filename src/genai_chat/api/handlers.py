"""aiohttp handlers for the chat UI backend."""

from contextlib import aclosing

import structlog
from aiohttp import web
from pydantic import ValidationError

from genai_chat.config import Settings
from genai_chat.llm.client import LLMClient, UpstreamError
from genai_chat.llm.models import ChatRequest
from genai_chat.llm.prompts import build_messages, build_payload
from genai_chat.llm.search import SemanticSearchClient
from genai_chat.stream.emitter import OutputEmitter
from genai_chat.stream.models import FatalError
from genai_chat.stream.pipeline import normalize_stream

logger = structlog.get_logger()


def _error_response(error: str, details: str, status: int = 500) -> web.Response:
    return web.json_response({"error": error, "details": details}, status=status)


async def _stream_chat(
    request: web.Request,
    llm_client: LLMClient,
    payload: dict,
    error_marker: str,
) -> web.StreamResponse:
    """Relay normalized content deltas to the client as they arrive.

    Upstream rejection propagates as ``UpstreamError`` before any byte is
    written. Later failures end the text stream with ``error_marker``.
    """
    emitter = OutputEmitter(request)
    try:
        async with llm_client.open_stream(payload) as chunks:
            async with aclosing(normalize_stream(chunks)) as items:
                async for item in items:
                    if isinstance(item, FatalError):
                        if not emitter.started:
                            return _error_response(
                                f"{llm_client.label} stream failed", item.reason
                            )
                        await emitter.fail(error_marker)
                        return emitter.response
                    await emitter.send(item.text)
        await emitter.close()
    except ConnectionResetError:
        logger.info("chat_client_disconnected", bytes_sent=emitter.bytes_sent)
    except UpstreamError:
        raise
    except Exception as e:
        if not emitter.started:
            raise
        logger.error("chat_stream_error", error=str(e), bytes_sent=emitter.bytes_sent)
        await emitter.fail(error_marker)

    logger.info("chat_stream_delivered", bytes_sent=emitter.bytes_sent)
    return emitter.response


async def chat(request: web.Request) -> web.StreamResponse:
    """POST /api/chat: forward the conversation to the configured provider."""
    settings: Settings = request.app["settings"]
    llm_client: LLMClient = request.app["llm_client"]
    search_client: SemanticSearchClient | None = request.app["search_client"]

    try:
        body = await request.json()
    except ValueError as e:
        return _error_response("Invalid chat request", str(e), status=400)

    if isinstance(body, dict):
        body.setdefault("temperature", settings.default_temperature)
        if "contextWindow" not in body and "context_window" not in body:
            body["contextWindow"] = settings.default_context_window
        if "systemPrompt" not in body and "system_prompt" not in body:
            body["systemPrompt"] = settings.default_system_prompt

    try:
        chat_request = ChatRequest.model_validate(body)
    except ValidationError as e:
        logger.warning("chat_request_invalid", error_count=e.error_count())
        return _error_response("Invalid chat request", str(e), status=400)

    logger.info(
        "chat_request_received",
        provider=llm_client.provider,
        model=chat_request.model,
        message_count=len(chat_request.messages),
        stream=chat_request.stream,
    )

    try:
        additional_context = ""
        if search_client is not None:
            additional_context = await search_client.search(chat_request.messages[-1].content)

        messages = build_messages(chat_request, additional_context)
        payload = build_payload(chat_request, messages)

        if chat_request.stream:
            return await _stream_chat(
                request, llm_client, payload, settings.stream_error_marker
            )

        content = await llm_client.complete(payload)
        return web.json_response({"content": content})
    except UpstreamError as e:
        logger.error("chat_api_error", error=e.message, provider=llm_client.provider)
        return _error_response(e.message, e.details)
    except Exception as e:
        logger.error("chat_api_error", error=str(e), error_type=type(e).__name__)
        return _error_response(str(e) or "An unexpected error occurred", repr(e))


async def models(request: web.Request) -> web.Response:
    """GET /api/models: model names the UI can offer."""
    llm_client: LLMClient = request.app["llm_client"]
    return web.json_response(await llm_client.list_models())


async def health(request: web.Request) -> web.Response:
    """Health check endpoint."""
    llm_client: LLMClient = request.app["llm_client"]
    return web.json_response({"status": "healthy", "provider": llm_client.provider})


def setup_routes(app: web.Application) -> None:
    app.router.add_post("/api/chat", chat)
    app.router.add_get("/api/models", models)
    app.router.add_get("/health", health)
