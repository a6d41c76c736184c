"""Assembly of the upstream chat completion payload."""

from genai_chat.llm.models import ChatRequest

CONTEXT_TEMPLATE = "Additional context: {context}"


def build_messages(request: ChatRequest, additional_context: str = "") -> list[dict[str, str]]:
    """Return the message list sent upstream.

    Retrieved context goes in as a system message just before the latest
    message; the system prompt, when given, goes first.
    """
    messages = [m.model_dump() for m in request.messages]

    if additional_context:
        context_message = {
            "role": "system",
            "content": CONTEXT_TEMPLATE.format(context=additional_context),
        }
        messages = [*messages[:-1], context_message, messages[-1]]

    if request.system_prompt:
        messages = [{"role": "system", "content": request.system_prompt}, *messages]

    return messages


def build_payload(request: ChatRequest, messages: list[dict[str, str]]) -> dict:
    """Build the OpenAI-style request body understood by both providers."""
    return {
        "model": request.model,
        "messages": messages,
        "stream": request.stream,
        "temperature": request.temperature,
        "max_tokens": request.context_window,
    }
