"""Server-Sent-Events line classification."""

from genai_chat.stream.models import DataFrame, DoneFrame, Frame

DATA_PREFIX = "data:"
DONE_PAYLOAD = "[DONE]"


def parse_frame(line: str) -> Frame | None:
    """Classify one complete line of an upstream stream.

    Returns ``DoneFrame`` for the terminal sentinel, ``DataFrame`` for a line
    carrying a payload, and ``None`` for anything to ignore: blank separators,
    comments and SSE fields other than ``data`` (``event:``, ``id:``,
    ``retry:``).

    Bare JSON objects (newline-delimited JSON, as streamed by Ollama's native
    API) are accepted as payloads too.
    """
    line = line.strip()
    if not line:
        return None

    if line.startswith(DATA_PREFIX):
        payload = line[len(DATA_PREFIX):]
        # The single space after the colon is optional in SSE.
        if payload.startswith(" "):
            payload = payload[1:]
        if payload == DONE_PAYLOAD:
            return DoneFrame()
        return DataFrame(payload)

    if line.startswith("{"):
        return DataFrame(line)

    return None
