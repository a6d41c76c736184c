"""Pull-based normalization of an upstream byte stream into content deltas."""

from collections.abc import AsyncIterable, AsyncIterator

import structlog

from genai_chat.stream.models import Delta, FatalError, StreamItem
from genai_chat.stream.session import StreamSession

logger = structlog.get_logger()


class StreamInterruptedError(Exception):
    """The upstream failed after the stream had started."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


async def normalize_stream(
    chunks: AsyncIterable[bytes],
    session: StreamSession | None = None,
) -> AsyncIterator[StreamItem]:
    """Yield ``Delta`` items, in order, for the content carried by ``chunks``.

    The sequence is lazy, finite and not restartable. It ends when the
    upstream closes or the terminal sentinel is seen; no further chunk is
    requested after the sentinel. A read failure yields exactly one
    ``FatalError`` as the final item. Closing this generator stops the read
    loop and closes ``chunks`` if it supports it.
    """
    session = session if session is not None else StreamSession()
    iterator = aiter(chunks)
    chunk_count = 0
    delta_count = 0

    try:
        while not session.terminated:
            try:
                chunk = await anext(iterator)
            except StopAsyncIteration:
                for result in session.finish():
                    if isinstance(result, Delta):
                        delta_count += 1
                        yield result
                break
            except Exception as e:
                logger.error(
                    "stream_upstream_failed",
                    error=str(e),
                    error_type=type(e).__name__,
                    chunks_received=chunk_count,
                    deltas_emitted=delta_count,
                )
                yield FatalError(str(e) or type(e).__name__, error=e)
                return

            chunk_count += 1
            for result in session.feed(chunk):
                if isinstance(result, Delta):
                    delta_count += 1
                    yield result
    finally:
        aclose = getattr(iterator, "aclose", None)
        if aclose is not None:
            await aclose()

    logger.info(
        "stream_complete",
        chunks_received=chunk_count,
        frames_seen=session.frames_seen,
        deltas_emitted=delta_count,
        sentinel=session.sentinel_seen,
    )


async def iter_content(chunks: AsyncIterable[bytes]) -> AsyncIterator[str]:
    """Yield plain text fragments. A fatal upstream error is raised instead."""
    async for item in normalize_stream(chunks):
        if isinstance(item, FatalError):
            raise StreamInterruptedError(item.reason) from item.error
        yield item.text
