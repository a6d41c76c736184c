"""Writes content deltas to the downstream HTTP response."""

from aiohttp import web

import structlog

logger = structlog.get_logger()


class OutputEmitter:
    """Streams UTF-8 text fragments to the client, unframed.

    The response is prepared lazily on the first write, so an upstream
    failure that happens before any content still lets the caller answer with
    a structured JSON error instead of a broken stream.
    """

    def __init__(self, request: web.Request) -> None:
        self._request = request
        self.response = web.StreamResponse(
            status=200,
            headers={
                "Content-Type": "text/plain; charset=utf-8",
                "Cache-Control": "no-cache",
                "X-Accel-Buffering": "no",
            },
        )
        self.bytes_sent = 0
        self._closed = False

    @property
    def started(self) -> bool:
        return self.response.prepared

    async def _ensure_prepared(self) -> None:
        if not self.response.prepared:
            await self.response.prepare(self._request)

    async def send(self, text: str) -> None:
        """Write one fragment immediately. Waits while the client is slow."""
        if not text or self._closed:
            return
        data = text.encode("utf-8", errors="replace")
        await self._ensure_prepared()
        await self.response.write(data)
        self.bytes_sent += len(data)

    async def close(self) -> None:
        """End the response cleanly. Safe to call more than once."""
        if self._closed:
            return
        await self._ensure_prepared()
        await self.response.write_eof()
        self._closed = True

    async def fail(self, marker: str) -> None:
        """Append a visible error marker to already sent content and end the response."""
        logger.warning("stream_emitter_failed", bytes_sent=self.bytes_sent)
        if marker:
            await self.send(marker)
        await self.close()
