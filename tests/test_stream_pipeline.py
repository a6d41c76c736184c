"""Tests for the pull-based stream pipeline."""

from contextlib import aclosing

import httpx
import pytest

from genai_chat.stream.models import Delta, FatalError
from genai_chat.stream.pipeline import StreamInterruptedError, iter_content, normalize_stream


async def collect(aiterable):
    """Collect all items of an async iterable into a list."""
    return [item async for item in aiterable]


async def byte_chunks(chunks):
    """Async generator over a fixed list of byte chunks."""
    for chunk in chunks:
        yield chunk


@pytest.mark.asyncio
async def test_yields_deltas_in_order():
    chunks = [
        b'data: {"choices":[{"delta":{"content":"Hel"}}]}\n\ndata: {"choi',
        b'ces":[{"delta":{"content":"lo"}}]}\n\nda',
        b"ta: [DONE]\n\n",
    ]

    items = await collect(normalize_stream(byte_chunks(chunks)))

    assert items == [Delta("Hel", shape="choices_delta"), Delta("lo", shape="choices_delta")]


@pytest.mark.asyncio
async def test_stops_pulling_after_sentinel():
    pulled = []
    closed = False

    async def source():
        nonlocal closed
        try:
            for chunk in [b'data: {"response":"A"}\ndata: [DONE]\n', b'data: {"response":"B"}\n']:
                pulled.append(chunk)
                yield chunk
        finally:
            closed = True

    texts = await collect(iter_content(source()))

    assert texts == ["A"]
    assert len(pulled) == 1
    assert closed


@pytest.mark.asyncio
async def test_read_error_yields_single_fatal_error_last():
    async def source():
        yield b'data: {"response":"partial"}\n'
        raise httpx.ReadError("connection lost")

    items = await collect(normalize_stream(source()))

    assert items[0] == Delta("partial", shape="response")
    assert isinstance(items[1], FatalError)
    assert items[1].reason == "connection lost"
    assert isinstance(items[1].error, httpx.ReadError)
    assert len(items) == 2


@pytest.mark.asyncio
async def test_iter_content_raises_on_fatal_error():
    async def source():
        yield b'data: {"response":"partial"}\n'
        raise httpx.ReadError("connection lost")

    received = []
    with pytest.raises(StreamInterruptedError, match="connection lost"):
        async for text in iter_content(source()):
            received.append(text)

    assert received == ["partial"]


@pytest.mark.asyncio
async def test_closing_early_releases_source():
    """A consumer that goes away stops the read loop and closes the upstream."""
    pulled = 0
    closed = False

    async def source():
        nonlocal pulled, closed
        try:
            while True:
                pulled += 1
                yield b'data: {"response":"x"}\n'
        finally:
            closed = True

    async with aclosing(normalize_stream(source())) as items:
        async for _ in items:
            break

    assert pulled == 1
    assert closed


@pytest.mark.asyncio
async def test_unterminated_stream_flushes_tail_on_close():
    texts = await collect(iter_content(byte_chunks([b'data: {"response":"a"}\n', b'data: {"response":"b"}'])))
    assert texts == ["a", "b"]


@pytest.mark.asyncio
async def test_empty_stream_yields_nothing():
    assert await collect(normalize_stream(byte_chunks([]))) == []
