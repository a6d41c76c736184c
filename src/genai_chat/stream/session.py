"""Per-request state of the stream normalization pipeline."""

from dataclasses import dataclass, field

import structlog

from genai_chat.stream.decoder import ChunkDecoder
from genai_chat.stream.extractor import extract_delta
from genai_chat.stream.frames import parse_frame
from genai_chat.stream.lines import LineBuffer
from genai_chat.stream.models import DoneFrame, Skip, StepResult

logger = structlog.get_logger()


@dataclass
class StreamSession:
    """Owns the decoder, line buffer and termination flag of one stream.

    A session is private to a single request. ``feed`` is called once per
    upstream chunk, ``finish`` once when the upstream closes normally.
    """

    decoder: ChunkDecoder = field(default_factory=ChunkDecoder)
    lines: LineBuffer = field(default_factory=LineBuffer)
    terminated: bool = False
    sentinel_seen: bool = False
    frames_seen: int = 0

    def feed(self, chunk: bytes) -> list[StepResult]:
        """Process one raw chunk and return its results in arrival order."""
        if self.terminated:
            return []
        return self._process(self.lines.push(self.decoder.decode(chunk)))

    def finish(self) -> list[StepResult]:
        """Flush the decoder and the unterminated tail line, if any."""
        if self.terminated:
            return []
        pending = self.lines.push(self.decoder.flush())
        tail = self.lines.drain()
        if tail is not None:
            logger.debug("stream_tail_flushed", tail_length=len(tail))
            pending.append(tail)
        results = self._process(pending)
        self.terminated = True
        return results

    def _process(self, lines: list[str]) -> list[StepResult]:
        results: list[StepResult] = []
        for line in lines:
            frame = parse_frame(line)
            if frame is None:
                continue
            self.frames_seen += 1
            if isinstance(frame, DoneFrame):
                self.terminated = True
                self.sentinel_seen = True
                logger.debug("stream_done_received", frames_seen=self.frames_seen)
                break
            result = extract_delta(frame.payload)
            if isinstance(result, Skip) and result.reason == "no_content":
                logger.debug("stream_frame_without_content", frame_number=self.frames_seen)
            results.append(result)
        return results
