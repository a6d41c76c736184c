"""Incremental UTF-8 decoding of upstream byte chunks."""

import codecs


class ChunkDecoder:
    """Decodes byte chunks into text, holding back split multi-byte sequences.

    Invalid byte sequences are replaced with U+FFFD rather than raising, so a
    corrupt chunk never fails the stream.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")

    @property
    def pending(self) -> bytes:
        """Bytes of an incomplete character carried over to the next call."""
        return self._decoder.getstate()[0]

    def decode(self, chunk: bytes) -> str:
        return self._decoder.decode(chunk, final=False)

    def flush(self) -> str:
        """Decode whatever is still pending. Used once the upstream has closed."""
        return self._decoder.decode(b"", final=True)
