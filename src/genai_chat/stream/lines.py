"""Reassembly of newline-terminated lines across decode calls."""


class LineBuffer:
    """Accumulates decoded text and hands back complete lines.

    Between calls the buffer never holds a newline: everything up to the last
    ``\\n`` is returned, the trailing segment (possibly empty) is retained.
    Only the newly pushed text is scanned, so a long line arriving in many
    small pieces costs linear time.
    """

    def __init__(self) -> None:
        self._parts: list[str] = []

    @property
    def remainder(self) -> str:
        return "".join(self._parts)

    def push(self, text: str) -> list[str]:
        """Append text and return every line it completed, in order."""
        if not text:
            return []
        first, *rest = text.split("\n")
        self._parts.append(first)
        if not rest:
            return []
        *middle, tail = rest
        lines = ["".join(self._parts), *middle]
        self._parts = [tail] if tail else []
        return lines

    def drain(self) -> str | None:
        """Return and clear the unterminated tail, or None when it is empty."""
        tail = "".join(self._parts)
        self._parts = []
        return tail or None
