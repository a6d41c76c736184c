"""Tests for incremental chunk decoding."""

from genai_chat.stream.decoder import ChunkDecoder


def test_decodes_ascii_chunk():
    decoder = ChunkDecoder()
    assert decoder.decode(b"data: hi\n") == "data: hi\n"
    assert decoder.pending == b""


def test_multibyte_character_split_across_chunks():
    """A split character is held back, never replaced."""
    decoder = ChunkDecoder()
    euro = "€".encode("utf-8")  # 3 bytes

    assert decoder.decode(euro[:2]) == ""
    assert decoder.pending == euro[:2]
    assert decoder.decode(euro[2:]) == "€"
    assert decoder.pending == b""


def test_four_byte_character_split_one_byte_at_a_time():
    decoder = ChunkDecoder()
    raw = "a🙂b".encode("utf-8")

    text = "".join(decoder.decode(raw[i:i + 1]) for i in range(len(raw)))

    assert text == "a🙂b"
    assert "�" not in text


def test_invalid_bytes_are_replaced_not_raised():
    decoder = ChunkDecoder()
    assert decoder.decode(b"ok\xffok") == "ok�ok"


def test_flush_releases_truncated_sequence():
    decoder = ChunkDecoder()
    decoder.decode("€".encode("utf-8")[:2])

    assert "�" in decoder.flush()
    assert decoder.pending == b""
