"""Unit tests for termnotify.sources."""

import io

from termnotify.sources import ChunkDecoder, iter_stream_chunks


class _ReadOnly:
    """A stream exposing only read(), like a raw pipe wrapper."""

    def __init__(self, data: bytes) -> None:
        self._buffer = io.BytesIO(data)

    def read(self, size: int) -> bytes:
        return self._buffer.read(size)


class TestChunkDecoder:
    def test_split_multibyte_character(self):
        decoder = ChunkDecoder()
        data = "é".encode()
        assert decoder.decode(data[:1]) == ""
        assert decoder.decode(data[1:]) == "é"

    def test_invalid_bytes_are_replaced(self):
        decoder = ChunkDecoder()
        assert decoder.decode(b"a\xffb") == "a�b"

    def test_flush_reports_truncated_character(self):
        decoder = ChunkDecoder()
        decoder.decode("€".encode()[:2])
        assert decoder.flush() == "�"


class TestIterStreamChunks:
    def test_reassembles_text(self):
        payload = "build ✓\x1b]9;done\x07".encode()
        chunks = list(iter_stream_chunks(io.BytesIO(payload), chunk_size=3))
        assert "".join(chunks) == "build ✓\x1b]9;done\x07"
        assert all(chunks)

    def test_stream_without_read1(self):
        chunks = list(iter_stream_chunks(_ReadOnly(b"hello"), chunk_size=2))
        assert chunks == ["he", "ll", "o"]

    def test_empty_stream(self):
        assert list(iter_stream_chunks(io.BytesIO(b""))) == []
