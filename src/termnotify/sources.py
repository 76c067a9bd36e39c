"""Turn raw terminal output into ordered text chunks."""

import codecs
from collections.abc import Iterator
from typing import BinaryIO

READ_SIZE = 4096


class ChunkDecoder:
    """Incremental UTF-8 decoder.

    A multi-byte character split across reads is held until its remaining
    bytes arrive; invalid bytes become U+FFFD.
    """

    def __init__(self) -> None:
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    def decode(self, data: bytes) -> str:
        return self._decoder.decode(data)

    def flush(self) -> str:
        return self._decoder.decode(b"", final=True)


def iter_stream_chunks(stream: BinaryIO, chunk_size: int = READ_SIZE) -> Iterator[str]:
    """Yield decoded text from *stream* until EOF."""
    decoder = ChunkDecoder()
    read = getattr(stream, "read1", stream.read)
    while True:
        data = read(chunk_size)
        if not data:
            break
        text = decoder.decode(data)
        if text:
            yield text
    tail = decoder.flush()
    if tail:
        yield tail
