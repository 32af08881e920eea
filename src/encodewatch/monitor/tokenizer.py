"""Incremental whitespace tokenizer over a raw byte stream."""

import codecs
from collections.abc import Iterator


class StreamTokenizer:
    """Splits chunks of bytes into whitespace-delimited words.

    A word cut by a chunk boundary is held back until the next chunk (or the
    end of the stream) completes it.
    """

    def __init__(self, encoding: str = "utf-8"):
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self._pending = ""

    def feed(self, chunk: bytes) -> list[str]:
        """Consume one chunk and return the words it completed."""
        text = self._pending + self._decoder.decode(chunk)
        words = text.split()
        if words and not text[-1].isspace():
            self._pending = words.pop()
        else:
            self._pending = ""
        return words

    def close(self) -> list[str]:
        """Flush the decoder and return any trailing word."""
        text = self._pending + self._decoder.decode(b"", final=True)
        self._pending = ""
        return text.split()


def iter_tokens(stream, chunk_size: int = 4096, encoding: str = "utf-8") -> Iterator[str]:
    """Yield words from ``stream`` as soon as each one is complete.

    ``stream`` must offer ``read1`` so that a read returns whatever is available
    instead of waiting for a full chunk. OSError from the stream propagates.
    """
    tokenizer = StreamTokenizer(encoding)
    while True:
        chunk = stream.read1(chunk_size)
        if not chunk:
            break
        yield from tokenizer.feed(chunk)
    yield from tokenizer.close()
