"""Tests for the incremental stream tokenizer."""

import io

from encodewatch.monitor.tokenizer import StreamTokenizer, iter_tokens


class TestStreamTokenizer:
    def test_splits_on_any_whitespace(self):
        tok = StreamTokenizer()
        assert tok.feed(b"frame= 10\rfps=30\n speed=1.0x ") == ["frame=", "10", "fps=30", "speed=1.0x"]

    def test_word_across_chunks(self):
        tok = StreamTokenizer()
        assert tok.feed(b"time=00:00") == []
        assert tok.feed(b":05.00 next") == ["time=00:00:05.00"]
        assert tok.close() == ["next"]

    def test_multibyte_across_chunks(self):
        tok = StreamTokenizer()
        data = "café ok ".encode()
        assert tok.feed(data[:4]) == []
        assert tok.feed(data[4:]) == ["café", "ok"]

    def test_invalid_bytes_replaced(self):
        tok = StreamTokenizer()
        assert tok.feed(b"a\xffb ") == ["a\ufffdb"]


class TestIterTokens:
    def test_small_chunks(self):
        stream = io.BytesIO(b"time=00:00:01.00 speed=2.00x\r")
        assert list(iter_tokens(stream, chunk_size=3)) == ["time=00:00:01.00", "speed=2.00x"]

    def test_empty_stream(self):
        assert list(iter_tokens(io.BytesIO(b""))) == []
