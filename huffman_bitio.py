# filename: huffman_bitio.py

from huffman_core import BITS_PER_INT, BITS_PER_WORD


def _check_width(howmany):
    if not 1 <= howmany <= BITS_PER_INT:
        raise ValueError("bit count must be between 1 and %d, got %r" % (BITS_PER_INT, howmany))


class BitInputStream:
    """Reads MSB-first bit fields from a seekable binary stream."""

    def __init__(self, stream):
        self.stream = stream
        self._start = stream.tell()
        self._buffer = 0
        self._count = 0
        self.bits_read = 0

    def read_bits(self, howmany):
        """Return the next `howmany` bits as an int, or -1 if fewer remain."""
        _check_width(howmany)
        while self._count < howmany:
            byte = self.stream.read(1)
            if not byte:
                return -1
            self._buffer = (self._buffer << BITS_PER_WORD) | byte[0]
            self._count += BITS_PER_WORD
        self._count -= howmany
        value = self._buffer >> self._count
        self._buffer &= (1 << self._count) - 1
        self.bits_read += howmany
        return value

    def reset(self):
        self.stream.seek(self._start)
        self._buffer = 0
        self._count = 0
        self.bits_read = 0

    def close(self):
        self.stream.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


class BitOutputStream:
    """Writes MSB-first bit fields, zero-padding the last byte on flush."""

    def __init__(self, stream, close_stream=True):
        self.stream = stream
        self.close_stream = close_stream
        self.closed = False
        self._buffer = 0
        self._count = 0
        self.bits_written = 0

    def write_bits(self, howmany, value):
        _check_width(howmany)
        self._buffer = (self._buffer << howmany) | (value & ((1 << howmany) - 1))
        self._count += howmany
        if self._count >= BITS_PER_WORD:
            whole = self._count // BITS_PER_WORD
            self._count -= whole * BITS_PER_WORD
            self.stream.write((self._buffer >> self._count).to_bytes(whole, "big"))
            self._buffer &= (1 << self._count) - 1
        self.bits_written += howmany

    def flush(self):
        if self._count:
            pad = BITS_PER_WORD - self._count
            self.stream.write(bytes([(self._buffer << pad) & 0xFF]))
            self._buffer = 0
            self._count = 0
        self.stream.flush()

    def close(self):
        if self.closed:
            return
        self.closed = True
        try:
            self.flush()
        finally:
            if self.close_stream:
                self.stream.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
