import io

CHUNK = 1 << 16
MAX_BITS = 32


def _check_width(nbits: int):
    if not (1 <= nbits <= MAX_BITS):
        raise ValueError(f"bit width out of range (1..{MAX_BITS}): {nbits}")


class BitWriter:
    """MSB-first bit sink over a binary file object (or an in-memory buffer)."""

    def __init__(self, f=None):
        self._f = f if f is not None else io.BytesIO()
        self._buf = bytearray()
        self._cur = 0
        self._nbits = 0  # bits currently in _cur (0..7)
        self.bits_written = 0
        self.closed = False

    def write_bits(self, nbits: int, value: int):
        """Write the low 'nbits' bits of value (MSB-first)."""
        _check_width(nbits)
        self._cur = (self._cur << nbits) | (value & ((1 << nbits) - 1))
        self._nbits += nbits
        self.bits_written += nbits
        while self._nbits >= 8:
            self._nbits -= 8
            self._buf.append((self._cur >> self._nbits) & 0xFF)
        self._cur &= (1 << self._nbits) - 1
        if len(self._buf) >= CHUNK:
            self._flush()

    def write_code(self, code: str):
        """Write a '0'/'1' code string. Long codes are split into 32-bit pieces."""
        for i in range(0, len(code), MAX_BITS):
            piece = code[i:i + MAX_BITS]
            self.write_bits(len(piece), int(piece, 2))

    def _flush(self):
        self._f.write(self._buf)
        self._buf.clear()

    def close(self):
        """Pad remaining bits with zeros and flush."""
        if self.closed:
            return
        if self._nbits > 0:
            self._buf.append((self._cur << (8 - self._nbits)) & 0xFF)
            self._cur = 0
            self._nbits = 0
        self._flush()
        if hasattr(self._f, "flush"):
            self._f.flush()
        self.closed = True

    def getvalue(self) -> bytes:
        """Bytes written so far, for writers backed by the default buffer."""
        if not isinstance(self._f, io.BytesIO):
            raise TypeError("getvalue() needs an in-memory BitWriter")
        return self._f.getvalue() + bytes(self._buf)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


class BitReader:
    """
    MSB-first bit source over bytes or a seekable binary file object.
    read_bits() returns None once fewer than the requested bits remain.
    """

    def __init__(self, source):
        if isinstance(source, (bytes, bytearray, memoryview)):
            source = io.BytesIO(bytes(source))
        self._f = source
        self._buf = b""
        self.i = 0
        self._cur = 0
        self._nbits = 0  # buffered bits in _cur
        self.bits_read = 0

    def _fill(self, nbits: int) -> bool:
        while self._nbits < nbits:
            if self.i >= len(self._buf):
                self._buf = self._f.read(CHUNK)
                self.i = 0
                if not self._buf:
                    return False
            self._cur = (self._cur << 8) | self._buf[self.i]
            self.i += 1
            self._nbits += 8
        return True

    def read_bits(self, nbits: int):
        _check_width(nbits)
        if not self._fill(nbits):
            return None
        self._nbits -= nbits
        val = self._cur >> self._nbits
        self._cur &= (1 << self._nbits) - 1
        self.bits_read += nbits
        return val

    def read_bit(self):
        return self.read_bits(1)

    def reset(self):
        """Rewind to the first bit of the source."""
        self._f.seek(0)
        self._buf = b""
        self.i = 0
        self._cur = 0
        self._nbits = 0
        self.bits_read = 0

    def close(self):
        self._f.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
