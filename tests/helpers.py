import io
import struct

from mu_exporter.core.binary_writer import BinaryWriter


class MuReader:
    """Sequential reader for the little-endian record stream"""

    def __init__(self, data: bytes):
        self.data = data
        self.pos = 0

    @classmethod
    def from_file(cls, path):
        with open(path, "rb") as f:
            return cls(f.read())

    def _take(self, n):
        if self.pos + n > len(self.data):
            raise EOFError(f"need {n} bytes at {self.pos}, have {len(self.data) - self.pos}")
        chunk = self.data[self.pos:self.pos + n]
        self.pos += n
        return chunk

    def int(self):
        return struct.unpack("<i", self._take(4))[0]

    def float(self):
        return struct.unpack("<f", self._take(4))[0]

    def floats(self, n):
        return struct.unpack(f"<{n}f", self._take(4 * n))

    def bool(self):
        value = self._take(1)[0]
        assert value in (0, 1)
        return value == 1

    def length(self):
        result, shift = 0, 0
        while True:
            b = self._take(1)[0]
            result |= (b & 0x7F) << shift
            if not b & 0x80:
                return result
            shift += 7

    def string(self):
        return self._take(self.length()).decode("utf-8")

    def raw(self, n):
        return self._take(n)

    @property
    def remaining(self):
        return len(self.data) - self.pos

    def at_end(self):
        return self.pos == len(self.data)


def memory_writer():
    buf = io.BytesIO()
    return buf, BinaryWriter(buf)
