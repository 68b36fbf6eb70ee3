# -*- coding: utf-8 -*-
"""
Mu Exporter - Binary Writer

- Centralizes binary writing (little-endian, 32-bit ints/floats, 1-byte bools)
- Strings are written with a 7-bit variable-length byte-count prefix followed by UTF-8
- Records are (tag, payload) pairs appended in order; no back-patching, counts precede data
- ModelFileWriter owns the output stream for one export and always closes it
"""

from __future__ import annotations
import struct
from dataclasses import dataclass
from typing import BinaryIO, Optional, Sequence

from .schema import EntryType
from ..config.constants import FILE_TYPE_MODEL_BINARY, FILE_VERSION


_INT = struct.Struct('<i')
_FLOAT = struct.Struct('<f')


def encode_7bit_length(n: int) -> bytes:
    """
    Variable-length unsigned integer: 7 bits per byte, high bit set while more bytes follow.
    """
    if n < 0:
        raise ValueError(f"length must be non-negative, got {n}")
    out = bytearray()
    while n >= 0x80:
        out.append((n & 0x7F) | 0x80)
        n >>= 7
    out.append(n)
    return bytes(out)


# =========================
# Scalar / vector writer
# =========================

@dataclass
class BinaryWriter:
    """
    Minimalistic binary writer over a byte stream.
    """
    stream: BinaryIO

    # ---- scalar writers ----
    def write_int(self, v: int) -> None:
        self.stream.write(_INT.pack(int(v)))

    def write_float(self, v: float) -> None:
        self.stream.write(_FLOAT.pack(float(v)))

    def write_bool(self, v: bool) -> None:
        self.stream.write(b'\x01' if v else b'\x00')

    def write_string(self, s: str) -> None:
        data = s.encode('utf-8')
        self.stream.write(encode_7bit_length(len(data)))
        self.stream.write(data)

    def write_bytes(self, data: bytes) -> None:
        self.stream.write(data)

    # ---- record tag ----
    def write_entry(self, entry: EntryType) -> None:
        self.write_int(int(entry))

    # ---- vector writers ----
    def write_floats(self, values: Sequence[float]) -> None:
        self.stream.write(struct.pack(f'<{len(values)}f', *(float(v) for v in values)))

    def write_vector2(self, v: Sequence[float]) -> None:
        self.write_floats((v[0], v[1]))

    def write_vector3(self, v: Sequence[float]) -> None:
        self.write_floats((v[0], v[1], v[2]))

    def write_quaternion(self, q: Sequence[float]) -> None:
        """(x, y, z, w)"""
        self.write_floats((q[0], q[1], q[2], q[3]))

    def write_color(self, c: Sequence[float]) -> None:
        """(r, g, b, a)"""
        self.write_floats((c[0], c[1], c[2], c[3]))

    def flush(self) -> None:
        self.stream.flush()


# =========================
# File framing
# =========================

class ModelFileWriter:
    """
    Manages the model file stream for one export:
    - open(path): returns context manager; opens the file and exposes `binw`
    - write_header(model_name): magic, version, model name
    - The stream is flushed and closed on exit, also when an exception propagates
    """

    def __init__(self):
        self._stream: Optional[BinaryIO] = None
        self.binw: Optional[BinaryWriter] = None
        self.path: Optional[str] = None

    # ---- file management ----
    def open(self, path: str) -> '_Context':
        """
        Usage:
          with ModelFileWriter().open(path) as mfw:
              mfw.write_header("Part")
              ...
        Opening failures propagate to the caller before anything is written.
        """
        return _Context(self, path)

    def _open_stream(self, path: str) -> None:
        self._stream = open(path, 'wb')
        self.binw = BinaryWriter(self._stream)
        self.path = path

    def _close_stream(self) -> None:
        if self._stream:
            try:
                self._stream.flush()
            finally:
                self._stream.close()
        self._stream = None
        self.binw = None

    @property
    def closed(self) -> bool:
        return self._stream is None

    # ---- header ----
    def write_header(self, model_name: str) -> None:
        if self.binw is None:
            raise RuntimeError("Stream not open. Use 'with ModelFileWriter().open(path) as mfw:'")
        self.binw.write_int(FILE_TYPE_MODEL_BINARY)
        self.binw.write_int(FILE_VERSION)
        self.binw.write_string(model_name)


class _Context:
    def __init__(self, outer: ModelFileWriter, target_path: str):
        self._outer = outer
        self._path = target_path

    def __enter__(self) -> ModelFileWriter:
        self._outer._open_stream(self._path)
        return self._outer

    def __exit__(self, exc_type, exc_val, exc_tb):
        self._outer._close_stream()
        return False
