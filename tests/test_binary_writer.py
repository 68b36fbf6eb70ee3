import io

import pytest

from mu_exporter.core.binary_writer import BinaryWriter, ModelFileWriter, encode_7bit_length
from mu_exporter.core.schema import EntryType

from helpers import MuReader


@pytest.mark.parametrize("n, expected", [
    (0, b"\x00"),
    (5, b"\x05"),
    (127, b"\x7f"),
    (128, b"\x80\x01"),
    (300, b"\xac\x02"),
    (16384, b"\x80\x80\x01"),
])
def test_7bit_length(n, expected):
    assert encode_7bit_length(n) == expected


def test_7bit_length_rejects_negative():
    with pytest.raises(ValueError):
        encode_7bit_length(-1)


def test_scalars_are_little_endian():
    buf = io.BytesIO()
    w = BinaryWriter(buf)
    w.write_int(1)
    w.write_int(-1)
    w.write_float(1.0)
    w.write_bool(True)
    w.write_bool(False)
    assert buf.getvalue() == (b"\x01\x00\x00\x00" b"\xff\xff\xff\xff"
                              b"\x00\x00\x80\x3f" b"\x01" b"\x00")


def test_string_prefix_counts_utf8_bytes():
    buf = io.BytesIO()
    BinaryWriter(buf).write_string("é")
    assert buf.getvalue() == b"\x02\xc3\xa9"


def test_long_string_uses_two_byte_prefix():
    buf = io.BytesIO()
    BinaryWriter(buf).write_string("a" * 200)
    data = buf.getvalue()
    assert data[:2] == b"\xc8\x01"
    assert len(data) == 202


def test_empty_string():
    buf = io.BytesIO()
    BinaryWriter(buf).write_string("")
    assert buf.getvalue() == b"\x00"


def test_vectors_and_entry():
    buf = io.BytesIO()
    w = BinaryWriter(buf)
    w.write_entry(EntryType.TAG_AND_LAYER)
    w.write_vector2((1, 2))
    w.write_vector3((3, 4, 5))
    w.write_quaternion((0, 0, 0, 1))
    w.write_color((0.5, 0.5, 0.5, 1))

    r = MuReader(buf.getvalue())
    assert r.int() == 24
    assert r.floats(2) == (1.0, 2.0)
    assert r.floats(3) == (3.0, 4.0, 5.0)
    assert r.floats(4) == (0.0, 0.0, 0.0, 1.0)
    assert r.floats(4) == (0.5, 0.5, 0.5, 1.0)
    assert r.at_end()


def test_model_file_header_and_close(tmp_path):
    path = str(tmp_path / "model.mu")
    mfw = ModelFileWriter()
    with mfw.open(path):
        mfw.write_header("Part")
        assert not mfw.closed
    assert mfw.closed

    r = MuReader.from_file(path)
    assert r.int() == 76543
    assert r.int() == 0
    assert r.string() == "Part"
    assert r.at_end()


def test_model_file_closed_when_body_raises(tmp_path):
    path = str(tmp_path / "model.mu")
    mfw = ModelFileWriter()
    with pytest.raises(RuntimeError):
        with mfw.open(path):
            mfw.write_header("Part")
            raise RuntimeError("boom")
    assert mfw.closed
    assert MuReader.from_file(path).int() == 76543


def test_header_requires_open_stream():
    with pytest.raises(RuntimeError):
        ModelFileWriter().write_header("Part")
