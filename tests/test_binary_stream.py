from io import BytesIO

import pytest

from r1cs_wtns_py.errors import TruncatedInputError
from r1cs_wtns_py.io.binary_stream import BinaryStream


def test_reads_little_endian_integers():
    stream = BinaryStream(bytes.fromhex("01000000" "0200000000000000"))
    assert stream.read_uint32() == 1
    assert stream.read_uint64() == 2
    assert stream.remaining == 0


def test_short_read_raises_truncated():
    stream = BinaryStream(b"\x01\x02")
    with pytest.raises(TruncatedInputError, match="needed 4 bytes at offset 0, got 2"):
        stream.read_uint32()


def test_skip_past_end_raises_truncated():
    stream = BinaryStream(b"\x00" * 8)
    stream.skip(4)
    assert stream.position == 4
    with pytest.raises(TruncatedInputError):
        stream.skip(5)


def test_write_then_get_data():
    stream = BinaryStream()
    stream.write_uint32(0xDEADBEEF)
    stream.write_uint64_array([1, 2])
    assert stream.get_data() == bytes.fromhex("efbeadde") + (1).to_bytes(8, 'little') + (2).to_bytes(8, 'little')


def test_wraps_existing_stream_at_its_position():
    raw = BytesIO(b"skip" + (7).to_bytes(4, 'little'))
    raw.seek(4)
    stream = BinaryStream(raw)
    assert stream.remaining == 4
    assert stream.read_uint32() == 7


def test_non_seekable_source_is_buffered():
    class Pipe:
        def __init__(self, data):
            self._data = data

        def seekable(self):
            return False

        def read(self, n=-1):
            data, self._data = self._data, b''
            return data

    stream = BinaryStream(Pipe((9).to_bytes(8, 'little')))
    assert stream.read_uint64_array(1) == [9]
