import pytest

from r1cs_wtns_py.errors import TruncatedInputError
from r1cs_wtns_py.formats.field_element import (
    FieldElement, BN254_PRIME, read_field_element, write_field_element,
)
from r1cs_wtns_py.io.binary_stream import BinaryStream

from builders import PRIME


def test_equality_and_hash_use_raw_bytes():
    a = FieldElement(b"\x06" + b"\x00" * 31)
    b = FieldElement(bytearray(b"\x06" + b"\x00" * 31))
    assert a == b
    assert hash(a) == hash(b)
    assert a != FieldElement(b"\x06" + b"\x00" * 30)


def test_is_immutable():
    element = FieldElement(b"\x01")
    with pytest.raises(AttributeError):
        element.data = b"\x02"


def test_int_conversion_is_little_endian():
    assert FieldElement.from_int(6, 4).data == b"\x06\x00\x00\x00"
    assert FieldElement(PRIME).to_int() == BN254_PRIME


def test_from_int_rejects_values_that_do_not_fit():
    with pytest.raises(ValueError):
        FieldElement.from_int(1 << 32, 4)
    with pytest.raises(ValueError):
        FieldElement.from_int(-1, 4)


def test_read_requires_full_width():
    stream = BinaryStream(b"\x01" * 31)
    with pytest.raises(TruncatedInputError):
        read_field_element(stream, 32)


def test_read_write_exact_bytes():
    stream = BinaryStream()
    write_field_element(stream, FieldElement(PRIME))
    assert stream.get_data() == PRIME
    stream.position = 0
    assert read_field_element(stream, 32) == FieldElement(PRIME)
