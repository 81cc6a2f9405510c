"""
Fixed-width field element codec.

A field element is carried as an opaque little-endian byte buffer whose width
is fixed per document. Values are never reduced or otherwise interpreted.
"""

from dataclasses import dataclass

from ..errors import FieldWidthMismatchError
from ..io.binary_stream import BinaryStream


# BN254 scalar field, the default field of circom/snarkjs tooling
BN254_PRIME = 21888242871839275222246405745257275088548364400416034343698204186575808495617

DEFAULT_FIELD_SIZE = 32


@dataclass(frozen=True)
class FieldElement:
    """
    An immutable fixed-length byte sequence holding one field value.

    Equality and hashing operate on the raw bytes.
    """
    data: bytes

    def __post_init__(self):
        if not isinstance(self.data, bytes):
            object.__setattr__(self, 'data', bytes(self.data))

    def __len__(self) -> int:
        return len(self.data)

    def __bytes__(self) -> bytes:
        return self.data

    def __repr__(self) -> str:
        return f"FieldElement({self.data.hex()})"

    @classmethod
    def from_int(cls, value: int, size: int = DEFAULT_FIELD_SIZE) -> 'FieldElement':
        """
        Encode a non-negative integer as a `size`-byte little-endian element.

        Raises:
            ValueError: If the value is negative or does not fit in `size` bytes
        """
        if value < 0:
            raise ValueError(f"Field element must be non-negative, got {value}")
        try:
            return cls(value.to_bytes(size, 'little'))
        except OverflowError:
            raise ValueError(f"Value does not fit in a {size}-byte field element") from None

    def to_int(self) -> int:
        """Little-endian magnitude of the element."""
        return int.from_bytes(self.data, 'little')


def read_field_element(stream: BinaryStream, size: int) -> FieldElement:
    """Read exactly `size` bytes as one field element."""
    return FieldElement(stream.read_bytes(size))


def write_field_element(stream: BinaryStream, element: FieldElement) -> None:
    """Write the element's raw bytes."""
    stream.write_bytes(element.data)


def check_field_size(field_size: int) -> int:
    """
    Validate a caller-supplied element width.

    Raises:
        FieldWidthMismatchError: If the width is not a positive integer
    """
    if field_size <= 0:
        raise FieldWidthMismatchError(f"Field size must be positive, got {field_size}")
    return field_size
