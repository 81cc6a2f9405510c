"""
WTNS (witness) format structure definitions.

Layout (all integers little-endian):
    "wtns" | version (u32) | section count (u32) | Header | Witness
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..errors import FieldWidthMismatchError, CountMismatchError
from ..io.sections import SectionType
from .field_element import FieldElement


# WTNS Magic and versions
WTNS_MAGIC = b"wtns"
WTNS_MAX_VERSION = 2
WTNS_DEFAULT_VERSION = 2

WTNS_SECTION_COUNT = 2


class WtnsSectionType(SectionType):
    """WTNS section IDs."""
    HEADER = 1
    WITNESS = 2
    UNKNOWN = 0xFFFFFFFF


def wtns_header_size(field_size: int) -> int:
    """field_size (u32) + prime + witness_len (u32)."""
    return 4 + field_size + 4


@dataclass
class WtnsHeader:
    """WTNS header section."""
    field_size: int
    prime: FieldElement
    witness_len: int = 0


@dataclass
class WtnsFile:
    """
    A parsed WTNS document.

    Attributes:
        version: Container version, preserved across a round trip
        header: Field width, prime and witness length
        witness: One field element per wire, in wire order

    Raises:
        FieldWidthMismatchError: If the prime or a witness value is not
            `header.field_size` bytes long
        CountMismatchError: If `header.witness_len` differs from the
            number of witness values
    """
    version: int
    header: WtnsHeader
    witness: List[FieldElement] = field(default_factory=list)

    def __post_init__(self):
        field_size = self.header.field_size
        if len(self.header.prime) != field_size:
            raise FieldWidthMismatchError(
                f"Prime is {len(self.header.prime)} bytes, expected {field_size}"
            )
        for index, value in enumerate(self.witness):
            if len(value) != field_size:
                raise FieldWidthMismatchError(
                    f"Witness value {index} is {len(value)} bytes, expected {field_size}"
                )
        if len(self.witness) != self.header.witness_len:
            raise CountMismatchError(
                f"Header declares {self.header.witness_len} witness values, "
                f"got {len(self.witness)}"
            )

    @property
    def field_size(self) -> int:
        return self.header.field_size

    @classmethod
    def from_values(
        cls,
        values: Sequence[FieldElement],
        prime: FieldElement,
        field_size: Optional[int] = None,
        version: int = WTNS_DEFAULT_VERSION
    ) -> 'WtnsFile':
        """
        Build a witness document directly from in-memory values.

        Args:
            values: Witness values in wire order
            prime: Field prime, `field_size` bytes wide
            field_size: Element width; defaults to the prime's width
            version: Container version to record

        Returns:
            A document whose witness_len is len(values)
        """
        if field_size is None:
            field_size = len(prime)
        return cls(
            version=version,
            header=WtnsHeader(field_size=field_size, prime=prime, witness_len=len(values)),
            witness=list(values),
        )

    @classmethod
    def read(cls, source, field_size: int) -> 'WtnsFile':
        """Parse a WTNS document from bytes or a binary stream."""
        from .wtns import read_wtns
        return read_wtns(source, field_size)

    @classmethod
    def from_bytes(cls, data: bytes, field_size: int) -> 'WtnsFile':
        return cls.read(data, field_size)

    @classmethod
    def load(cls, path, field_size: int) -> 'WtnsFile':
        """Parse a WTNS document from a file on disk."""
        with open(path, 'rb') as f:
            return cls.read(f, field_size)

    def to_bytes(self) -> bytes:
        from .wtns import write_wtns
        return write_wtns(self)

    def write(self, stream) -> None:
        """Serialize into a writable binary stream."""
        stream.write(self.to_bytes())

    def save(self, path) -> None:
        with open(path, 'wb') as f:
            self.write(f)
