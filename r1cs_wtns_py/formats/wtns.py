"""
WTNS container codec.

Unlike R1CS, a witness file accepts any version up to WTNS_MAX_VERSION and
validates both the declared section count and the declared section sizes.
"""

from typing import List

from ..errors import (
    BadMagicError, UnsupportedVersionError, FieldWidthMismatchError,
    SectionSizeMismatchError, TooManySectionsError,
)
from ..io.binary_stream import BinaryStream, Source
from ..io.sections import expect_section, write_section_header
from .field_element import (
    FieldElement, check_field_size, read_field_element, write_field_element,
)
from .wtns_structures import (
    WtnsFile, WtnsHeader, WtnsSectionType,
    WTNS_MAGIC, WTNS_MAX_VERSION, WTNS_SECTION_COUNT,
    wtns_header_size,
)


class WtnsReader(BinaryStream):
    """
    Parser for .wtns witness files.

    Attributes:
        field_size: Expected field element width (bytes)
        version: Container version found in the file
        document: The parsed WtnsFile
    """

    def __init__(self, data: Source, field_size: int):
        """
        Initialize the WTNS parser and decode the whole document.

        Args:
            data: Raw bytes or a binary stream positioned at the magic
            field_size: Width every field element must have

        Raises:
            BadMagicError: If the file does not start with "wtns"
            UnsupportedVersionError: If the version exceeds WTNS_MAX_VERSION
            TooManySectionsError: If more than two sections are declared
            SectionSizeMismatchError: If a section length is not the expected one
            FieldWidthMismatchError: If field_size is not positive or the header
                declares another width
            TruncatedInputError: If the input ends early
        """
        super().__init__(data)
        self.field_size = check_field_size(field_size)

        magic = self.read_bytes(4)
        if magic != WTNS_MAGIC:
            raise BadMagicError(f"Invalid WTNS magic: {magic!r}")

        self.version = self.read_uint32()
        if self.version > WTNS_MAX_VERSION:
            raise UnsupportedVersionError(f"Unsupported WTNS version: {self.version}")

        num_sections = self.read_uint32()
        if num_sections > WTNS_SECTION_COUNT:
            raise TooManySectionsError(
                f"WTNS files with {num_sections} sections are not supported "
                f"(at most {WTNS_SECTION_COUNT})"
            )

        header = self._read_header()
        witness = self._read_witness(header)

        self.document = WtnsFile(version=self.version, header=header, witness=witness)

    def _read_header(self) -> WtnsHeader:
        section = expect_section(self, WtnsSectionType, WtnsSectionType.HEADER)
        expected_size = wtns_header_size(self.field_size)
        if section.size != expected_size:
            raise SectionSizeMismatchError(
                f"WTNS header section is {section.size} bytes, expected {expected_size}"
            )

        field_size = self.read_uint32()
        if field_size != self.field_size:
            raise FieldWidthMismatchError(
                f"Header declares {field_size}-byte field elements, expected {self.field_size}"
            )

        prime = read_field_element(self, self.field_size)
        witness_len = self.read_uint32()

        return WtnsHeader(field_size=field_size, prime=prime, witness_len=witness_len)

    def _read_witness(self, header: WtnsHeader) -> List[FieldElement]:
        section = expect_section(self, WtnsSectionType, WtnsSectionType.WITNESS)
        expected_size = header.witness_len * self.field_size
        if section.size != expected_size:
            raise SectionSizeMismatchError(
                f"WTNS witness section is {section.size} bytes, expected {expected_size} "
                f"({header.witness_len} x {self.field_size})"
            )

        return [read_field_element(self, self.field_size) for _ in range(header.witness_len)]


class WtnsWriter(BinaryStream):
    """Serializer for WtnsFile documents."""

    def __init__(self, document: WtnsFile):
        super().__init__()
        self.document = document

        self.write_bytes(WTNS_MAGIC)
        self.write_uint32(document.version)
        self.write_uint32(WTNS_SECTION_COUNT)

        self._write_header()
        self._write_witness()

    def _write_header(self) -> None:
        header = self.document.header
        write_section_header(self, WtnsSectionType.HEADER, wtns_header_size(header.field_size))
        self.write_uint32(header.field_size)
        write_field_element(self, header.prime)
        self.write_uint32(header.witness_len)

    def _write_witness(self) -> None:
        witness = self.document.witness
        size = len(witness) * self.document.field_size

        write_section_header(self, WtnsSectionType.WITNESS, size)
        for value in witness:
            write_field_element(self, value)


def read_wtns(source: Source, field_size: int) -> WtnsFile:
    """
    Parse a WTNS document.

    Args:
        source: Raw bytes or a binary stream
        field_size: Expected field element width in bytes

    Returns:
        The parsed document
    """
    return WtnsReader(source, field_size).document


def write_wtns(document: WtnsFile) -> bytes:
    """Serialize a WTNS document to bytes."""
    return WtnsWriter(document).get_data()
