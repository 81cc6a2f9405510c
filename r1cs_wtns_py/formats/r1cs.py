"""
R1CS container codec.

Reading is a straight pipeline: magic, version, section count, then the
Header, Constraints and WireMap sections in that order. Any failure aborts
the whole parse; only unrecognized section tags are tolerated (skipped).
"""

from typing import List

from ..errors import BadMagicError, UnsupportedVersionError, FieldWidthMismatchError
from ..io.binary_stream import BinaryStream, Source
from ..io.sections import expect_section, write_section_header
from .field_element import check_field_size, read_field_element, write_field_element
from .r1cs_structures import (
    R1csFile, R1csHeader, Constraint, Term, LinearCombination,
    R1csSectionType, R1CS_MAGIC, R1CS_VERSION, R1CS_SECTION_COUNT,
    r1cs_header_size,
)


class R1csReader(BinaryStream):
    """
    Parser for .r1cs constraint system files.

    Attributes:
        field_size: Expected field element width (bytes)
        num_sections: Section count declared by the file (advisory only)
        document: The parsed R1csFile
    """

    def __init__(self, data: Source, field_size: int):
        """
        Initialize the R1CS parser and decode the whole document.

        Args:
            data: Raw bytes or a binary stream positioned at the magic
            field_size: Width every field element must have

        Raises:
            BadMagicError: If the file does not start with "r1cs"
            UnsupportedVersionError: If the version is not R1CS_VERSION
            FieldWidthMismatchError: If field_size is not positive or the header
                declares another width
            UnexpectedSectionError: If sections appear out of order
            TruncatedInputError: If the input ends early
        """
        super().__init__(data)
        self.field_size = check_field_size(field_size)

        magic = self.read_bytes(4)
        if magic != R1CS_MAGIC:
            raise BadMagicError(f"Invalid R1CS magic: {magic!r}")

        version = self.read_uint32()
        if version != R1CS_VERSION:
            raise UnsupportedVersionError(f"Unsupported R1CS version: {version}")

        # Sections are read by need, so the declared count is not enforced
        self.num_sections = self.read_uint32()

        header = self._read_header()
        constraints = self._read_constraints(header.n_constraints)
        wire_map = self._read_wire_map()

        self.document = R1csFile(
            header=header,
            constraints=constraints,
            wire_map=wire_map,
            field_size=field_size,
        )

    def _read_header(self) -> R1csHeader:
        expect_section(self, R1csSectionType, R1csSectionType.HEADER)

        field_size = self.read_uint32()
        if field_size != self.field_size:
            raise FieldWidthMismatchError(
                f"Header declares {field_size}-byte field elements, expected {self.field_size}"
            )

        prime = read_field_element(self, self.field_size)
        n_wires = self.read_uint32()
        n_pub_out = self.read_uint32()
        n_pub_in = self.read_uint32()
        n_prvt_in = self.read_uint32()
        n_labels = self.read_uint64()
        n_constraints = self.read_uint32()

        return R1csHeader(
            prime=prime,
            n_wires=n_wires,
            n_pub_out=n_pub_out,
            n_pub_in=n_pub_in,
            n_prvt_in=n_prvt_in,
            n_labels=n_labels,
            n_constraints=n_constraints,
        )

    def _read_constraints(self, n_constraints: int) -> List[Constraint]:
        # The header count drives the loop; the section length is not consulted
        expect_section(self, R1csSectionType, R1csSectionType.CONSTRAINT)
        return [self._read_constraint() for _ in range(n_constraints)]

    def _read_constraint(self) -> Constraint:
        a = self._read_combination()
        b = self._read_combination()
        c = self._read_combination()
        return Constraint(a, b, c)

    def _read_combination(self) -> LinearCombination:
        count = self.read_uint32()
        terms = []
        for _ in range(count):
            wire_id = self.read_uint32()
            coefficient = read_field_element(self, self.field_size)
            terms.append(Term(wire_id, coefficient))
        return terms

    def _read_wire_map(self) -> List[int]:
        # Unlike constraints, the entry count comes from the section length
        section = expect_section(self, R1csSectionType, R1csSectionType.WIRE2LABELID_MAP)
        return self.read_uint64_array(section.size // 8)


class R1csWriter(BinaryStream):
    """Serializer for R1csFile documents."""

    def __init__(self, document: R1csFile):
        super().__init__()
        self.document = document

        self.write_bytes(R1CS_MAGIC)
        self.write_uint32(R1CS_VERSION)
        self.write_uint32(R1CS_SECTION_COUNT)

        self._write_header()
        self._write_constraints()
        self._write_wire_map()

    def _write_header(self) -> None:
        field_size = self.document.field_size
        header = self.document.header

        write_section_header(self, R1csSectionType.HEADER, r1cs_header_size(field_size))
        self.write_uint32(field_size)
        write_field_element(self, header.prime)
        self.write_uint32(header.n_wires)
        self.write_uint32(header.n_pub_out)
        self.write_uint32(header.n_pub_in)
        self.write_uint32(header.n_prvt_in)
        self.write_uint64(header.n_labels)
        self.write_uint32(header.n_constraints)

    def _write_constraints(self) -> None:
        constraints = self.document.constraints
        size = sum(c.size() for c in constraints)

        write_section_header(self, R1csSectionType.CONSTRAINT, size)
        for constraint in constraints:
            for combination in constraint.combinations:
                self.write_uint32(len(combination))
                for term in combination:
                    self.write_uint32(term.wire_id)
                    write_field_element(self, term.coefficient)

    def _write_wire_map(self) -> None:
        wire_map = self.document.wire_map
        write_section_header(self, R1csSectionType.WIRE2LABELID_MAP, len(wire_map) * 8)
        self.write_uint64_array(wire_map)


def read_r1cs(source: Source, field_size: int) -> R1csFile:
    """
    Parse an R1CS document.

    Args:
        source: Raw bytes or a binary stream
        field_size: Expected field element width in bytes

    Returns:
        The parsed document
    """
    return R1csReader(source, field_size).document


def write_r1cs(document: R1csFile) -> bytes:
    """Serialize an R1CS document to bytes."""
    return R1csWriter(document).get_data()
